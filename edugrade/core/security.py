"""Contraseñas (bcrypt) y tokens de sesión (JWT)."""
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from edugrade.core.config import settings

# Un token sin alguno de estos claims no identifica una sesión
CLAIMS_SESION = ["exp", "iat", "sub", "jti"]


def hash_password(contrasena: str) -> str:
    return bcrypt.hashpw(contrasena.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(contrasena: str, password_hash: str | None) -> bool:
    """False también cuando el hash guardado no tiene formato bcrypt."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(contrasena.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(cuenta_id: str, jti: str, **claims: Any) -> str:
    """JWT de una sesión: `sub` es la cuenta y `jti` la sesión registrada por el proveedor."""
    emitido = datetime.now(timezone.utc)
    payload = {
        **claims,
        "sub": cuenta_id,
        "jti": jti,
        "iat": emitido,
        "exp": emitido + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Payload de un token de sesión; None si está vencido, alterado o incompleto."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": CLAIMS_SESION},
        )
    except jwt.PyJWTError:
        return None
