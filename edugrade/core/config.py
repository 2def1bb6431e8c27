"""Configuración de la aplicación mediante variables de entorno."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración cargada desde .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "EduGrade API"
    debug: bool = False
    log_level: str = "INFO"

    # JWT
    jwt_secret_key: str = "cambiar-en-produccion-clave-secreta-muy-segura"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24  # 24 horas

    # PostgreSQL
    postgres_host: str = "127.0.0.1"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "edugrade_bd"

    # URL completa opcional (ej. sqlite+aiosqlite:///./edugrade.db en desarrollo)
    database_url: str | None = None

    # Calificaciones
    umbral_aprobacion: float = 6.0
    longitud_minima_contrasena: int = 6

    @property
    def database_url_async(self) -> str:
        """URL para SQLAlchemy con driver asyncpg (uso en la app)."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
