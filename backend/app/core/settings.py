# backend/app/core/settings.py
# Configuration de l'application (env + .env) via pydantic-settings.

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict
from rich import print


class Settings(BaseSettings):
    # === App settings ===
    app_name: str = "EcoTrack"
    environment: str = "development"  # or "production"
    api_version: str = "0.1.0"

    # === MongoDB ===
    mongodb_user: str = ""
    mongodb_password: str = ""
    mongodb_uri_tpl: str = "mongodb://localhost:27017"
    mongodb_db: str = "ecoTrackDB"
    # Transactions multi-documents (nécessite un replica set)
    mongodb_transactions: bool = False

    # === IDENTITY ===
    identity_header: str = "X-User-Email"

    # === HTTP ===
    cors_origins: list[str] = ["http://localhost:5173"]
    one_mb: int = 1024 * 1024
    max_body_mb: int = 1

    # === LOGS ===
    logs_dir: str = "logs"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def mongodb_uri(self) -> str:
        """Build the full MongoDB URI from template."""
        return self.mongodb_uri_tpl.replace(
            "[[MONGODB_USER]]", quote_plus(self.mongodb_user)
        ).replace("[[MONGODB_PASSWORD]]", quote_plus(self.mongodb_password))

    @property
    def max_body_bytes(self) -> int:
        return self.max_body_mb * self.one_mb


@lru_cache
def get_settings() -> Settings:
    """Retourne l'instance unique des settings.

    Description:
        Construit `Settings` au premier appel (lecture env + `.env`) puis renvoie
        toujours la même instance.

    Returns:
        Settings: Configuration chargée.
    """
    settings = Settings()
    print(f"--- Settings loaded ({settings.environment}) ---")
    return settings
