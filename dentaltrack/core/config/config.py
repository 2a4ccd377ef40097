"""
Configuration centralisée DentalTrack
Charge les variables depuis le fichier .env
"""
import json
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration de l'application DentalTrack.

    Les valeurs sont chargées depuis les variables d'environnement
    ou le fichier .env à la racine du projet.

    Usage:
        from dentaltrack.core.config import settings
        print(settings.DATABASE_URL)
    """

    # === Environnement ===
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    APP_NAME: str = "DentalTrack"
    APP_VERSION: str = "0.1.0"

    # === Base de données ===
    # SQLite par défaut, PostgreSQL en production (extra "postgres")
    DATABASE_URL: str = "sqlite:///./dentaltrack.db"
    DATABASE_ECHO: bool = False

    # === JWT (Authentification) ===
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    TOKEN_ISSUER: str = "dentaltrack"

    # === CORS ===
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "https://localhost:3001"]

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    # === Données de démonstration ===
    SEED_DATABASE: bool = False

    # === Configuration Pydantic ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # === Validators ===

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS depuis une string JSON ou une liste"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # Si c'est une simple string, la mettre dans une liste
                return [v]
        return v

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Valide que l'environnement est valide"""
        allowed = ['development', 'staging', 'production', 'test']
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT doit être parmi : {allowed}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        allowed = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL doit être parmi : {allowed}")
        return v.upper()

    # === Properties ===

    @property
    def is_development(self) -> bool:
        """Retourne True si en mode développement"""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Retourne True si en mode production"""
        return self.ENVIRONMENT == "production"

    @property
    def is_test(self) -> bool:
        """Retourne True si en mode test"""
        return self.ENVIRONMENT == "test"

    @property
    def is_sqlite(self) -> bool:
        """Retourne True si la base configurée est SQLite"""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Retourne l'instance des settings (mise en cache).

    Utilise lru_cache pour ne charger les settings qu'une seule fois.
    """
    return Settings()


# Instance globale pour import facile
settings = get_settings()
