"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with ANGLETRACK_ prefix.

Learn: Settings is built once in create_app() and handed to the token
issuer, stores and upload service through app.state. Nothing reads a
module-level singleton, so tests can build an app per tmp directory.
"""

from pathlib import Path
from typing import Union

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """All app configuration. Set via ANGLETRACK_* env vars."""

    # Storage — two JSON documents plus an upload directory
    data_dir: Path = Path("data")
    users_file: str = "users.json"
    angles_file: str = "angleData.json"
    upload_dir: Path = Path("uploads")

    # Uploads
    allowed_image_extensions: list[str] = [".jpg", ".jpeg", ".png", ".gif", ".webp"]
    max_upload_bytes: int = 10 * 1024 * 1024

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 12

    # Goals
    default_goal: Union[int, float] = 170

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    model_config = {"env_prefix": "ANGLETRACK_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure sensitive defaults are changed in non-development environments."""
        if (
            self.environment != "development"
            and self.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "ANGLETRACK_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file

    @property
    def angles_path(self) -> Path:
        return self.data_dir / self.angles_file
