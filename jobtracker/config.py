"""
Configuration Management

Centralized configuration management using environment variables
with proper validation and type safety.
"""

import os
import tempfile
from typing import List, Optional
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env in the project root (resolve to absolute path)
_project_root = Path(__file__).resolve().parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=str(_env_path))
else:
    # Also load from current working directory so "python backend_server.py" picks up .env
    load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass
class GeminiConfig:
    """Google Gemini LLM configuration"""
    api_key: str
    model: str = "gemini-1.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 60.0
    temperature: Optional[float] = None


@dataclass
class MongoConfig:
    """MongoDB configuration"""
    uri: str
    db_name: Optional[str] = None  # Database name; if unset, uses 'jobtracker'


@dataclass
class AuthConfig:
    """JWT / password reset configuration"""
    jwt_secret: str
    jwt_refresh_secret: str
    jwt_expiration_hours: int = 1
    jwt_refresh_expiration_days: int = 7
    password_reset_expiration_minutes: int = 60


@dataclass
class UploadConfig:
    """Resume upload handling"""
    upload_dir: str = field(default_factory=tempfile.gettempdir)
    max_upload_size_mb: int = 5
    # Resume-only interview questions unless this is switched on
    interview_require_job_description: bool = False
    interview_question_count: int = 10

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@dataclass
class ServerConfig:
    """HTTP server configuration"""
    host: str
    port: int
    frontend_url: str = ""
    cors_origins: List[str] = field(default_factory=list)


@dataclass
class Config:
    """Main application configuration"""

    # AI service (Google Gemini)
    gemini: GeminiConfig

    # MongoDB configuration
    mongo: MongoConfig

    # Auth / JWT
    auth: AuthConfig

    # Uploads and analysis behaviour
    upload: UploadConfig

    # Server configuration
    server: ServerConfig

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Configured Config instance

        Raises:
            ValueError: If required environment variables are missing
        """
        # Gemini credentials must be present before the server accepts requests
        gemini_api_key = os.getenv("GEMINI_API_KEY")
        if not gemini_api_key or not gemini_api_key.strip():
            raise ValueError("GEMINI_API_KEY environment variable is required")

        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        jwt_secret = os.getenv("JWT_SECRET_KEY")
        if not jwt_secret or not jwt_secret.strip():
            raise ValueError(
                "JWT_SECRET_KEY must be set in environment. "
                "Generate a secret (e.g. openssl rand -hex 32) and set it in .env"
            )

        temperature = os.getenv("GEMINI_TEMPERATURE")
        cors_origins = [
            o.strip().rstrip("/")
            for o in os.getenv("CORS_ORIGINS", "").split(",")
            if o.strip()
        ]

        return cls(
            gemini=GeminiConfig(
                api_key=gemini_api_key.strip(),
                model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
                base_url=os.getenv(
                    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
                ).rstrip("/"),
                timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60")),
                temperature=float(temperature) if temperature else None,
            ),
            mongo=MongoConfig(
                uri=mongodb_uri,
                db_name=os.getenv("MONGODB_DB_NAME") or None,
            ),
            auth=AuthConfig(
                jwt_secret=jwt_secret,
                jwt_refresh_secret=os.getenv("JWT_REFRESH_SECRET_KEY") or jwt_secret,
                jwt_expiration_hours=int(os.getenv("JWT_EXPIRATION_HOURS", "1")),
                jwt_refresh_expiration_days=int(os.getenv("JWT_REFRESH_EXPIRATION_DAYS", "7")),
                password_reset_expiration_minutes=int(
                    os.getenv("PASSWORD_RESET_EXPIRATION_MINUTES", "60")
                ),
            ),
            upload=UploadConfig(
                upload_dir=os.getenv("UPLOAD_DIR") or tempfile.gettempdir(),
                max_upload_size_mb=int(os.getenv("MAX_UPLOAD_SIZE_MB", "5")),
                interview_require_job_description=_env_flag("INTERVIEW_REQUIRE_JOB_DESCRIPTION"),
                interview_question_count=int(os.getenv("INTERVIEW_QUESTION_COUNT", "10")),
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "0.0.0.0"),
                port=int(os.getenv("SERVER_PORT", "5000")),
                frontend_url=os.getenv("FRONTEND_URL", ""),
                cors_origins=cors_origins,
            ),
        )


def get_config() -> Config:
    """
    Get configuration from environment variables.

    Returns:
        Configuration instance
    """
    return Config.from_env()
