import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str = 'true') -> bool:
    return os.getenv(name, default).strip().lower() in {'1', 'true', 'yes', 'on'}


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    JWT_SECRET = os.getenv('JWT_SECRET', os.getenv('SECRET_KEY', 'dev-jwt-secret-key'))
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', '24'))

    # Upstream posts service proxied by GET /api/external/items
    EXTERNAL_API_URL = os.getenv('EXTERNAL_API_URL', 'https://localhost:8080/api/posts')
    EXTERNAL_API_TIMEOUT = float(os.getenv('EXTERNAL_API_TIMEOUT', '10'))

    # Comma-separated; "*" allows any origin
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    REQUEST_LOG_ENABLED = _env_bool('REQUEST_LOG_ENABLED')
    REQUEST_LOG_SAMPLE_RATE = os.getenv('REQUEST_LOG_SAMPLE_RATE', '0.0')
    REQUEST_LOG_ENDPOINTS = os.getenv('REQUEST_LOG_ENDPOINTS', '')

    @classmethod
    def cors_origins(cls):
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(',') if o.strip()]
        if not origins or '*' in origins:
            return '*'
        return origins

    @classmethod
    def validate(cls) -> None:
        """
        Check settings before the app starts serving.

        Raises:
            RuntimeError: If any setting is invalid (offending keys are logged)
        """
        try:
            _SettingsCheck(
                JWT_SECRET=cls.JWT_SECRET,
                JWT_ALGORITHM=cls.JWT_ALGORITHM,
                JWT_EXPIRATION_HOURS=cls.JWT_EXPIRATION_HOURS,
                EXTERNAL_API_URL=cls.EXTERNAL_API_URL,
                EXTERNAL_API_TIMEOUT=cls.EXTERNAL_API_TIMEOUT,
                LOG_LEVEL=cls.LOG_LEVEL,
            )
        except ValidationError as e:
            logger.error(
                "Invalid environment variables: %s",
                ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors()),
            )
            raise RuntimeError("Invalid environment variables") from e


class _SettingsCheck(BaseModel):
    JWT_SECRET: str = Field(..., min_length=1)
    JWT_ALGORITHM: str = Field(..., pattern=r'^(HS|RS|ES|PS)(256|384|512)$')
    JWT_EXPIRATION_HOURS: int = Field(..., gt=0)
    EXTERNAL_API_URL: str
    EXTERNAL_API_TIMEOUT: float = Field(..., gt=0)
    LOG_LEVEL: str

    @field_validator('EXTERNAL_API_URL')
    @classmethod
    def must_be_http_url(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError('must be an http(s) URL')
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def must_be_known_level(cls, v: str) -> str:
        if v not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError('unknown log level')
        return v
