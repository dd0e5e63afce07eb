from typing import List
from pydantic_settings import BaseSettings
from pydantic import validator

class Settings(BaseSettings):
    # API Settings
    PROJECT_NAME: str = "Variation Gallery"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Database Settings
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./variation_gallery.db"

    # JWT Settings
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Redis Settings
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    CACHE_ENABLED: bool = True
    CACHE_EXPIRE_SECONDS: int = 3600

    # Gallery Settings
    # "end" moves the catch-all assignment behind every other record
    GLOBAL_ASSIGNMENT_POSITION: str = "end"
    FUZZY_MATCH_THRESHOLD: float = 70.0
    SLUG_HEAL_THRESHOLD: float = 95.0
    MULTILANG_ENABLED: bool = False
    DISABLE_ON_EMPTY_ASSIGNMENTS: bool = False
    MAIN_IMAGE_SIZE: str = "large"
    THUMB_IMAGE_SIZE: str = "thumbnail"
    FULL_IMAGE_SIZE: str = "full"
    PLACEHOLDER_IMAGE_URL: str = "/static/placeholder.png"
    LOOP_THUMBNAIL_LIMIT: int = 0

    @property
    def DATABASE_URL(self) -> str:
        """Get full database URL."""
        return self.SQLALCHEMY_DATABASE_URI

    class Config:
        case_sensitive = True
        env_file = ".env"

settings = Settings()
