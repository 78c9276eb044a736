from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Daguerreo"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Generic paging and sorting repositories over SQLAlchemy"
    API_V1_STR: str = "/api/v1"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS settings
    ALLOWED_HOSTS: List[str] = ["*"]

    # Database settings
    DATABASE_URL: str = "sqlite:///./daguerreo.db"

    # Repository settings
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    BULK_UPSERT_ENABLED: bool = True

    # API Keys
    API_TOKEN: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
