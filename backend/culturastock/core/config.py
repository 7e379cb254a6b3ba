from pydantic_settings import BaseSettings
from pydantic import AnyHttpUrl
from decouple import config
from typing import List

class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"

    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = config(
        "BACKEND_CORS_ORIGINS",
        default="http://localhost:3000,http://localhost:5173",
        cast=lambda v: [url.strip() for url in v.split(",") if url.strip()]
    )

    PROJECT_NAME: str = "CULTURASTOCK"
    DEBUG: bool = config("DEBUG", default=False, cast=bool)
    LOG_FILE: str = config("LOG_FILE", default="culturastock.log", cast=str)

    MONGO_CONNECTION_STRING: str = config("MONGO_CONNECTION_STRING", default="mongodb://localhost:27017", cast=str)
    MONGO_DB_NAME: str = config("MONGO_DB_NAME", default="culturastock", cast=str)

    # Autocomplete cap for borrower suggestions
    BORROWER_SUGGESTION_LIMIT: int = config("BORROWER_SUGGESTION_LIMIT", default=5, cast=int)

    class Config:
        case_sensitive = True

settings = Settings()
