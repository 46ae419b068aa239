from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./taskboard.db"

    # API surface
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Security
    SECRET_KEY: str = "supersecretjwtkey"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Off by default: GET/DELETE /projects/{id} do not check the owner.
    ENFORCE_PROJECT_OWNERSHIP: bool = False

    ERROR_LOG_PATH: str = "error.log"

    class Config:
        env_file = ".env"

settings = Settings()
