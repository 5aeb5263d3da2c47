"""
Settings for the workflow API.

Values come from the process environment, falling back to a local .env file
(see .env.example).
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Environment-driven settings.

    Attributes:
        DATABASE_URL: async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host:5432/school_admin
        APP_NAME: title shown in the API docs
        ENVIRONMENT: "development" or "production"; production hides error details
        DEBUG: echo SQL statements to the log
        LOG_LEVEL: root log level
        DEFAULT_PAGE_SIZE / MAX_PAGE_SIZE: listing page size and its upper bound
        ACTOR_HEADER: request header carrying the acting user's id
    """

    DATABASE_URL: str

    APP_NAME: str = "School Admin Workflow"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    ACTOR_HEADER: str = "X-User-Id"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
