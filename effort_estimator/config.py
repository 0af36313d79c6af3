from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimations.db"
    APP_NAME: str = "Effort Estimator"
    MAX_PAGE_SIZE: int = 200

    # Activity type vocabulary: labels are what the line store keeps,
    # codes are the option-set values of the external system.
    DEVELOPMENT_LABEL: str = "Development"
    PROCESS_LABEL: str = "Process"
    SUPPORT_LABEL: str = "Support"
    DEVELOPMENT_CODE: int = 100000000
    PROCESS_CODE: int = 100000001
    SUPPORT_CODE: int = 100000002

    class Config:
        env_file = ".env"


settings = Settings()
