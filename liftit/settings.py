from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(find_dotenv(), override=False)


class Settings(BaseSettings):
    PROJECT_NAME: str = "liftit"
    REGION: str = "eu-west-2"
    ENV: str = "dev"
    DDB_TABLE_NAME: str = "liftit-dev-table"
    model_config = SettingsConfigDict(env_file=None)

    # ──────────────────── Persistence ─────────────────────

    REPOSITORY_BACKEND: Literal["dynamo", "memory"] = "dynamo"

    # ──────────────────── Paging ─────────────────────

    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # ──────────────────── Auth ─────────────────────

    DISABLE_AUTH_FOR_LOCAL_DEV: bool = False
    DEV_USER_ID: int = 1

    # Cognito custom attribute carrying the numeric application user id
    USER_ID_CLAIM: str = "custom:user_id"

    COGNITO_AUDIENCE: str = ""
    COGNITO_ISSUER_URL: str = ""

    @property
    def uses_memory_backend(self) -> bool:
        return self.REPOSITORY_BACKEND == "memory"


settings = Settings()
