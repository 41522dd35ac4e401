from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_titles(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="READINESS_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Supabase Configuration
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None

    # Line tree RPC, as exposed by the configuration store
    LINE_TREE_RPC: str = "get_line_full_data"
    LINE_TREE_TABLE: str = "solutions_lines"

    MAX_CONCURRENT_LINE_LOADS: int = 8
    LINE_RESULT_CACHE_SIZE: int = 256

    REQUIRED_POSITION_TITLES: Annotated[
        list[str] | str, BeforeValidator(parse_titles)
    ] = ["RLE", "OP"]

    @model_validator(mode="after")
    def _check_limits(self) -> Self:
        if self.MAX_CONCURRENT_LINE_LOADS < 1:
            raise ValueError("MAX_CONCURRENT_LINE_LOADS must be at least 1")
        if self.LINE_RESULT_CACHE_SIZE < 1:
            raise ValueError("LINE_RESULT_CACHE_SIZE must be at least 1")
        return self


settings = Settings()  # type: ignore
