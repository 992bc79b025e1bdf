from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Board and deck
    board_radius: int = Field(default=3, ge=2, le=6)
    tiles_per_type: int = Field(default=10, ge=1)

    # Supermove rules
    supermove: bool = False
    single_supermove: bool = False
    supermove_any_player: bool = False

    # Bots
    ai_seed: int | None = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HEXFLOWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
