"""Runtime configuration, read from the environment and ``.env``."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # === Logging ===
    LOG_LEVEL: str = "INFO"

    # === Processing ===
    # Order of per-NFT snapshots within one floor update: "insertion" | "nft_id"
    FLOOR_EMISSION_ORDER: str = "insertion"

    # === Output ===
    OUTPUT_INDENT: int = 2

    model_config = {"env_file": ".env", "extra": "ignore"}
