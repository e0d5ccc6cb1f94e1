"""Runtime settings loaded from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings. Read once, never mutated."""

    data_dir: Path = DATA_DIR
    db_timeout: float = 5.0
    """Seconds a transaction waits for the write lock before failing"""
    max_retries: int = 3
    """Extra attempts for a transaction that hit a lock timeout"""
    shop_size: int = 10
    leaderboard_limit: int = 100


def load_settings() -> Settings:
    """Build Settings from FITQUEST_* environment variables."""
    return Settings(
        data_dir=Path(os.environ.get("FITQUEST_DATA_DIR", str(DATA_DIR))),
        db_timeout=float(os.environ.get("FITQUEST_DB_TIMEOUT", "5.0")),
        max_retries=int(os.environ.get("FITQUEST_MAX_RETRIES", "3")),
        shop_size=int(os.environ.get("FITQUEST_SHOP_SIZE", "10")),
        leaderboard_limit=int(os.environ.get("FITQUEST_LEADERBOARD_LIMIT", "100")),
    )


settings = load_settings()
