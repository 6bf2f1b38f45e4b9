import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path('data')
    log_level: int = logging.INFO
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Settings":
        level_name = os.environ.get("RECOVERYSTATS_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise RuntimeError(f"Unknown RECOVERYSTATS_LOG_LEVEL: {level_name}")

        log_format = os.environ.get("RECOVERYSTATS_LOG_FORMAT", "text")
        if log_format not in ("text", "json"):
            raise RuntimeError("RECOVERYSTATS_LOG_FORMAT must be 'text' or 'json'")

        return cls(
            data_dir=Path(os.environ.get("RECOVERYSTATS_DATA_DIR", "data")),
            log_level=level,
            log_format=log_format,
        )
