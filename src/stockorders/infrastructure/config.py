"""Runtime settings, read from the environment or a ``.env`` file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from decouple import config

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> Settings:
    return Settings(
        data_dir=config("STOCKORDERS_DATA_DIR", default=str(_DEFAULT_DATA_DIR), cast=Path),
        log_level=config("STOCKORDERS_LOG_LEVEL", default="INFO").upper(),
        log_json=config("STOCKORDERS_LOG_JSON", default=False, cast=bool),
    )
