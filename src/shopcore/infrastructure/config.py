"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_format: str = "console"  # or "json"

    @property
    def store_path(self) -> Path:
        return self.data_dir / "store.json"

    @staticmethod
    def from_env() -> Settings:
        data_dir = os.getenv("SHOPCORE_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            log_level=os.getenv("SHOPCORE_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("SHOPCORE_LOG_FORMAT", "console").lower(),
        )
