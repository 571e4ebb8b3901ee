"""Environment-driven settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_OUTPUT_PATH = "03_data/activity_diagram.json"


@dataclass(frozen=True)
class BuilderSettings:
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    output_path: str = DEFAULT_OUTPUT_PATH

    @classmethod
    def from_env(cls) -> "BuilderSettings":
        load_dotenv()
        log_file = os.getenv("ACTIVITY_GRAPH_LOG_FILE")
        return cls(
            log_level=os.getenv("ACTIVITY_GRAPH_LOG_LEVEL", "INFO").upper(),
            log_file=Path(log_file) if log_file else None,
            output_path=os.getenv("ACTIVITY_GRAPH_OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
        )
