"""Run configuration for hulud-checker."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_DATASET = Path("affected_packages.csv")
DATASET_ENV_VAR = "HULUD_DATASET"
WORKERS_ENV_VAR = "HULUD_WORKERS"


@dataclass
class ScanConfig:
    """Configuration for a scan run."""

    dataset_path: Path = DEFAULT_DATASET
    target: Optional[Path] = None
    recursive: bool = True
    max_workers: int = 1
    ignore_patterns: List[str] = field(default_factory=list)
    quiet: bool = False
    json_output: bool = False
    output_file: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {self.max_workers}")

        self.dataset_path = Path(self.dataset_path)
        if self.target is not None:
            self.target = Path(self.target)
