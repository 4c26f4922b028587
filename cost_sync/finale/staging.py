"""
Temporary on-disk copy of the Finale catalog for the duration of a run.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class CatalogStage:
    """
    Holds the staged catalog file and deletes it on exit.

    Usage:
        with CatalogStage(directory) as stage:
            stage.write(catalog)
            ...
    """

    FILE_PREFIX = "finale_full_"

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.path: Optional[Path] = None

    def write(self, data: Any) -> Path:
        """Write the catalog as pretty-printed JSON and remember the path."""
        self.directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(timezone.utc).isoformat()
        timestamp = timestamp.replace(":", "-").replace(".", "-").replace("+", "_")
        path = self.directory / f"{self.FILE_PREFIX}{timestamp}.json"

        self.path = path
        path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
        logger.info(f"Finale data temporarily saved to {path.name}")
        return path

    def cleanup(self) -> None:
        """Delete the staged file if one was written."""
        if self.path is not None and self.path.exists():
            self.path.unlink()
            logger.info(f"Deleted temporary file {self.path.name}")
        self.path = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
