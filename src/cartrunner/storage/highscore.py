"""Best-score persistence in a small JSON file."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Reads and writes a single integer, tolerating a missing or bad file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            value = int(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable high score file {self.path}: {e}")
            return 0
        return max(0, value)

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"high_score": int(value)}, f, indent=2)
            logger.info(f"High score saved: {value}")
        except OSError as e:
            logger.error(f"Failed to save high score: {e}")


class MemoryHighScoreStore:
    """In-process store; used when no data directory is wanted."""

    def __init__(self, value: int = 0) -> None:
        self.value = value
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.writes += 1
