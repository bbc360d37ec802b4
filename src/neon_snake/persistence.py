"""Best-score storage backends.

Stores swallow their own I/O failures: a broken disk degrades to a game
without high-score persistence instead of crashing the engine.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    """Key-value persistence for the single best-score scalar."""

    def load(self) -> int: ...

    def save(self, value: int) -> None: ...


class MemoryBestScoreStore:
    """Keeps the best score for the lifetime of the process."""

    def __init__(self, value: int = 0) -> None:
        self.value = max(0, value)

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value


class JsonFileBestScoreStore:
    """Best score kept under *key* in a small JSON document on disk."""

    def __init__(self, path: str | Path, key: str = "snakeHighScore") -> None:
        self.path = Path(path)
        self.key = key
        self.writable = True

    def load(self) -> int:
        """Return the stored score, or 0 when absent or unparseable."""
        try:
            raw = json.loads(self.path.read_text())
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as exc:
            logger.warning("Could not read best score from %s: %s", self.path, exc)
            return 0

        value = raw.get(self.key, 0) if isinstance(raw, dict) else 0
        try:
            score = int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable best score %r in %s.", value, self.path)
            return 0
        return max(0, score)

    def save(self, value: int) -> None:
        """Persist *value*; the first failed write disables the store."""
        if not self.writable:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: int(value)}))
        except OSError as exc:
            self.writable = False
            logger.warning(
                "Best score persistence disabled; write to %s failed: %s",
                self.path, exc,
            )
