"""Persistence of the interactive command history as a JSON list of strings."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from rich.console import Console

log = logging.getLogger(__name__)

console = Console()


def _write_json_atomic(path: Path, payload: Any) -> None:
    """Atomically write JSON payload to file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    file_descriptor, temp_path = tempfile.mkstemp(
        prefix=f"{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            json.dump(payload, handle)
            handle.write("\n")
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


class HistoryStore:
    """Load/save the ordered list of past statements."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[str]:
        """Read history; a missing file gives an empty list.

        An unreadable or malformed file is reported and treated as empty, so a
        corrupt history never blocks the shell from starting.
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            log.debug("Could not read history %s: %s", self.path, e)
            console.print("Found invalid history")
            return []

        if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
            console.print("Found invalid history")
            return []
        return payload

    def save(self, history: list[str]) -> None:
        """Persist the full history, replacing the previous file."""
        _write_json_atomic(self.path, list(history))
        log.debug("Saved %d history entries to %s", len(history), self.path)
