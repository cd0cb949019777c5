"""Shell configuration model."""

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_CONNECTION_SOURCE = "Provider=sqlite;Database=:memory:"
HISTORY_FILENAME = "camusql.history.json"


def default_history_path() -> Path:
    """History file in the system temp directory, shared across sessions."""
    return Path(tempfile.gettempdir()) / HISTORY_FILENAME


class ShellSettings(BaseModel):
    """Configuration for one interactive shell session

    Attributes:
        connection_source: Connection string (see parse_connection_string)
        history_path: JSON file holding past statements
        command_timeout: Per-command timeout in seconds
        prompt: Interactive prompt text
        verbose: Enable debug logging
    """

    connection_source: str = Field(
        default=DEFAULT_CONNECTION_SOURCE, description="Connection string"
    )
    history_path: Path = Field(default_factory=default_history_path, description="History file")
    command_timeout: int = Field(default=60, gt=0, description="Command timeout in seconds")
    prompt: str = Field(default="camus> ", description="Interactive prompt")
    verbose: bool = Field(default=False, description="Enable debug logging")
