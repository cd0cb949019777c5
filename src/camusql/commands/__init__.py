"""
camusql Shell Commands

Command implementations behind the CLI: the interactive loop, batch
execution, `source` and the rich presenter. The CLI layer (cli.py) acts as a
thin routing layer.
"""

from ._render import Presenter, RichPresenter
from .batch import run_batch
from .shell import EXIT_INTERRUPTED, EXIT_OK, ShellExit, handle_line, run_shell
from .source import load_source

__all__ = [
    "Presenter",
    "RichPresenter",
    "run_batch",
    "EXIT_INTERRUPTED",
    "EXIT_OK",
    "ShellExit",
    "handle_line",
    "run_shell",
    "load_source",
]
