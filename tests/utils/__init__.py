"""Shared test helpers."""

from .fakes import FakeCommand, FakeConnection, FakeTransaction, make_row

__all__ = ["FakeCommand", "FakeConnection", "FakeTransaction", "make_row"]
