"""Intake record store module."""
from .base import BaseIntakeStore
from .json_file import JsonFileIntakeStore, SNAPSHOT_VERSION
from .memory import InMemoryIntakeStore

__all__ = [
    "BaseIntakeStore",
    "JsonFileIntakeStore",
    "InMemoryIntakeStore",
    "SNAPSHOT_VERSION",
]
