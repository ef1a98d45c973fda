"""In-memory intake store."""
from typing import Iterable, Sequence

from ...core.models import IntakeRecord
from .base import BaseIntakeStore


class InMemoryIntakeStore(BaseIntakeStore):
    """Store without persistence. The optional seed stands in for a snapshot."""

    def __init__(self, seed: Iterable[IntakeRecord] | None = None) -> None:
        super().__init__()
        self._seed = list(seed or [])
        self.load()

    def load(self) -> Sequence[IntakeRecord]:
        self._records = list(self._seed)
        return self.records

    def append(self, record: IntakeRecord) -> None:
        self._records.append(record)
