"""Base class for intake record stores."""
import abc
from typing import Sequence

from ...core.models import IntakeRecord


class BaseIntakeStore(abc.ABC):
    """Append-only, ordered collection of intake records.

    Insertion order is submission order. There is no update or delete.
    """

    def __init__(self) -> None:
        self._records: list[IntakeRecord] = []

    @property
    def records(self) -> tuple[IntakeRecord, ...]:
        """Read-only view of the current sequence."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def contains_id(self, intake_id: str) -> bool:
        return any(record.id == intake_id for record in self._records)

    @abc.abstractmethod
    def load(self) -> Sequence[IntakeRecord]:
        """
        Replace the in-memory sequence with the persisted snapshot.

        Never raises: a missing or unreadable snapshot yields an empty store.
        """
        pass

    @abc.abstractmethod
    def append(self, record: IntakeRecord) -> None:
        """
        Add one record to the end and persist the whole sequence.

        A persistence failure is logged; the in-memory append stands.
        """
        pass
