"""Soft-delete support shared by every persisted record.

Records are never hard-deleted while other records may reference them;
instead ``deleted_at`` is stamped.  Repositories filter through
``active()`` so no query path can forget the predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, TypeVar

from rms.domain.model.value_objects import utcnow

T = TypeVar("T", bound="SoftDeletable")


@dataclass(kw_only=True)
class SoftDeletable:

    deleted_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def soft_delete(self, now: datetime | None = None) -> None:
        if self.deleted_at is None:
            self.deleted_at = now or utcnow()


def active(records: Iterable[T]) -> list[T]:
    """The single "not deleted" predicate used by all query paths."""
    return [record for record in records if record.is_active]
