from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a registered card holder.

    Note: ``identifier`` is always the normalized card key.
    """

    identifier: str
    name: str
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
