from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Project:
    """Domain entity: Project. ``name_key`` is the canonical form of ``name``."""

    project_id: int
    name: str
    name_key: str
    url: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "_id": self.project_id,
            "name": self.name,
            "url": self.url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
