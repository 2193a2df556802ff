from __future__ import annotations

from .model import Reconciliation


def format_user_reports(reconciled: Reconciliation) -> list[dict]:
    """``[{name, reports: [...]}]`` in assignment first-seen order."""
    return [
        {"name": user.name, "reports": [row.to_dict() for row in user.rows]}
        for user in reconciled.users.values()
    ]
