from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for the admin check."""

    ADMIN = "admin"
    USER = "user"


class ReportFilter(str, Enum):
    """Period filters accepted by the report listing endpoint."""

    DATE = "date"
    MONTH = "month"
    YEAR = "year"
