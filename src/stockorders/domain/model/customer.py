"""Customer record, as resolved from the customer directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Customer:

    id: str
    name: str
    email: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
