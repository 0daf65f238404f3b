from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeEvent:
    """Domain entity: one clock punch.

    Appended by the clock action, never mutated; an administrative
    correction may delete it.
    """

    employee_id: int
    kind: EventKind
    timestamp: datetime
    event_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValidationError("TimeEvent timestamp must be timezone-aware")
        if not isinstance(self.kind, EventKind):
            object.__setattr__(self, "kind", EventKind(self.kind))


OPENING_KINDS = {
    EventKind.CLOCK_IN: "clock",
    EventKind.LUNCH_OUT: "lunch",
    EventKind.UNPAID_OUT: "unpaid",
}

CLOSING_KINDS = {
    EventKind.CLOCK_OUT: "clock",
    EventKind.LUNCH_IN: "lunch",
    EventKind.UNPAID_IN: "unpaid",
}
