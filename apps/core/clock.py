"""
Clock capability used by the booking engine.

Anything with a `now()` method returning an aware datetime can stand in for
SystemClock (tests pass a frozen clock).
"""
from datetime import datetime

from django.utils import timezone


class SystemClock:
    def now(self) -> datetime:
        return timezone.now()
