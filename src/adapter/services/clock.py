from datetime import datetime
from src.app.services.clock import Clock
from src.domain.base import utcnow


class SystemClock(Clock):
    def now(self) -> datetime:
        return utcnow()
