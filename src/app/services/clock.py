"""Clock Interface

Source of the current time for use cases that stamp records or compute
expiry, injectable so tests can freeze time.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current naive UTC timestamp"""
        pass
