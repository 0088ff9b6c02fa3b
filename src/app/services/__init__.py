from .unit_of_work import UnitOfWork
from .clock import Clock

__all__ = ["UnitOfWork", "Clock"]
