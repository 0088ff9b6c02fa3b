from .unit_of_work import SqlAlchemyUnitOfWork
from .clock import SystemClock
from .schema import init_database

__all__ = ["SqlAlchemyUnitOfWork", "SystemClock", "init_database"]
