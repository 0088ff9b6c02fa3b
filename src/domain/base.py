"""Shared base for domain entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in every table"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
