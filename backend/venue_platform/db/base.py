"""
Declarative base, timestamp mixin and a UTC-normalising datetime column type.
"""

import json
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def dumps_json(value) -> str:
    """JSON column serializer: non-ASCII text is stored as-is, not \\u-escaped."""
    return json.dumps(value, ensure_ascii=False)


def escape_like(text: str, escape: str = "/") -> str:
    """Make `text` match literally inside a LIKE pattern."""
    for char in (escape, "%", "_"):
        text = text.replace(char, escape + char)
    return text


class UTCDateTime(TypeDecorator):
    """
    Stores datetimes as UTC and always hands back timezone-aware values.

    Naive input is taken to be UTC already. SQLite drops tzinfo on write,
    so results coming back naive get UTC re-attached.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def one_of(column: str, values, name: str) -> CheckConstraint:
    """CHECK constraint limiting `column` to the given string values."""
    allowed = ", ".join(f"'{value}'" for value in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=name)


class TimestampMixin:
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow)
