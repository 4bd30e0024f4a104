"""Shared model utilities used across all models."""

import uuid
from datetime import UTC, date, datetime, timedelta
from typing import Any

from sqlalchemy import String, TypeDecorator
from sqlalchemy.engine import Dialect

ONE_DAY = timedelta(days=1)


class UUIDType(TypeDecorator[uuid.UUID]):
    """UUID stored as String(36) so SQLite and PostgreSQL behave the same."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(uuid.UUID(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def today() -> date:
    return utc_now().date()
