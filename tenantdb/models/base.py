"""
Base model configuration for SQLAlchemy ORM.

This module defines the declarative base shared by every entity, the column
helpers all tables use for identity and audit timestamps, and ``to_dict``
serialization that only walks what has actually been loaded.

Usage:
    from tenantdb.models.base import Base, TimestampMixin, id_column

    class MyModel(TimestampMixin, Base):
        __tablename__ = "my_table"

        id = id_column()
        name = Column(String, nullable=False)
"""

from datetime import datetime, timezone
from typing import Any, Dict, Tuple
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String, inspect
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

ID_LENGTH = 36


def new_id() -> str:
    """Generate a surrogate primary key."""
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always reads back in UTC.

    SQLite stores no offset, so aware values are converted to UTC on the way
    in and naive values coming back are tagged as UTC. PostgreSQL already
    returns aware values and passes through unchanged.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def id_column() -> Column:
    """Surrogate string primary key filled on insert."""
    return Column(String(ID_LENGTH), primary_key=True, default=new_id)


def fk_column(target: str, nullable: bool = False, ondelete: str = None, **kwargs) -> Column:
    """Foreign key column pointing at ``target`` (``"table.column"``)."""
    return Column(
        String(ID_LENGTH),
        ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
        index=True,
        **kwargs
    )


class _ModelBase:
    """Behaviour shared by all mapped classes."""

    def to_dict(self, _ancestors: Tuple[int, ...] = ()) -> Dict[str, Any]:
        """
        Serialize loaded attributes into a plain dict.

        Columns and relations that were not loaded (not requested, or left
        out of a projection) are omitted rather than fetched. Relations that
        point back at an object already being serialized are skipped.

        Returns:
            Dict[str, Any]: column values keyed by attribute name, with
            loaded relations nested as dicts or lists of dicts
        """
        state = inspect(self)
        unloaded = state.unloaded
        ancestors = _ancestors + (id(self),)
        data: Dict[str, Any] = {}

        for attr in state.mapper.column_attrs:
            if attr.key not in unloaded:
                data[attr.key] = getattr(self, attr.key)

        for rel in state.mapper.relationships:
            if rel.key in unloaded:
                continue
            value = getattr(self, rel.key)
            if value is None:
                data[rel.key] = None
            elif rel.uselist:
                data[rel.key] = [
                    item.to_dict(ancestors) for item in value if id(item) not in ancestors
                ]
            elif id(value) not in ancestors:
                data[rel.key] = value.to_dict(ancestors)

        return data

    def __repr__(self):
        identity = inspect(self).identity
        return f"<{type(self).__name__} {identity}>"


Base = declarative_base(cls=_ModelBase)


class TimestampMixin:
    """Audit timestamps filled by the mapping, never by repositories."""

    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow)
