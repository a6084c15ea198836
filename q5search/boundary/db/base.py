"""
SQLAlchemy declarative base and the platform key mixin.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    Platform tables (jobs, profiles, ...) are owned by the surrounding
    application and only mapped here for reads; search_documents is the
    only table this service writes.
    """

    pass


class UUIDMixin:
    """
    UUID primary key of a platform table.

    Rows are created by the platform, so no default is generated here.
    """

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
