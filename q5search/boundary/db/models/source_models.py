"""
Platform source table mappings.

Read-only projections of the tables owned by the surrounding application.
Only the columns the search service reads are mapped.

Dependencies: sqlalchemy, q5search.boundary.db.base
System role: Source entities for indexing, profiles and the social graph
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from q5search.boundary.db.base import Base, UUIDMixin


class JobModel(Base, UUIDMixin):
    """Job posting. Indexed when is_published is true."""

    __tablename__ = "jobs"

    title: Mapped[str | None] = mapped_column(String)
    organisation_name: Mapped[str | None] = mapped_column(String)
    location: Mapped[str | None] = mapped_column(String)
    employment_type: Mapped[str | None] = mapped_column(String)
    additional_description: Mapped[str | None] = mapped_column(Text)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)


class ProductModel(Base, UUIDMixin):
    """Marketplace product. Every row is indexed."""

    __tablename__ = "products"

    name: Mapped[str | None] = mapped_column(String)
    company_name: Mapped[str | None] = mapped_column(String)
    category: Mapped[str | None] = mapped_column(String)
    short_description: Mapped[str | None] = mapped_column(Text)


class OrganizationModel(Base, UUIDMixin):
    """Organization page. Indexed when is_active is true, linked by slug."""

    __tablename__ = "organizations"

    name: Mapped[str | None] = mapped_column(String)
    slug: Mapped[str | None] = mapped_column(String)
    industry: Mapped[str | None] = mapped_column(String)
    focus_areas: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ProfileModel(Base, UUIDMixin):
    """User profile. Indexed when full_name is present."""

    __tablename__ = "profiles"

    full_name: Mapped[str | None] = mapped_column(String)
    role: Mapped[str | None] = mapped_column(String)
    current_title: Mapped[str | None] = mapped_column(String)
    affiliation: Mapped[str | None] = mapped_column(String)
    short_bio: Mapped[str | None] = mapped_column(Text)
    skills: Mapped[str | None] = mapped_column(Text)
    focus_areas: Mapped[str | None] = mapped_column(Text)


class QuestionModel(Base, UUIDMixin):
    """Q&A forum question. Every row is indexed."""

    __tablename__ = "qna_questions"

    title: Mapped[str | None] = mapped_column(String)
    body: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String))


class PostModel(Base, UUIDMixin):
    """Social feed post."""

    __tablename__ = "posts"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ConnectionModel(Base, UUIDMixin):
    """
    Connection ("entanglement") request between two users.

    Rows with status 'accepted' are undirected social graph edges.
    """

    __tablename__ = "connections"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    target_user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
