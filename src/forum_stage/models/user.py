# src/forum_stage/models/user.py
"""SQLAlchemy models for user accounts and the site record."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import utcnow


class User(Base):
    """Registered account.

    Credentials live with the identity subsystem; this core only reads the
    authority and restriction flags.
    """

    __tablename__ = "user_"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # Site-wide authority.
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Site-wide restriction.
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Site(Base):
    """Singleton-ish record describing the running instance."""

    __tablename__ = "site"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_.id"), nullable=False)
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
