"""
Scheduling SQLAlchemy Models

Database models for scheduling domain persistence.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from agenda.database.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for User entity."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=True, index=True)
    provider = Column(Boolean, default=False, nullable=False)


class AppointmentModel(Base, TimestampMixin):
    """
    SQLAlchemy model for Appointment entity.

    ``date`` keeps the requested timestamp, ``slot`` its hour. The partial
    unique index makes the database reject a second active appointment for
    the same provider and hour.
    """

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # References
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Scheduling
    date = Column(DateTime(timezone=True), nullable=False)
    slot = Column(DateTime(timezone=True), nullable=False)
    canceled_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            "uq_appointments_provider_slot_active",
            "provider_id",
            "slot",
            unique=True,
            postgresql_where=canceled_at.is_(None),
            sqlite_where=canceled_at.is_(None),
        ),
    )


class NotificationModel(Base, TimestampMixin):
    """SQLAlchemy model for Notification entity."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    user = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    read = Column(Boolean, default=False, nullable=False)
