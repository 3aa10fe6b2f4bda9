from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from ..database import Base
from .base import generate_uuid, utcnow


class BadmintonSession(Base):
    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    title = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_by = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    creator = relationship(
        "Profile", back_populates="created_sessions", foreign_keys=[created_by]
    )
    responses = relationship(
        "SessionResponse",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments = relationship(
        "Comment",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    analytics = relationship(
        "UserAnalytics",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
