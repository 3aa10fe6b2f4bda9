from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from ..database import Base
from .base import generate_uuid, utcnow


class SessionResponse(Base):
    __tablename__ = "responses"

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    status = Column(String, nullable=False)  # COMING, NOT_COMING, TENTATIVE

    # Foreign Keys
    user_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    session_id = Column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    session = relationship("BadmintonSession", back_populates="responses")
    user = relationship("Profile", back_populates="responses")

    __table_args__ = (
        Index("idx_unique_user_session_response", "user_id", "session_id", unique=True),
    )
