from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from ..database import Base
from .base import generate_uuid, utcnow


class UserAnalytics(Base):
    """Predicted RSVP vs inferred attendance, written when a session completes"""

    __tablename__ = "user_analytics"

    id = Column(String(36), primary_key=True, default=generate_uuid, index=True)
    user_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    session_id = Column(
        String(36), ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )
    predicted_status = Column(String, nullable=False)
    actual_attendance = Column(Boolean, nullable=True)  # None for TENTATIVE
    recorded_at = Column(DateTime(timezone=True), default=utcnow)

    session = relationship("BadmintonSession", back_populates="analytics")
    user = relationship("Profile")
