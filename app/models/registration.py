"""
Registration model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base

class Registration(Base):
    __tablename__ = "event_registration_submissions"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    college_name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    event_category = Column(String(255), nullable=False)  # copied from the submitted form
    event_config_id = Column(Integer, ForeignKey("event_registration_config.id"), nullable=False, index=True)
    created = Column(DateTime, default=datetime.now, nullable=False, index=True)

    # Relationships
    event = relationship("EventConfig", back_populates="registrations")

    __table_args__ = (
        UniqueConstraint("email", "event_config_id", name="uq_registration_email_event"),
    )
