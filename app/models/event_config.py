"""
Event configuration model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base

EVENT_CATEGORIES = (
    "Online Workshop",
    "Hackathon",
    "Conference",
    "One-day Workshop",
)

class EventConfig(Base):
    __tablename__ = "event_registration_config"

    id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String(255), nullable=False)
    event_category = Column(String(255), nullable=False, index=True)
    event_date = Column(Date, nullable=False, index=True)
    registration_start_date = Column(Date, nullable=False)
    registration_end_date = Column(Date, nullable=False)
    created = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    registrations = relationship("Registration", back_populates="event")
