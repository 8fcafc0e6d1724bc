"""
Key/value settings model
"""

from sqlalchemy import Column, String, Text

from app.core.db import Base

class Setting(Base):
    __tablename__ = "event_registration_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
