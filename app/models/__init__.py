"""
Database models package
"""

from .event_config import EventConfig, EVENT_CATEGORIES
from .registration import Registration
from .setting import Setting

__all__ = ["EventConfig", "EVENT_CATEGORIES", "Registration", "Setting"]
