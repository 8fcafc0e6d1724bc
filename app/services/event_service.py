"""
Event configuration storage and registration-window rules
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.models import EventConfig
from app.schemas.event import EventConfigCreate

logger = logging.getLogger(__name__)

class EventService:
    """Service for event configuration operations.

    Queries used by the public form only consider events whose registration
    window contains ``today``; the admin listing queries consider every
    event ever configured.
    """

    @staticmethod
    def create_event(db: Session, data: EventConfigCreate, now: Optional[datetime] = None) -> EventConfig:
        """Insert a new event configuration"""
        event = EventConfig(
            event_name=data.event_name,
            event_category=data.event_category,
            event_date=data.event_date,
            registration_start_date=data.registration_start_date,
            registration_end_date=data.registration_end_date,
            created=now or datetime.now(),
        )
        try:
            db.add(event)
            db.commit()
            db.refresh(event)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error creating event: %s", e)
            raise StorageError("Could not save event configuration") from e
        return event

    @staticmethod
    def get_all_events(db: Session) -> List[EventConfig]:
        return db.query(EventConfig).order_by(EventConfig.event_date.asc(), EventConfig.id.asc()).all()

    @staticmethod
    def get_event_by_id(db: Session, event_id: int) -> Optional[EventConfig]:
        return db.query(EventConfig).filter(EventConfig.id == event_id).first()

    @staticmethod
    def _open_on(query, today: date):
        return query.filter(
            EventConfig.registration_start_date <= today,
            EventConfig.registration_end_date >= today,
        )

    @staticmethod
    def get_available_categories(db: Session, today: date) -> Dict[str, str]:
        """Categories with at least one event open for registration"""
        rows = EventService._open_on(
            db.query(EventConfig.event_category), today
        ).distinct().order_by(EventConfig.event_category.asc()).all()
        return {row.event_category: row.event_category for row in rows}

    @staticmethod
    def get_event_dates_by_category(db: Session, category: str, today: date) -> Dict[str, str]:
        """Open event dates for a category, ascending"""
        rows = EventService._open_on(
            db.query(EventConfig.event_date).filter(EventConfig.event_category == category), today
        ).distinct().order_by(EventConfig.event_date.asc()).all()
        return {row.event_date.isoformat(): row.event_date.isoformat() for row in rows}

    @staticmethod
    def get_event_names_by_category_and_date(
        db: Session,
        category: str,
        event_date: date,
        today: date
    ) -> Dict[int, str]:
        """Open events for a category on a date, keyed by id, name ascending"""
        rows = EventService._open_on(
            db.query(EventConfig.id, EventConfig.event_name).filter(
                EventConfig.event_category == category,
                EventConfig.event_date == event_date,
            ),
            today,
        ).order_by(EventConfig.event_name.asc()).all()
        return {row.id: row.event_name for row in rows}

    @staticmethod
    def get_all_event_dates(db: Session) -> Dict[str, str]:
        """Every configured event date, regardless of registration window"""
        rows = db.query(EventConfig.event_date).distinct().order_by(EventConfig.event_date.asc()).all()
        return {row.event_date.isoformat(): row.event_date.isoformat() for row in rows}

    @staticmethod
    def get_event_names_by_date(db: Session, event_date: date) -> Dict[int, str]:
        """Every event on a date, regardless of registration window"""
        rows = db.query(EventConfig.id, EventConfig.event_name).filter(
            EventConfig.event_date == event_date
        ).order_by(EventConfig.event_name.asc()).all()
        return {row.id: row.event_name for row in rows}

    @staticmethod
    def is_event_open_for_registration(event: EventConfig, today: date) -> bool:
        return event.registration_start_date <= today <= event.registration_end_date
