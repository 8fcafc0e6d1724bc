"""
Registration storage and filtered listings
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateError, StorageError
from app.models import EventConfig, Registration
from app.schemas.registration import RegistrationCreate, RegistrationRow

logger = logging.getLogger(__name__)

class RegistrationService:
    """Service for registration submissions"""

    @staticmethod
    def create_registration(db: Session, data: RegistrationCreate, now: Optional[datetime] = None) -> Registration:
        """Insert a registration.

        ``event_category`` is stored as submitted, not re-read from the event.
        """
        registration = Registration(
            full_name=data.full_name,
            email=data.email,
            college_name=data.college_name,
            department=data.department,
            event_category=data.event_category,
            event_config_id=data.event_config_id,
            created=now or datetime.now(),
        )
        try:
            db.add(registration)
            db.commit()
            db.refresh(registration)
        except IntegrityError as e:
            db.rollback()
            if RegistrationService.is_duplicate_registration(db, data.email, data.event_config_id):
                logger.warning(
                    "Duplicate registration rejected by constraint for %s on event %s",
                    data.email, data.event_config_id
                )
                raise DuplicateError() from e
            logger.error("Error creating registration: %s", e)
            raise StorageError("Could not save registration") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error creating registration: %s", e)
            raise StorageError("Could not save registration") from e
        return registration

    @staticmethod
    def is_duplicate_registration(db: Session, email: str, event_config_id: int) -> bool:
        count = db.query(func.count(Registration.id)).filter(
            Registration.email == email,
            Registration.event_config_id == event_config_id
        ).scalar()
        return count > 0

    @staticmethod
    def _joined(db: Session):
        return db.query(
            Registration.id,
            Registration.full_name,
            Registration.email,
            Registration.college_name,
            Registration.department,
            Registration.event_category,
            Registration.event_config_id,
            Registration.created,
            EventConfig.event_name,
            EventConfig.event_date,
        ).join(EventConfig, Registration.event_config_id == EventConfig.id)

    @staticmethod
    def _rows(query) -> List[RegistrationRow]:
        rows = query.order_by(Registration.created.desc(), Registration.id.desc()).all()
        return [RegistrationRow.model_validate(row) for row in rows]

    @staticmethod
    def get_all_registrations(db: Session) -> List[RegistrationRow]:
        return RegistrationService._rows(RegistrationService._joined(db))

    @staticmethod
    def get_registrations_by_event_id(db: Session, event_config_id: int) -> List[RegistrationRow]:
        return RegistrationService._rows(
            RegistrationService._joined(db).filter(Registration.event_config_id == event_config_id)
        )

    @staticmethod
    def get_registrations_by_date(db: Session, event_date: date) -> List[RegistrationRow]:
        return RegistrationService._rows(
            RegistrationService._joined(db).filter(EventConfig.event_date == event_date)
        )

    @staticmethod
    def get_registration_count_by_event_id(db: Session, event_config_id: int) -> int:
        return db.query(func.count(Registration.id)).filter(
            Registration.event_config_id == event_config_id
        ).scalar()

    @staticmethod
    def filter_registrations(
        db: Session,
        event_date: Optional[date] = None,
        event_config_id: Optional[int] = None
    ) -> List[RegistrationRow]:
        """Apply the listing filter: event id first, then date, else everything"""
        if event_config_id:
            return RegistrationService.get_registrations_by_event_id(db, event_config_id)
        if event_date:
            return RegistrationService.get_registrations_by_date(db, event_date)
        return RegistrationService.get_all_registrations(db)
