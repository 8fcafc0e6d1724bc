"""
Tests for registration storage and listing filters
"""

import pytest
from datetime import date, datetime
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.core.db import Base
from app.core.errors import DuplicateError, StorageError
from app.models import EventConfig, Registration
from app.schemas.registration import RegistrationCreate
from app.services.registration_service import RegistrationService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_registrations.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def events(db_session):
    """Two events on one date and one on another"""
    rows = [
        EventConfig(event_name="Hack Day", event_category="Hackathon", event_date=date(2024, 7, 1),
                    registration_start_date=date(2024, 6, 1), registration_end_date=date(2024, 6, 30)),
        EventConfig(event_name="AI Sprint", event_category="Hackathon", event_date=date(2024, 7, 1),
                    registration_start_date=date(2024, 6, 1), registration_end_date=date(2024, 6, 30)),
        EventConfig(event_name="Data Summit", event_category="Conference", event_date=date(2024, 8, 1),
                    registration_start_date=date(2024, 6, 1), registration_end_date=date(2024, 7, 31)),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for row in rows:
        db_session.refresh(row)
    return rows

def registration_data(event, email="jane@example.com", name="Jane Doe"):
    return RegistrationCreate(
        full_name=name,
        email=email,
        college_name="MIT",
        department="CS",
        event_category=event.event_category,
        event_config_id=event.id
    )

@pytest.fixture
def registrations(db_session, events):
    hack_day, ai_sprint, summit = events
    created = [
        RegistrationService.create_registration(db_session, registration_data(hack_day, "a@example.com", "Ann"), datetime(2024, 6, 10, 9, 0, 0)),
        RegistrationService.create_registration(db_session, registration_data(hack_day, "b@example.com", "Bob"), datetime(2024, 6, 11, 9, 0, 0)),
        RegistrationService.create_registration(db_session, registration_data(ai_sprint, "c@example.com", "Cal"), datetime(2024, 6, 12, 9, 0, 0)),
        RegistrationService.create_registration(db_session, registration_data(summit, "d@example.com", "Dee"), datetime(2024, 6, 13, 9, 0, 0)),
    ]
    return created

def test_create_registration(db_session, events):
    registration = RegistrationService.create_registration(
        db_session, registration_data(events[0]), datetime(2024, 6, 15, 10, 30, 0)
    )
    assert registration.id is not None
    assert registration.event_category == "Hackathon"
    assert registration.created == datetime(2024, 6, 15, 10, 30, 0)
    assert db_session.query(Registration).count() == 1

def test_event_category_is_copied_from_input(db_session, events):
    """The stored category is whatever the form submitted"""
    data = registration_data(events[0])
    data.event_category = "Conference"
    registration = RegistrationService.create_registration(db_session, data)
    assert registration.event_category == "Conference"

def test_is_duplicate_registration(db_session, events):
    RegistrationService.create_registration(db_session, registration_data(events[0]))

    assert RegistrationService.is_duplicate_registration(db_session, "jane@example.com", events[0].id)
    assert not RegistrationService.is_duplicate_registration(db_session, "jane@example.com", events[1].id)
    assert not RegistrationService.is_duplicate_registration(db_session, "other@example.com", events[0].id)

def test_unique_constraint_raises_duplicate_error(db_session, events):
    """A second insert that skipped the pre-check is still rejected"""
    RegistrationService.create_registration(db_session, registration_data(events[0]))

    with pytest.raises(DuplicateError):
        RegistrationService.create_registration(db_session, registration_data(events[0]))

    assert db_session.query(Registration).count() == 1

def test_create_registration_storage_failure(db_session, events, monkeypatch):
    """Store failures surface as StorageError and nothing is kept"""
    def failing_commit():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(StorageError):
        RegistrationService.create_registration(db_session, registration_data(events[0]))

    monkeypatch.undo()
    assert db_session.query(Registration).count() == 0

def test_get_all_registrations_newest_first(db_session, registrations):
    rows = RegistrationService.get_all_registrations(db_session)
    assert [row.full_name for row in rows] == ["Dee", "Cal", "Bob", "Ann"]
    assert rows[0].event_name == "Data Summit"
    assert rows[0].event_date == date(2024, 8, 1)
    assert rows[0].submission_date == "2024-06-13 09:00:00"

def test_get_registrations_by_event_id(db_session, events, registrations):
    rows = RegistrationService.get_registrations_by_event_id(db_session, events[0].id)
    assert [row.full_name for row in rows] == ["Bob", "Ann"]

def test_get_registrations_by_date(db_session, registrations):
    rows = RegistrationService.get_registrations_by_date(db_session, date(2024, 7, 1))
    assert [row.full_name for row in rows] == ["Cal", "Bob", "Ann"]

def test_get_registration_count_by_event_id(db_session, events, registrations):
    assert RegistrationService.get_registration_count_by_event_id(db_session, events[0].id) == 2
    assert RegistrationService.get_registration_count_by_event_id(db_session, events[2].id) == 1
    assert RegistrationService.get_registration_count_by_event_id(db_session, 999) == 0

def test_filter_precedence_event_id_wins(db_session, events, registrations):
    """With both filters set the event id decides, even if the date disagrees"""
    rows = RegistrationService.filter_registrations(db_session, date(2024, 8, 1), events[1].id)
    assert [row.full_name for row in rows] == ["Cal"]

def test_filter_by_date_only(db_session, registrations):
    rows = RegistrationService.filter_registrations(db_session, date(2024, 8, 1), None)
    assert [row.full_name for row in rows] == ["Dee"]

def test_filter_without_criteria_returns_all(db_session, registrations):
    assert len(RegistrationService.filter_registrations(db_session)) == 4
