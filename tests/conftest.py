"""Shared fixtures: in-memory SQLite database, employees and templates."""

from datetime import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (register tables on Base.metadata)
from app.database import Base
from app.models.employee import Employee
from app.schemas.schedule_template import BreakSchema, DayConfiguration
from app.services.template_service import ScheduleTemplateService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def employees(db):
    """Three active employees."""
    rows = [
        Employee(name="Ana", employee_code="EMP001", is_active=True),
        Employee(name="Luis", employee_code="EMP002", is_active=True),
        Employee(name="Marta", employee_code="EMP003", is_active=True),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def office_days(start=time(9), end=time(17), breaks=None) -> list[DayConfiguration]:
    """Monday-Friday regular day, weekend off."""
    return [
        DayConfiguration(
            day_of_week=d,
            is_working_day=1 <= d <= 5,
            start_time=start,
            end_time=end,
            breaks=breaks or [],
        )
        for d in range(7)
    ]


def split_days() -> list[DayConfiguration]:
    """Monday-Saturday split shift 09-13 / 15-19."""
    return [
        DayConfiguration(
            day_of_week=d,
            is_working_day=d != 0,
            is_split_schedule=True,
            morning_start=time(9),
            morning_end=time(13),
            afternoon_start=time(15),
            afternoon_end=time(19),
        )
        for d in range(7)
    ]


@pytest.fixture
def lunch_break():
    return BreakSchema(name="Comida", start_time=time(13), end_time=time(14), is_paid=False)


@pytest.fixture
def template_service(db):
    return ScheduleTemplateService(db)


@pytest.fixture
def office_template(template_service, lunch_break):
    return template_service.create_template("Oficina", "L-V", office_days(breaks=[lunch_break]))


@pytest.fixture
def split_template(template_service):
    return template_service.create_template("Partido", None, split_days())
