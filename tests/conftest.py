"""Pytest configuration and fixtures."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from courselib.api.property_mappings import build_property_mapping_registry
from courselib.database.schema import Author, Course, Base

CATEGORIES = ("Ships", "Rum", "Maps")


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def registry():
    """Frozen registry with the built-in AuthorDto -> Author mapping."""
    return build_property_mapping_registry()


def make_author(index: int) -> Author:
    # Pairs of authors share a last name so secondary sort keys matter.
    return Author(
        id=f"author-{index:02d}",
        first_name=f"Given{index:02d}",
        last_name=f"Surname{index // 2:02d}",
        date_of_birth=date(1900 + index, 1 + index % 12, 1 + index % 28),
        main_category=CATEGORIES[index % len(CATEGORIES)],
    )


@pytest.fixture
def authors(session):
    """25 persisted authors; the first one has two courses."""
    rows = [make_author(i) for i in range(25)]
    rows[0].courses.extend([
        Course(id="course-b", title="Overthrowing Mutiny", description="Avoid or overthrow mutiny."),
        Course(id="course-a", title="Commandeering a Ship", description="Rough waters."),
    ])
    session.add_all(rows)
    session.commit()
    return rows
