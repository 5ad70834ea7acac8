from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tourhub.core.config import Settings, get_settings
from tourhub.db.base import Base, get_db
from tourhub.db.models import Booking, Payment, Review, ServiceCombo, User
from tourhub.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def settings():
    return Settings(
        report_timezone=None,
        top_combo_limit=3,
        image_base_url="http://img.test/images",
        default_image_url="http://img.test/default.jpg",
    )


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, settings):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seeded_host(db):
    """Host 1 with two combos; host 2 with one combo that must never leak in."""
    host = User(id=1, email="host@example.com", name="Host", role="host")
    other = User(id=2, email="other@example.com", name="Other", role="host")
    guest = User(id=3, email="guest@example.com", name="Guest")
    db.add_all([host, other, guest])

    db.add_all([
        ServiceCombo(id=10, host_id=1, name="Ha Long Cruise", image="halong.jpg", price=500000),
        ServiceCombo(id=11, host_id=1, name="Sapa Trek", image="https://cdn.test/sapa.png", price=300000),
        ServiceCombo(id=20, host_id=2, name="Elsewhere", price=100000),
    ])

    db.add_all([
        # completed, no payment rows -> synthesized on confirmed_date
        Booking(id=100, user_id=3, service_combo_id=10, total_amount=500000, status="completed",
                created_at=datetime(2024, 3, 1, 9, 0), confirmed_date=datetime(2024, 3, 10, 12, 0)),
        # confirmed with an explicit payment row
        Booking(id=101, user_id=3, service_combo_id=11, total_amount=300000, status="confirmed",
                created_at=datetime(2024, 3, 2, 9, 0)),
        Booking(id=102, user_id=3, service_combo_id=11, total_amount=999999, status="pending",
                created_at=datetime(2024, 3, 3, 9, 0)),
        Booking(id=103, user_id=3, service_combo_id=10, total_amount=700000, status="cancelled",
                created_at=datetime(2024, 3, 4, 9, 0)),
        Booking(id=200, user_id=3, service_combo_id=20, total_amount=123000, status="completed",
                created_at=datetime(2024, 3, 5, 9, 0)),
    ])
    db.add(Payment(id=1000, booking_id=101, amount=250000, status="success", method="card",
                   payment_date=datetime(2024, 3, 15, 8, 30)))

    db.add_all([
        Review(id=1, booking_id=100, user_id=3, rating=4),
        Review(id=2, booking_id=101, user_id=3, rating=0),
        Review(id=3, booking_id=200, user_id=3, rating=5),
    ])
    db.commit()
    return host
