import os

# Must be set before innkeep.config is imported (settings are cached)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["HOUSEKEEPING_REMINDER_ENABLED"] = "false"
os.environ["RECURRING_TASKS_ENABLED"] = "false"
os.environ["SENDGRID_API_KEY"] = "SG.test-key"
os.environ["FROM_EMAIL"] = "frontdesk@innkeep.test"
os.environ["SENDGRID_BOOKING_TEMPLATE_ID"] = ""
os.environ["SENDGRID_HOUSEKEEPING_TEMPLATE_ID"] = ""
os.environ["TWILIO_ACCOUNT_SID"] = "AC-test"
os.environ["TWILIO_AUTH_TOKEN"] = "twilio-token"
os.environ["TWILIO_PHONE_NUMBER"] = "+15550000000"
os.environ["ADMIN_USERNAME"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient

from innkeep.database import Base, SessionLocal, engine
import innkeep.models  # noqa: F401
from innkeep.services.auth import create_access_token
from innkeep.services.properties import PropertiesService
from innkeep.services.rooms import RoomsService
from innkeep.services.staff import StaffService
from innkeep.services.users import UsersService


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from innkeep.main import app
    with TestClient(app) as c:
        yield c


def _headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.username, user.role)}"}


@pytest.fixture
def admin_user(db):
    return UsersService(db).create({"username": "admin", "password": "secret-pass", "role": "admin"})


@pytest.fixture
def auth_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def staff_headers(db):
    user = UsersService(db).create({"username": "frontdesk", "password": "secret-pass", "role": "staff"})
    return _headers(user)


@pytest.fixture
def hotel(db):
    return PropertiesService(db).create({"name": "Grand Plaza", "address": "1 Main St", "city": "Lisbon"})


@pytest.fixture
def rooms(db, hotel):
    return RoomsService(db).bulk_create([
        {"property_id": hotel.id, "number": "101", "floor": 1},
        {"property_id": hotel.id, "number": "102", "floor": 1},
    ])


@pytest.fixture
def housekeeper(db, hotel):
    return StaffService(db).create({
        "property_id": hotel.id,
        "first_name": "Ana",
        "last_name": "Silva",
        "email": "ana@innkeep.test",
        "phone_number": "+15551112222",
        "role": "housekeeper",
    })
