import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from car_rental import create_app
from car_rental.config import TestConfig
from car_rental.models import db
from car_rental.services.user_service import UserService

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture
def app(tmp_path):
    """
    Fresh app per test: its own SQLite file and upload directory.
    The app context stays pushed so service-layer tests can use db.session directly.
    """
    app = create_app(
        TestConfig,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_ROOT=str(tmp_path / "uploads"),
    )
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_user(app):
    """Register a user through the service layer and return it."""
    counter = {"n": 0}

    def _make(email=None, role="Customer", password=DEFAULT_PASSWORD, **extra):
        counter["n"] += 1
        form = {
            "first_name": extra.pop("first_name", "Test"),
            "last_name": extra.pop("last_name", f"User{counter['n']}"),
            "email": email or f"user{counter['n']}@example.com",
            "password": password,
            "confirm_password": password,
            "phone_number": extra.pop("phone_number", "01700000000"),
            "address": extra.pop("address", "Dhaka"),
            "role": role,
        }
        form.update(extra)
        return UserService.register(form)

    return _make


@pytest.fixture
def login(client):
    def _login(email, password=DEFAULT_PASSWORD, follow=False):
        return client.post("/Account/Login", data={"email": email, "password": password},
                           follow_redirects=follow)

    return _login


def _vehicle_payload(**overrides):
    payload = {
        "vehicleType": "Private Car",
        "model": "Toyota Corolla",
        "year": 2020,
        "registrationNumber": "DHA-GA-1001",
        "chassisNumber": "CH-0001",
        "color": "White",
        "engineCapacity": "1500cc",
        "fuelType": "Petrol",
        "dailyRate": 45.5,
        "seats": 5,
        "imageUrl": "",
        "description": "Reliable sedan",
        "features": ["AC", "GPS"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def vehicle_payload():
    """Factory for a valid AddVehicle JSON body (camelCase, as the browser sends it)."""
    return _vehicle_payload
