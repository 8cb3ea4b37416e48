from datetime import datetime

from .store import db
from ..utils.constants import Role


class User(db.Model):
    """
    Account and profile record. ``role`` is stored as a plain string for
    compatibility with existing rows; services only write values of ``Role``.
    Email is unique with an exact (case-sensitive) comparison.
    """
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    phone_number = db.Column(db.String(20), nullable=False)
    address = db.Column(db.String(200))
    role = db.Column(db.String(20), nullable=False, default=Role.CUSTOMER.value,
                     server_default=Role.CUSTOMER.value)
    is_active = db.Column(db.Boolean, nullable=False, default=True, server_default=db.true())
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now,
                           server_default=db.func.current_timestamp())

    # Optional profile fields
    profile_image_url = db.Column(db.String(500))
    preferred_car_type = db.Column(db.String(50))
    driving_license_image_url = db.Column(db.String(500))
    nid_image_url = db.Column(db.String(500))
    car_number = db.Column(db.String(20))
    driving_experience_years = db.Column(db.Integer)
    license_number = db.Column(db.String(100))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User {self.email}>"
