from datetime import datetime

from .store import db
from ..utils.constants import VehicleStatus, MIN_YEAR, MAX_YEAR, MAX_DAILY_RATE


class Vehicle(db.Model):
    """
    Fleet asset. ``features`` keeps the comma-joined encoding of the existing
    data, so a single feature can never contain a comma.
    Registration and chassis numbers are each globally unique.
    """
    __tablename__ = "vehicles"
    __table_args__ = (
        db.CheckConstraint(f"year BETWEEN {MIN_YEAR} AND {MAX_YEAR}", name="ck_vehicles_year"),
        db.CheckConstraint(f"daily_rate >= 0 AND daily_rate <= {MAX_DAILY_RATE}", name="ck_vehicles_rate"),
    )

    id = db.Column(db.Integer, primary_key=True)
    vehicle_type = db.Column(db.String(50), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    registration_number = db.Column(db.String(20), unique=True, nullable=False)
    chassis_number = db.Column(db.String(50), unique=True, nullable=False)
    color = db.Column(db.String(30), nullable=False)
    engine_capacity = db.Column(db.String(20), nullable=False)
    fuel_type = db.Column(db.String(20), nullable=False)
    daily_rate = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    seats = db.Column(db.Integer, nullable=False, default=1)
    status = db.Column(db.String(20), nullable=False, default=VehicleStatus.AVAILABLE.value)
    image_url = db.Column(db.String(500), nullable=False, default="")
    description = db.Column(db.String(1000), nullable=False, default="")
    features = db.Column(db.String(500), nullable=False, default="")
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now,
                           server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime)

    def __repr__(self) -> str:
        return f"<Vehicle {self.registration_number}>"
