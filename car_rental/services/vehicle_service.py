from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, func

from .common import clean, to_int_safe, to_decimal_safe, pick, check_length, commit_unique
from ..exceptions import (
    ValidationError, VehicleNotFoundError, DuplicateRegistrationError, DuplicateChassisError,
)
from ..models.store import db, run_with_retry
from ..models.vehicle import Vehicle
from ..models.view_models import VehicleView, join_features
from ..utils.constants import (
    VehicleStatus, VEHICLE_UPLOAD_PREFIX, UPLOAD_URL_PREFIX, FEATURE_SEPARATOR,
    MIN_YEAR, MAX_YEAR, MAX_DAILY_RATE, MIN_SEATS, MAX_SEATS,
)

logger = logging.getLogger(__name__)

# (field, label, max length) of the required text columns
_TEXT_FIELDS = (
    ("vehicle_type", "Vehicle type", 50),
    ("model", "Model", 100),
    ("registration_number", "Registration number", 20),
    ("chassis_number", "Chassis number", 50),
    ("color", "Color", 30),
    ("engine_capacity", "Engine capacity", 20),
    ("fuel_type", "Fuel type", 20),
)


def _views(vehicles) -> List[VehicleView]:
    return [VehicleView.from_model(v) for v in vehicles]


class VehicleService:
    """Vehicle catalogue: listings, create, update, delete."""

    # --------------- Queries ---------------
    @staticmethod
    def featured(vehicle_type: Optional[str] = None, limit: int = 6) -> List[VehicleView]:
        """Newest vehicles for the home page, optionally of one type (case-insensitive)."""

        def work():
            q = Vehicle.query
            if vehicle_type:
                q = q.filter(func.lower(Vehicle.vehicle_type) == vehicle_type.strip().lower())
            return q.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).limit(limit).all()

        return _views(run_with_retry(work))

    @staticmethod
    def list_all() -> List[VehicleView]:
        return _views(run_with_retry(
            lambda: Vehicle.query.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()
        ))

    @staticmethod
    def list_available_first() -> List[VehicleView]:
        """Every vehicle; 'Available' ones first, then newest first."""
        not_available = case((Vehicle.status == VehicleStatus.AVAILABLE.value, 0), else_=1)
        return _views(run_with_retry(
            lambda: Vehicle.query.order_by(not_available, Vehicle.created_at.desc(), Vehicle.id.desc()).all()
        ))

    @staticmethod
    def by_category(category: str) -> List[VehicleView]:
        cat = clean(category).lower()
        return _views(run_with_retry(
            lambda: Vehicle.query.filter(func.lower(Vehicle.vehicle_type) == cat)
            .order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()
        ))

    @staticmethod
    def get_vehicle(vehicle_id) -> Vehicle:
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        vid = to_int_safe(vehicle_id)
        vehicle = run_with_retry(lambda: db.session.get(Vehicle, vid)) if vid is not None else None
        if vehicle is None:
            raise VehicleNotFoundError()
        return vehicle

    # --------------- Validation ---------------
    @staticmethod
    def parse_payload(payload: dict) -> dict:
        """
        Normalize a vehicle JSON/form payload (camelCase or snake_case keys)
        and validate it. Raises ValidationError listing every bad field.
        """
        payload = payload or {}
        data = {
            "vehicle_type": clean(pick(payload, "vehicleType", "vehicle_type")),
            "model": clean(pick(payload, "model")),
            "registration_number": clean(pick(payload, "registrationNumber", "registration_number")),
            "chassis_number": clean(pick(payload, "chassisNumber", "chassis_number")),
            "color": clean(pick(payload, "color")),
            "engine_capacity": clean(pick(payload, "engineCapacity", "engine_capacity")),
            "fuel_type": clean(pick(payload, "fuelType", "fuel_type")),
            "image_url": clean(pick(payload, "imageUrl", "image_url")),
            "description": clean(pick(payload, "description")),
            "status": clean(pick(payload, "status")),
        }
        errors = {}
        for field, label, max_len in _TEXT_FIELDS:
            check_length(errors, field, data[field], label, max_len)
        check_length(errors, "image_url", data["image_url"], "Image URL", 500, required=False)
        check_length(errors, "description", data["description"], "Description", 1000, required=False)

        year = to_int_safe(pick(payload, "year"))
        if year is None or not (MIN_YEAR <= year <= MAX_YEAR):
            errors["year"] = f"Year must be between {MIN_YEAR} and {MAX_YEAR}"
        data["year"] = year

        rate = to_decimal_safe(pick(payload, "dailyRate", "daily_rate"))
        if rate is None or rate < 0 or rate > MAX_DAILY_RATE:
            errors["daily_rate"] = f"Daily rate must be between 0 and {MAX_DAILY_RATE}"
        data["daily_rate"] = rate

        seats = to_int_safe(pick(payload, "seats"))
        if seats is None or not (MIN_SEATS <= seats <= MAX_SEATS):
            errors["seats"] = f"Seats must be between {MIN_SEATS} and {MAX_SEATS}"
        data["seats"] = seats

        features = pick(payload, "features", default=[]) or []
        if isinstance(features, str):
            features = [features]
        if not isinstance(features, list):
            errors["features"] = "Features must be a list"
            features = []
        features = [f for f in features if f is not None]
        if any(FEATURE_SEPARATOR in str(f) for f in features):
            errors["features"] = "A feature cannot contain a comma"
        data["features"] = join_features(str(f) for f in features)
        if len(data["features"]) > 500:
            errors["features"] = "Features cannot be longer than 500 characters"

        if errors:
            raise ValidationError(errors=errors)
        return data

    @staticmethod
    def _conflicts(data: dict, exclude_id: Optional[int] = None):
        def taken(column, value):
            def probe():
                q = db.session.query(Vehicle.id).filter(column == value)
                if exclude_id is not None:
                    q = q.filter(Vehicle.id != exclude_id)
                return q.first() is not None
            return probe

        return [
            (taken(Vehicle.registration_number, data["registration_number"]), DuplicateRegistrationError),
            (taken(Vehicle.chassis_number, data["chassis_number"]), DuplicateChassisError),
        ]

    # --------------- Commands ---------------
    @staticmethod
    def create_vehicle(payload: dict) -> Vehicle:
        """
        Insert a vehicle. Status is always 'Available' and created_at is
        server time, whatever the caller sent. Duplicate registration or
        chassis numbers surface as ConflictError from the unique index.
        """
        data = VehicleService.parse_payload(payload)

        def work():
            vehicle = Vehicle(
                vehicle_type=data["vehicle_type"],
                model=data["model"],
                year=data["year"],
                registration_number=data["registration_number"],
                chassis_number=data["chassis_number"],
                color=data["color"],
                engine_capacity=data["engine_capacity"],
                fuel_type=data["fuel_type"],
                daily_rate=data["daily_rate"],
                seats=data["seats"],
                status=VehicleStatus.AVAILABLE.value,
                image_url=data["image_url"],
                description=data["description"],
                features=data["features"],
                created_at=datetime.now(),
            )
            db.session.add(vehicle)
            commit_unique(VehicleService._conflicts(data))
            return vehicle

        vehicle = run_with_retry(work)
        logger.info("Vehicle %s added (%s)", vehicle.id, vehicle.registration_number)
        return vehicle

    @staticmethod
    def update_vehicle(payload: dict) -> Vehicle:
        """Overwrite all mutable fields; an empty image URL keeps the stored one."""
        payload = payload or {}
        vehicle = VehicleService.get_vehicle(pick(payload, "id", "vehicleId"))
        data = VehicleService.parse_payload(payload)
        status = VehicleStatus.parse(data["status"])
        if status is None:
            raise ValidationError(errors={"status": "Invalid vehicle status"})

        def work():
            vehicle.vehicle_type = data["vehicle_type"]
            vehicle.model = data["model"]
            vehicle.year = data["year"]
            vehicle.registration_number = data["registration_number"]
            vehicle.chassis_number = data["chassis_number"]
            vehicle.color = data["color"]
            vehicle.engine_capacity = data["engine_capacity"]
            vehicle.fuel_type = data["fuel_type"]
            vehicle.daily_rate = data["daily_rate"]
            vehicle.seats = data["seats"]
            vehicle.status = status.value
            vehicle.description = data["description"]
            vehicle.features = data["features"]
            if data["image_url"]:
                vehicle.image_url = data["image_url"]
            vehicle.updated_at = datetime.now()
            commit_unique(VehicleService._conflicts(data, exclude_id=vehicle.id))
            return vehicle

        run_with_retry(work)
        logger.info("Vehicle %s updated", vehicle.id)
        return vehicle

    @staticmethod
    def delete_vehicle(vehicle_id, upload_root: str) -> None:
        """
        Delete the row, then remove a locally uploaded image (URL under
        /uploads/vehicles/) best-effort: file errors are logged and never undo
        the delete. The image is kept when the row delete fails.
        """
        vehicle = VehicleService.get_vehicle(vehicle_id)
        image_url = (vehicle.image_url or "").replace("\\", "/")
        vid = vehicle.id

        def work():
            db.session.delete(vehicle)
            db.session.commit()

        run_with_retry(work)
        logger.info("Vehicle %s deleted", vid)

        try:
            path = local_upload_path(image_url, upload_root, VEHICLE_UPLOAD_PREFIX)
            if path and os.path.isfile(path):
                os.remove(path)
                logger.info("Removed image %s of vehicle %s", path, vid)
        except OSError:
            logger.warning("Failed to delete vehicle image for vehicle %s", vid, exc_info=True)


def local_upload_path(url: str, upload_root: str, required_prefix: str) -> Optional[str]:
    """
    Map '/uploads/vehicles/x.jpg' to a file under ``upload_root``.
    Returns None for URLs outside ``required_prefix`` (case-insensitive) or
    ones that would escape the upload root.
    """
    if not url or not url.lower().startswith(required_prefix.lower()):
        return None
    relative = url[len(UPLOAD_URL_PREFIX):]
    root = os.path.realpath(upload_root)
    full = os.path.realpath(os.path.join(root, *relative.split("/")))
    if os.path.commonpath([root, full]) != root:
        return None
    return full
