"""
Vehicle deletion and its best-effort image clean-up:
- a local upload under /uploads/vehicles/ is removed with the row;
- external URLs are left alone;
- a failing file delete never blocks the row delete;
- a failing row delete leaves the image in place.
"""
import os

import pytest
from sqlalchemy.exc import IntegrityError

from car_rental.exceptions import VehicleNotFoundError
from car_rental.models import db, Vehicle
from car_rental.services import vehicle_service as vs
from car_rental.services.vehicle_service import VehicleService, local_upload_path


def _upload(app, name="car.jpg"):
    folder = os.path.join(app.config["UPLOAD_ROOT"], "vehicles")
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, name)
    with open(path, "wb") as f:
        f.write(b"\x89PNG")
    return path


def test_delete_removes_local_image(app, vehicle_payload):
    path = _upload(app)
    vehicle = VehicleService.create_vehicle(vehicle_payload(imageUrl="/uploads/vehicles/car.jpg"))
    VehicleService.delete_vehicle(vehicle.id, app.config["UPLOAD_ROOT"])
    assert not os.path.exists(path)
    assert db.session.get(Vehicle, vehicle.id) is None


def test_delete_with_external_image_succeeds(app, vehicle_payload):
    path = _upload(app)
    vehicle = VehicleService.create_vehicle(vehicle_payload(imageUrl="https://cdn.example.com/car.jpg"))
    VehicleService.delete_vehicle(vehicle.id, app.config["UPLOAD_ROOT"])
    assert os.path.exists(path)
    assert Vehicle.query.count() == 0


def test_file_delete_failure_does_not_block(app, vehicle_payload, monkeypatch):
    _upload(app)
    vehicle = VehicleService.create_vehicle(vehicle_payload(imageUrl="/uploads/vehicles/car.jpg"))

    def boom(path):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(vs.os, "remove", boom)
    VehicleService.delete_vehicle(vehicle.id, app.config["UPLOAD_ROOT"])
    assert Vehicle.query.count() == 0


def test_delete_missing_vehicle(app):
    with pytest.raises(VehicleNotFoundError):
        VehicleService.delete_vehicle(404, app.config["UPLOAD_ROOT"])


def test_local_upload_path_rules(tmp_path):
    root = str(tmp_path)
    prefix = "/uploads/vehicles/"
    assert local_upload_path("/uploads/vehicles/a.jpg", root, prefix) == os.path.realpath(
        os.path.join(root, "vehicles", "a.jpg"))
    assert local_upload_path("/UPLOADS/Vehicles/a.jpg", root, prefix) is not None
    assert local_upload_path("/uploads/profiles/a.jpg", root, prefix) is None
    assert local_upload_path("https://cdn.example.com/a.jpg", root, prefix) is None
    assert local_upload_path("/uploads/vehicles/../../etc/passwd", root, prefix) is None
    assert local_upload_path("", root, prefix) is None


def test_failed_row_delete_keeps_image(app, vehicle_payload, monkeypatch):
    path = _upload(app)
    vehicle = VehicleService.create_vehicle(vehicle_payload(imageUrl="/uploads/vehicles/car.jpg"))
    vid = vehicle.id

    def locked():
        raise IntegrityError("DELETE FROM vehicles", {}, Exception("row is referenced"))

    monkeypatch.setattr(db.session, "commit", locked)
    with pytest.raises(IntegrityError):
        VehicleService.delete_vehicle(vid, app.config["UPLOAD_ROOT"])
    monkeypatch.undo()
    db.session.rollback()

    assert os.path.exists(path)
    assert db.session.get(Vehicle, vid) is not None
