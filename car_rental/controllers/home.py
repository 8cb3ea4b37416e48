import logging

from flask import (
    Blueprint, render_template, request, url_for, jsonify, current_app, send_from_directory,
)
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import ValidationError, ConflictError, VehicleNotFoundError, UploadError
from ..services.upload_service import save_upload
from ..services.vehicle_service import VehicleService
from ..utils.constants import Role, VEHICLE_UPLOAD_DIR, PROFILE_UPLOAD_DIR
from ..utils.decorators import role_required, login_required

logger = logging.getLogger(__name__)

bp = Blueprint("home", __name__)

FLEET_ROLES = (Role.ADMIN, Role.MANAGER)


def _fail(message: str, status: int):
    return jsonify(success=False, message=message), status


# ---------------- Pages ----------------
@bp.get("/")
@bp.get("/Home")
@bp.get("/Home/Index")
def index():
    vehicle_type = (request.args.get("vehicleType") or "").strip() or None
    try:
        vehicles = VehicleService.featured(vehicle_type)
    except SQLAlchemyError:
        logger.exception("Error retrieving featured vehicles")
        vehicles = []
    return render_template("home/index.html", vehicles=vehicles, selected_type=vehicle_type)


@bp.get("/Home/AvailableCars")
def available_cars():
    try:
        vehicles = VehicleService.list_available_first()
    except SQLAlchemyError:
        logger.exception("Error retrieving vehicles")
        vehicles = []
    return render_template("home/available_cars.html", vehicles=vehicles)


@bp.get("/Home/ViewAllVehicles")
def view_all_vehicles():
    try:
        vehicles = VehicleService.list_all()
    except SQLAlchemyError:
        logger.exception("Error retrieving vehicles")
        vehicles = []
    return render_template("manager/view_all_vehicles.html", vehicles=vehicles)


@bp.get("/Home/ViewVehiclesByCategory")
@bp.get("/Home/ViewVehiclesByCategory/<category>")
def vehicles_by_category(category=None):
    category = (category or request.args.get("category") or "").strip()
    try:
        vehicles = VehicleService.by_category(category) if category else []
    except SQLAlchemyError:
        logger.exception("Error retrieving vehicles by category")
        vehicles = []
    return render_template("customer/vehicles_by_category.html", vehicles=vehicles, category=category)


@bp.get("/Home/Services")
def services():
    return render_template("home/services.html")


@bp.get("/Home/About")
def about():
    return render_template("home/about.html")


@bp.get("/Home/Contact")
def contact():
    return render_template("home/contact.html")


@bp.get("/Home/VehicleTypes")
def vehicle_types():
    return render_template("home/vehicle_types.html")


@bp.get("/Home/Privacy")
def privacy():
    return render_template("home/privacy.html")


# ---------------- Fleet API ----------------
@bp.get("/Home/GetFleet")
def get_fleet():
    try:
        vehicles = VehicleService.list_all()
    except SQLAlchemyError as e:
        logger.exception("Error retrieving fleet")
        return _fail(str(e), 500)
    return jsonify([v.to_dict() for v in vehicles])


@bp.post("/Home/AddVehicle")
@role_required(*FLEET_ROLES, api=True)
def add_vehicle(identity):
    payload = request.get_json(silent=True) or {}
    try:
        vehicle = VehicleService.create_vehicle(payload)
    except (ValidationError, ConflictError) as e:
        return _fail(e.message, 400)
    except SQLAlchemyError as e:
        logger.exception("Error adding vehicle")
        return _fail(f"Error adding vehicle: {e}", 500)

    logger.info("Vehicle %s added by user %s", vehicle.id, identity.user_id)
    return jsonify(success=True, message="Vehicle added successfully!", vehicleId=vehicle.id,
                   redirectUrl=url_for("home.available_cars"))


@bp.put("/Home/UpdateVehicle")
@role_required(*FLEET_ROLES, api=True)
def update_vehicle(identity):
    payload = request.get_json(silent=True) or {}
    try:
        VehicleService.update_vehicle(payload)
    except VehicleNotFoundError as e:
        return _fail(e.message, 404)
    except (ValidationError, ConflictError) as e:
        return _fail(e.message, 400)
    except SQLAlchemyError as e:
        logger.exception("Error updating vehicle %s", payload.get("id"))
        return _fail(f"Error updating vehicle: {e}", 500)
    return jsonify(success=True, message="Vehicle updated successfully!")


@bp.delete("/Home/DeleteVehicle/<vehicle_id>")
@role_required(*FLEET_ROLES, api=True)
def delete_vehicle(vehicle_id, identity):
    try:
        VehicleService.delete_vehicle(vehicle_id, current_app.config["UPLOAD_ROOT"])
    except VehicleNotFoundError as e:
        return _fail(e.message, 404)
    except SQLAlchemyError as e:
        logger.exception("Error deleting vehicle %s", vehicle_id)
        return _fail(str(e), 500)
    return jsonify(success=True, message="Vehicle deleted successfully")


@bp.post("/Home/DeleteVehicle")
def delete_vehicle_post():
    """Form fallback for clients that cannot send DELETE."""
    return delete_vehicle(request.form.get("id") or "")


# ---------------- Uploads ----------------
@bp.post("/Home/UploadVehicleImage")
@role_required(*FLEET_ROLES, api=True)
def upload_vehicle_image(identity):
    try:
        url = save_upload(request.files.get("file"), VEHICLE_UPLOAD_DIR)
    except UploadError as e:
        return _fail(e.message, 400)
    except OSError as e:
        logger.exception("Error uploading vehicle image")
        return _fail(str(e), 500)
    return jsonify(success=True, url=url)


@bp.post("/Home/UploadProfileImage")
@login_required(api=True)
def upload_profile_image(identity):
    try:
        url = save_upload(request.files.get("file"), PROFILE_UPLOAD_DIR,
                          prefix=f"profile_{identity.user_id}_")
    except UploadError as e:
        return _fail(e.message, 400)
    except OSError as e:
        logger.exception("Error uploading profile image")
        return _fail(str(e), 500)
    return jsonify(success=True, url=url)


@bp.get("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_ROOT"], filename)


# ---------------- Errors ----------------
@bp.get("/Home/Error")
def error():
    return render_template("home/error.html", request_id=request.headers.get("X-Request-ID"))
