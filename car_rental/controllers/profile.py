import logging

from flask import Blueprint, render_template, request, redirect, url_for, session, jsonify, flash
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import ValidationError, UserNotFoundError
from ..services.profile_service import ProfileService
from ..utils.constants import Role, SESSION_USER_NAME
from ..utils.decorators import role_required

logger = logging.getLogger(__name__)

bp = Blueprint("profile", __name__, url_prefix="/Home")


@bp.get("/Profile")
@role_required(Role.CUSTOMER)
def profile(identity):
    try:
        view = ProfileService.get_profile(identity.user_id)
    except UserNotFoundError:
        session.clear()
        flash("Please login first", "warning")
        return redirect(url_for("account.login_form"))
    return render_template("customer/profile.html", profile=view, identity=identity)


@bp.post("/UpdateProfile")
@role_required(Role.CUSTOMER, api=True)
def update_profile(identity):
    payload = request.get_json(silent=True) or request.form.to_dict()
    try:
        user = ProfileService.update_profile(identity.user_id, payload)
    except (ValidationError, UserNotFoundError) as e:
        return jsonify(success=False, message=e.message)
    except SQLAlchemyError as e:
        logger.exception("Error updating user profile")
        return jsonify(success=False, message=f"Error updating profile: {e}"), 500

    session[SESSION_USER_NAME] = user.full_name
    return jsonify(success=True, message="Profile updated successfully!")


@bp.get("/CheckProfileCompletion")
@role_required(Role.CUSTOMER, api=True)
def check_profile_completion(identity):
    try:
        return jsonify(ProfileService.completion(identity.user_id))
    except UserNotFoundError as e:
        return jsonify(success=False, message=e.message)
    except SQLAlchemyError as e:
        logger.exception("Error checking profile completion")
        return jsonify(success=False, message=f"Error checking profile completion: {e}"), 500
