from __future__ import annotations

import logging

from .common import clean, clean_optional, to_int_safe, pick, check_length
from .user_service import UserService
from ..exceptions import ValidationError
from ..models.store import db, run_with_retry
from ..models.user import User
from ..models.view_models import ProfileView
from ..utils.constants import MAX_EXPERIENCE_YEARS, PROFILE_COMPLETE_MSG, PROFILE_INCOMPLETE_MSG

logger = logging.getLogger(__name__)

# (column, json keys, label, max length) for the optional profile strings
_OPTIONAL_FIELDS = (
    ("address", ("address",), "Address", 200),
    ("profile_image_url", ("profileImageUrl", "profile_image_url"), "Profile image", 500),
    ("preferred_car_type", ("preferredCarType", "preferred_car_type"), "Preferred car type", 50),
    ("driving_license_image_url", ("drivingLicenseImageUrl", "driving_license_image_url"),
     "Driving license image", 500),
    ("nid_image_url", ("nidImageUrl", "nid_image_url"), "National ID image", 500),
    ("car_number", ("carNumber", "car_number"), "Car number", 20),
    ("license_number", ("licenseNumber", "license_number"), "License number", 100),
)


class ProfileService:
    """Customer profile read/update and the derived completeness check."""

    @staticmethod
    def get_profile(user_id: int) -> ProfileView:
        return ProfileView.from_model(UserService.get_user(user_id))

    @staticmethod
    def update_profile(user_id: int, payload: dict) -> User:
        """Overwrite the editable profile fields. Email, role and password are not touched."""
        payload = payload or {}
        user = UserService.get_user(user_id)

        values = {
            "first_name": clean(pick(payload, "firstName", "first_name")),
            "last_name": clean(pick(payload, "lastName", "last_name")),
            "phone_number": clean(pick(payload, "phoneNumber", "phone_number")),
        }
        errors = {}
        check_length(errors, "first_name", values["first_name"], "First name", 50)
        check_length(errors, "last_name", values["last_name"], "Last name", 50)
        check_length(errors, "phone_number", values["phone_number"], "Phone number", 20)

        for column, keys, label, max_len in _OPTIONAL_FIELDS:
            values[column] = clean_optional(pick(payload, *keys))
            check_length(errors, column, values[column] or "", label, max_len, required=False)

        raw_exp = pick(payload, "drivingExperienceYears", "driving_experience_years")
        if raw_exp is None or clean(raw_exp) == "":
            values["driving_experience_years"] = None
        else:
            exp = to_int_safe(raw_exp)
            if exp is None or not (0 <= exp <= MAX_EXPERIENCE_YEARS):
                errors["driving_experience_years"] = (
                    f"Driving experience must be between 0 and {MAX_EXPERIENCE_YEARS} years")
            values["driving_experience_years"] = exp

        if errors:
            raise ValidationError(errors=errors)

        def work():
            for column, value in values.items():
                setattr(user, column, value)
            db.session.commit()
            return user

        run_with_retry(work)
        logger.info("Profile of user %s updated", user.id)
        return user

    @staticmethod
    def completion(user_id: int) -> dict:
        profile = ProfileService.get_profile(user_id)
        complete = profile.is_profile_complete
        return {
            "success": True,
            "isProfileComplete": complete,
            "isDrivingInfoComplete": profile.is_driving_info_complete,
            "isDocumentsComplete": profile.is_documents_complete,
            "message": PROFILE_COMPLETE_MSG if complete else PROFILE_INCOMPLETE_MSG,
        }
