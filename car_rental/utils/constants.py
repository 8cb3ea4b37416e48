# car_rental/utils/constants.py

"""
Global constants for roles, statuses, upload locations and default images.
These constants are imported by both models and services.
"""
from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    CUSTOMER = "Customer"

    @classmethod
    def parse(cls, value):
        """Return the matching Role or None for anything unrecognized."""
        try:
            return cls((value or "").strip())
        except ValueError:
            return None


class VehicleStatus(str, Enum):
    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"

    @classmethod
    def parse(cls, value):
        try:
            return cls((value or "").strip())
        except ValueError:
            return None


# Session keys
SESSION_USER_ID = "user_id"
SESSION_USER_EMAIL = "user_email"
SESSION_USER_NAME = "user_name"
SESSION_USER_ROLE = "user_role"
SESSION_LAST_SEEN = "last_seen"

# Landing page (endpoint) per role after login
ROLE_LANDING = {
    Role.ADMIN.value: "dashboards.admin_dashboard",
    Role.MANAGER.value: "dashboards.dashboard",
    Role.CUSTOMER.value: "dashboards.customer_dashboard",
}
DEFAULT_LANDING = "dashboards.dashboard"

# --- Uploads ---
UPLOAD_URL_PREFIX = "/uploads/"
VEHICLE_UPLOAD_DIR = "vehicles"
PROFILE_UPLOAD_DIR = "profiles"
VEHICLE_UPLOAD_PREFIX = UPLOAD_URL_PREFIX + VEHICLE_UPLOAD_DIR + "/"

# --- Default vehicle images, keyed by lower-cased vehicle type ---
GENERIC_VEHICLE_IMAGE = "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?w=400&h=300&fit=crop"
DEFAULT_VEHICLE_IMAGES = {
    "motor bike": "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=400&h=300&fit=crop",
    "cng": "https://images.unsplash.com/photo-1549924231-f129b911e442?w=400&h=300&fit=crop",
    "private car": "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?w=400&h=300&fit=crop",
    "pickup": "https://images.unsplash.com/photo-1582639510494-c80b5de9f148?w=400&h=300&fit=crop",
    "truck": "https://images.unsplash.com/photo-1566576912321-d58ddd7a6088?w=400&h=300&fit=crop",
    "covered van": "https://images.unsplash.com/photo-1582639510494-c80b5de9f148?w=400&h=300&fit=crop",
}

# --- Validation bounds ---
MIN_YEAR, MAX_YEAR = 1900, 2030
MAX_DAILY_RATE = 10000
MIN_SEATS, MAX_SEATS = 1, 100
MAX_EXPERIENCE_YEARS = 100
FEATURE_SEPARATOR = ","

# --- Profile completion messages ---
PROFILE_COMPLETE_MSG = "Profile is complete. You can proceed with car rental."
PROFILE_INCOMPLETE_MSG = (
    "Please complete your profile to rent a car. "
    "Complete Driving Information and Documents & Images sections."
)
