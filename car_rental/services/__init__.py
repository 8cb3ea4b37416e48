from .profile_service import ProfileService
from .user_service import UserService
from .vehicle_service import VehicleService

__all__ = [
    "ProfileService",
    "UserService",
    "VehicleService",
]
