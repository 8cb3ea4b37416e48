from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..utils.constants import DEFAULT_VEHICLE_IMAGES, GENERIC_VEHICLE_IMAGE, FEATURE_SEPARATOR


def split_features(raw: Optional[str]) -> List[str]:
    """'AC,GPS' -> ['AC', 'GPS']; '' or None -> []."""
    if not raw:
        return []
    return [f.strip() for f in raw.split(FEATURE_SEPARATOR) if f.strip()]


def join_features(features) -> str:
    """['AC', 'GPS'] -> 'AC,GPS'; blank items are dropped."""
    return FEATURE_SEPARATOR.join(f.strip() for f in (features or []) if f and f.strip())


def default_image_url(vehicle_type: Optional[str], current: Optional[str]) -> str:
    """Keep ``current`` if set, else a stock image for the vehicle type."""
    if current:
        return current
    return DEFAULT_VEHICLE_IMAGES.get((vehicle_type or "").strip().lower(), GENERIC_VEHICLE_IMAGE)


@dataclass
class VehicleView:
    """
    Presentation projection of a Vehicle. Features come back as a list and
    an empty image URL is replaced with the stock image for the type.
    """
    id: int
    vehicle_type: str
    model: str
    year: int
    registration_number: str
    chassis_number: str
    color: str
    engine_capacity: str
    fuel_type: str
    daily_rate: Decimal
    seats: int
    status: str
    image_url: str
    description: str
    features: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, v) -> "VehicleView":
        return cls(
            id=v.id,
            vehicle_type=v.vehicle_type,
            model=v.model,
            year=v.year,
            registration_number=v.registration_number,
            chassis_number=v.chassis_number,
            color=v.color,
            engine_capacity=v.engine_capacity,
            fuel_type=v.fuel_type,
            daily_rate=v.daily_rate,
            seats=v.seats,
            status=v.status,
            image_url=default_image_url(v.vehicle_type, v.image_url),
            description=v.description or "",
            features=split_features(v.features),
            created_at=v.created_at,
        )

    def to_dict(self) -> dict:
        """JSON shape used by the fleet endpoints (camelCase keys)."""
        return {
            "id": self.id,
            "vehicleType": self.vehicle_type,
            "model": self.model,
            "year": self.year,
            "registrationNumber": self.registration_number,
            "chassisNumber": self.chassis_number,
            "color": self.color,
            "engineCapacity": self.engine_capacity,
            "fuelType": self.fuel_type,
            "dailyRate": float(self.daily_rate or 0),
            "seats": self.seats,
            "status": self.status,
            "imageUrl": self.image_url,
            "description": self.description,
            "features": list(self.features),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class ProfileView:
    """Customer profile page model; completeness flags are derived, never stored."""
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    preferred_car_type: Optional[str] = None
    driving_license_image_url: Optional[str] = None
    nid_image_url: Optional[str] = None
    car_number: Optional[str] = None
    driving_experience_years: Optional[int] = None
    license_number: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, u) -> "ProfileView":
        return cls(
            id=u.id,
            first_name=u.first_name,
            last_name=u.last_name,
            email=u.email,
            phone_number=u.phone_number,
            address=u.address,
            profile_image_url=u.profile_image_url,
            preferred_car_type=u.preferred_car_type,
            driving_license_image_url=u.driving_license_image_url,
            nid_image_url=u.nid_image_url,
            car_number=u.car_number,
            driving_experience_years=u.driving_experience_years,
            license_number=u.license_number,
            created_at=u.created_at,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_driving_info_complete(self) -> bool:
        return (
            bool((self.license_number or "").strip())
            and self.driving_experience_years is not None
            and bool((self.car_number or "").strip())
        )

    @property
    def is_documents_complete(self) -> bool:
        return bool((self.driving_license_image_url or "").strip()) and bool((self.nid_image_url or "").strip())

    @property
    def is_profile_complete(self) -> bool:
        return self.is_driving_info_complete and self.is_documents_complete
