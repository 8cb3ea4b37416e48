"""
Custom exception classes for the Car Rental web app.

These exceptions provide precise error types that controllers can catch
to render friendly messages (form errors or ``{success: false}`` JSON)
instead of generic 500 errors.
"""


class CarRentalError(Exception):
    """Base class for all domain errors raised by the service layer."""

    default_message = "Error: request could not be processed"

    def __init__(self, message: str = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ValidationError(CarRentalError):
    """Raised when submitted data is missing or malformed.

    ``errors`` maps a field name (or ``""`` for form-level problems) to a message.
    """

    default_message = "Invalid input"

    def __init__(self, message: str = None, errors: dict = None) -> None:
        self.errors = dict(errors or {})
        if message is None and self.errors:
            message = next(iter(self.errors.values()))
        super().__init__(message)


class ConflictError(CarRentalError):
    """Raised when a unique value is already taken."""

    default_message = "Record already exists"
    field = ""


class DuplicateEmailError(ConflictError):
    default_message = "Email already exists"
    field = "email"


class DuplicateRegistrationError(ConflictError):
    default_message = "Vehicle with this registration number already exists"
    field = "registration_number"


class DuplicateChassisError(ConflictError):
    default_message = "Vehicle with this chassis number already exists"
    field = "chassis_number"


class VehicleNotFoundError(CarRentalError):
    """Raised when a vehicle ID cannot be found in the system."""

    default_message = "Vehicle not found"


class UserNotFoundError(CarRentalError):
    """Raised when a user ID cannot be found in the system."""

    default_message = "User not found"


class UploadError(CarRentalError):
    """Raised when an uploaded file is missing, empty or of a disallowed type."""

    default_message = "No file uploaded"
