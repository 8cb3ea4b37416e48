import os
import tempfile
from datetime import timedelta


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///car_rental.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}  # test pooled connections on checkout
    DB_RETRY_ATTEMPTS = int(os.getenv("DB_RETRY_ATTEMPTS", "3"))
    DB_RETRY_MAX_DELAY = float(os.getenv("DB_RETRY_MAX_DELAY", "30"))

    # Session: HTTP-only cookie, 30 minutes idle timeout
    SESSION_IDLE_MINUTES = int(os.getenv("SESSION_IDLE_MINUTES", "30"))
    PERMANENT_SESSION_LIFETIME = timedelta(minutes=SESSION_IDLE_MINUTES)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_REFRESH_EACH_REQUEST = True

    # Uploads (served at /uploads/...)
    UPLOAD_ROOT = os.getenv("UPLOAD_ROOT", os.path.join(os.getcwd(), "uploads"))
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # 5MB
    ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

    # Store new passwords with the old unsalted SHA-256 scheme
    LEGACY_PASSWORD_HASH = _env_bool("LEGACY_PASSWORD_HASH", False)

    DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Dhaka")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    __test__ = False  # not a pytest class

    TESTING = True
    SECRET_KEY = "test"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    DB_RETRY_MAX_DELAY = 0
    UPLOAD_ROOT = os.path.join(tempfile.gettempdir(), "car_rental_test_uploads")
    LOG_LEVEL = "DEBUG"
