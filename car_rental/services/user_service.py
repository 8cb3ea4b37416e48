from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask import current_app

from .common import clean, clean_optional, check_length, commit_unique, EMAIL_PATTERN
from ..exceptions import ValidationError, DuplicateEmailError, UserNotFoundError
from ..models.store import db, run_with_retry
from ..models.user import User
from ..utils.constants import Role
from ..utils.security import generate_hash, check_hash, needs_rehash

logger = logging.getLogger(__name__)

MIN_PASSWORD_LEN, MAX_PASSWORD_LEN = 6, 100


class UserService:
    """Account registration, credential checks and user lookup."""

    @staticmethod
    def validate_registration(form: dict) -> dict:
        """Return cleaned registration fields or raise ValidationError with per-field messages."""
        data = {
            "first_name": clean(form.get("first_name")),
            "last_name": clean(form.get("last_name")),
            "email": clean(form.get("email")),
            "password": form.get("password") or "",
            "confirm_password": form.get("confirm_password") or "",
            "phone_number": clean(form.get("phone_number")),
            "address": clean_optional(form.get("address")),
            "role": clean(form.get("role")) or Role.CUSTOMER.value,
        }
        errors = {}
        check_length(errors, "first_name", data["first_name"], "First name", 50)
        check_length(errors, "last_name", data["last_name"], "Last name", 50)
        check_length(errors, "email", data["email"], "Email", 100)
        if "email" not in errors and not EMAIL_PATTERN.match(data["email"]):
            errors["email"] = "Invalid email address"

        pw = data["password"]
        if not pw:
            errors["password"] = "Password is required"
        elif not (MIN_PASSWORD_LEN <= len(pw) <= MAX_PASSWORD_LEN):
            errors["password"] = (f"Password must be between {MIN_PASSWORD_LEN} "
                                  f"and {MAX_PASSWORD_LEN} characters")
        if data["confirm_password"] != pw:
            errors["confirm_password"] = "The password and confirmation password do not match"

        check_length(errors, "phone_number", data["phone_number"], "Phone number", 20)
        check_length(errors, "address", data["address"] or "", "Address", 200, required=False)

        if Role.parse(data["role"]) is None:
            errors["role"] = "Invalid role"

        if errors:
            raise ValidationError(errors=errors)
        return data

    @staticmethod
    def register(form: dict) -> User:
        """
        Create an active account. Email uniqueness is an exact match enforced by
        the unique index; a clash raises DuplicateEmailError.
        """
        data = UserService.validate_registration(form)
        legacy = current_app.config.get("LEGACY_PASSWORD_HASH", False)

        def work():
            user = User(
                first_name=data["first_name"],
                last_name=data["last_name"],
                email=data["email"],
                password=generate_hash(data["password"], legacy=legacy),
                phone_number=data["phone_number"],
                address=data["address"],
                role=Role.parse(data["role"]).value,
                is_active=True,
                created_at=datetime.now(),
            )
            db.session.add(user)
            commit_unique([
                (lambda: UserService.email_taken(data["email"]), DuplicateEmailError),
            ])
            return user

        user = run_with_retry(work)
        logger.info("Registered user %s (%s) with role %s", user.id, user.email, user.role)
        return user

    @staticmethod
    def authenticate(email: str, password: str) -> Optional[User]:
        """
        Return the active user matching email and password, else None.
        A legacy (unsalted) hash is replaced with a salted one on success.
        """
        email = clean(email)
        if not email or not password:
            return None

        user = run_with_retry(
            lambda: User.query.filter_by(email=email, is_active=True).first()
        )
        if user is None or not check_hash(password, user.password):
            logger.warning("Failed login for %s", email)
            return None

        legacy_mode = current_app.config.get("LEGACY_PASSWORD_HASH", False)
        if needs_rehash(user.password, legacy_mode):
            user.password = generate_hash(password)
            db.session.commit()
            logger.info("Upgraded password hash for user %s", user.id)
        return user

    @staticmethod
    def email_taken(email: str) -> bool:
        return db.session.query(User.id).filter(User.email == email).first() is not None

    @staticmethod
    def get_user(user_id: int) -> User:
        user = run_with_retry(lambda: db.session.get(User, user_id))
        if user is None:
            raise UserNotFoundError()
        return user
