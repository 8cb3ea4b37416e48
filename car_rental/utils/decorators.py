from functools import wraps

from flask import redirect, url_for, flash, jsonify

from .session import current_identity


def _unauthorized(api: bool, message: str):
    if api:
        return jsonify(success=False, message=message), 401
    flash(message, "warning")
    return redirect(url_for("account.login_form"))


def login_required(fn=None, *, api=False):
    """
    Require a logged-in session. The view receives the caller's
    ``identity`` as a keyword argument.
    Pages redirect to the login form; ``api=True`` views get a 401 JSON body.
    """

    def deco(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                return _unauthorized(api, "User not authenticated" if api else "Please login first")
            kwargs["identity"] = identity
            return view(*args, **kwargs)

        return wrapper

    if fn is not None:
        return deco(fn)
    return deco


def role_required(*roles, api=False):
    """Like ``login_required``, and the session role must be one of ``roles``."""
    allowed = {getattr(r, "value", r) for r in roles}

    def deco(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None or identity.role not in allowed:
                return _unauthorized(api, "Unauthorized access")
            kwargs["identity"] = identity
            return view(*args, **kwargs)

        return wrapper

    return deco
