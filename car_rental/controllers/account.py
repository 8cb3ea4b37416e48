from flask import Blueprint, render_template, request, redirect, url_for, session, flash

from ..exceptions import ValidationError, DuplicateEmailError
from ..services.user_service import UserService
from ..utils.constants import Role, ROLE_LANDING, DEFAULT_LANDING
from ..utils.session import start_session

bp = Blueprint("account", __name__, url_prefix="/Account")

INVALID_LOGIN_MSG = "Invalid email or password"


@bp.get("/Login")
def login_form():
    return render_template("account/login.html")


@bp.post("/Login")
def login_submit():
    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""

    if not email or not password:
        return render_template("account/login.html", email=email,
                               error="Email and password are required."), 200

    user = UserService.authenticate(email, password)
    if user is None:
        # Same message whether the email or the password was wrong
        return render_template("account/login.html", email=email, error=INVALID_LOGIN_MSG), 200

    start_session(user)
    return redirect(url_for(ROLE_LANDING.get(user.role, DEFAULT_LANDING)))


@bp.get("/Register")
def register_form():
    return render_template("account/register.html", form={}, errors={}, roles=[r.value for r in Role])


@bp.post("/Register")
def register_submit():
    form = request.form.to_dict()
    try:
        UserService.register(form)
    except ValidationError as e:
        errors = e.errors
    except DuplicateEmailError as e:
        errors = {"email": e.message}
    else:
        flash("Registration successful! Please login.", "success")
        return redirect(url_for("account.login_form"))

    form.pop("password", None)
    form.pop("confirm_password", None)
    return render_template("account/register.html", form=form, errors=errors,
                           roles=[r.value for r in Role]), 200


@bp.post("/Logout")
def logout():
    session.clear()
    flash("Logged out", "info")
    return redirect(url_for("home.index"))
