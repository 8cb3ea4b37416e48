from flask import Blueprint, render_template

from ..utils.constants import Role
from ..utils.decorators import login_required, role_required

bp = Blueprint("dashboards", __name__, url_prefix="/Home")


@bp.get("/Dashboard")
@login_required
def dashboard(identity):
    return render_template("dashboards/dashboard.html", identity=identity)


@bp.get("/AdminDashboard")
@role_required(Role.ADMIN)
def admin_dashboard(identity):
    return render_template("dashboards/admin.html", identity=identity)


@bp.get("/ManagerDashboard")
@role_required(Role.MANAGER)
def manager_dashboard(identity):
    return render_template("dashboards/manager.html", identity=identity)


@bp.get("/CustomerDashboard")
@role_required(Role.CUSTOMER)
def customer_dashboard(identity):
    return render_template("dashboards/customer.html", identity=identity)


# Bookings and rental history have no backing data yet; the pages are placeholders.
@bp.get("/MyBookings")
@role_required(Role.CUSTOMER)
def my_bookings(identity):
    return render_template("customer/my_bookings.html", identity=identity)


@bp.get("/RentalHistory")
@role_required(Role.CUSTOMER)
def rental_history(identity):
    return render_template("customer/rental_history.html", identity=identity)


@bp.get("/FleetManagement")
@login_required
def fleet_management(identity):
    return render_template("manager/fleet_management.html", identity=identity)


@bp.get("/FinesManagement")
@login_required
def fines_management(identity):
    return render_template("manager/fines_management.html", identity=identity)
