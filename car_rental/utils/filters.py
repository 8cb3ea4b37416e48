"""Jinja filters and date formatting helpers."""
from datetime import datetime, date

import pytz
from flask import current_app


def _display_tz():
    try:
        return pytz.timezone(current_app.config.get("DISPLAY_TIMEZONE") or "UTC")
    except (RuntimeError, pytz.UnknownTimeZoneError):
        return pytz.utc


def fmt_local(value, with_time: bool = True) -> str:
    """
    Format a datetime (or ISO string) in the configured display time zone.
    Naive values are taken as server-local time. A plain date is shown as
    DD/MM/YYYY. On parse error, returns the original value so the UI never
    goes blank.
    """
    if value is None or value == "":
        return ""

    if isinstance(value, date) and not isinstance(value, datetime):
        return value.strftime("%d/%m/%Y")

    dt = value
    if not isinstance(dt, datetime):
        s = str(value).strip().replace("T", " ")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return str(value)

    if dt.tzinfo is None:
        dt = dt.astimezone()  # naive: server local time
    local = dt.astimezone(_display_tz())
    if not with_time:
        return local.strftime("%d %b %Y")
    return local.strftime("%d/%m/%Y %H:%M")


def fmt_money(value) -> str:
    try:
        return f"{float(value):,.2f}"
    except (TypeError, ValueError):
        return str(value or "")
