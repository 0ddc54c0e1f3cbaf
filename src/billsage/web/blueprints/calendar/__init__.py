"""Calendar, day detail and bill routes."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("calendar", __name__)

from . import routes  # noqa: E402,F401 - import routes for registration

__all__ = ["bp"]
