"""BillSage HTTP application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable, Optional

from flask import Flask, jsonify

from ..config import BaseConfig, DevConfig, TestConfig
from ..context import AppContext, create_app_context
from ..errors import AuthenticationError, PreconditionError, RecordNotFoundError
from ..logging_config import get_logger

logger = get_logger("web")

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "billsage.web.blueprints.auth"
    yield "billsage.web.blueprints.calendar"
    yield "billsage.web.blueprints.goals"
    yield "billsage.web.blueprints.assistant"


def create_app(config_name: str | None = None, *, context: Optional[AppContext] = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    if context is None:
        context = create_app_context(_resolve_config(config_name)())
    app.config.from_object(context.config)
    app.config["BILLSAGE_CONTEXT"] = context

    _register_blueprints(app)
    _register_error_handlers(app)

    from .. import cli

    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PreconditionError)
    def _bad_request(exc: PreconditionError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(RecordNotFoundError)
    def _not_found(exc: RecordNotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(AuthenticationError)
    def _unauthorized(exc: AuthenticationError):
        logger.info("Rejected request: %s", exc)
        return jsonify({"error": "Unauthorized"}), 401


__all__ = ["create_app"]
