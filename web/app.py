"""Flask JSON API for projected fleet service reminders."""

import logging
import os
from pathlib import Path

from flask import Flask, current_app, jsonify, request

from reminders import QueryParameters, get_service_reminders, load_fleet, load_settings

logger = logging.getLogger("reminders.web")

# Path to the fleet data file (relative to project root unless FLEET_FILE is set)
DEFAULT_FLEET_FILE = Path(__file__).parent.parent / "fleets" / "fleet.yaml"


def parse_bool(value) -> bool:
    """Parse a query-string flag ('true', '1', 'yes')."""
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def parse_int(name: str, default: int) -> int:
    """Read an integer query parameter, raising ValueError with the parameter name."""
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None


def create_app(fleet_file=None, settings=None) -> Flask:
    """Build the Flask app serving reminders from a fleet YAML file."""
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
    app.config["FLEET_FILE"] = Path(fleet_file or os.environ.get("FLEET_FILE") or DEFAULT_FLEET_FILE)
    app.config["REMINDER_SETTINGS"] = settings or load_settings()

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/service-reminders")
    def service_reminders():
        """Page of projected reminders: search, sortBy, sortDescending, pageNumber, pageSize."""
        settings = current_app.config["REMINDER_SETTINGS"]
        try:
            parameters = QueryParameters(
                search=request.args.get("search"),
                sort_by=request.args.get("sortBy"),
                sort_descending=parse_bool(request.args.get("sortDescending", "false")),
                page_number=parse_int("pageNumber", 1),
                page_size=parse_int("pageSize", settings.default_page_size),
            )
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            store = load_fleet(current_app.config["FLEET_FILE"])
            result = get_service_reminders(store, parameters, settings=settings)
        except Exception:
            logger.exception("Failed to compute service reminders")
            return jsonify({"error": "Failed to compute service reminders"}), 500

        return jsonify(result.to_dict())

    return app


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    create_app(settings=settings).run(debug=os.environ.get("FLASK_DEBUG") == "1")
