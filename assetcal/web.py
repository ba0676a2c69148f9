"""Flask application exposing the reminder triggers and event APIs."""

import hmac
import logging
from typing import Optional

from flask import Flask, Response, jsonify, request

from assetcal.config import AssetCalConfig
from assetcal.engine import AssetCalEngine
from assetcal.exceptions import (
    AccessDeniedError,
    AssetCalError,
    DerivedEventLockedError,
    NotFoundError,
    ValidationError,
)
from assetcal.output.ics_writer import ICSWriter

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"

# HTTP status for domain errors raised by the event and notification APIs
_ERROR_STATUS = {
    ValidationError: 422,
    AccessDeniedError: 403,
    NotFoundError: 404,
    DerivedEventLockedError: 409,
}


def _bearer_or_query_secret() -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[len("bearer ") :].strip()
    return request.args.get("secret")


def _cron_authorized(config: AssetCalConfig) -> bool:
    """Check the shared cron secret; development mode runs unauthenticated."""
    secret = config.cron_secret
    provided = _bearer_or_query_secret()

    if config.is_development:
        if not secret or provided is None or not hmac.compare_digest(provided, secret):
            logger.info("Event reminder cron running without auth (development only)")
        return True

    if not secret:
        logger.warning("CRON_SECRET is not set; reminders are disabled until it is configured")
        return False
    return provided is not None and hmac.compare_digest(provided, secret)


def _current_user() -> Optional[str]:
    """Acting user as asserted by the authenticating proxy."""
    user_id = request.headers.get(USER_HEADER, "").strip()
    return user_id or None


def _parse_id(raw: str) -> Optional[int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def _unauthorized():
    return jsonify({"error": "Unauthorized"}), 401


def create_app(
    config: Optional[AssetCalConfig] = None,
    engine: Optional[AssetCalEngine] = None,
) -> Flask:
    """
    Create the Flask app.

    Args:
        config: Configuration (defaults to environment)
        engine: Pre-built engine, e.g. over a test database

    Returns:
        Configured Flask application
    """
    if engine is None:
        engine = AssetCalEngine(config or AssetCalConfig.from_env())
    config = engine.config

    app = Flask(__name__)
    app.config["ASSETCAL_ENGINE"] = engine

    @app.errorhandler(AssetCalError)
    def handle_domain_error(error: AssetCalError):
        for error_type, status in _ERROR_STATUS.items():
            if isinstance(error, error_type):
                return jsonify({"error": str(error)}), status
        logger.error(f"Unhandled error: {error}")
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/cron/check-event-reminders", methods=["GET"])
    def check_event_reminders():
        """Periodic trigger for the reminder sweep."""
        if not _cron_authorized(config):
            return _unauthorized()

        try:
            result = engine.run_sweep()
        except Exception as e:
            logger.error(f"Event reminder cron failed: {e}")
            return jsonify({"error": "Failed to check reminders"}), 500

        if result.created:
            logger.info(f"Event reminder cron created {result.created} notifications")
        return jsonify({"ok": True, "created": result.created})

    @app.route("/api/vehicles/<asset_id>/sync-reminder-events", methods=["POST"])
    def sync_reminder_events(asset_id: str):
        """Reconcile MOT/tax events of a vehicle."""
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()

        parsed_id = _parse_id(asset_id)
        if parsed_id is None:
            return jsonify({"error": "Invalid asset ID"}), 400

        try:
            result = engine.sync_vehicle(parsed_id, user_id)
        except AccessDeniedError:
            return jsonify({"error": "Asset not found"}), 404
        except ValidationError:
            return jsonify({"error": "Asset is not a vehicle"}), 400
        except Exception as e:
            logger.error(f"Error syncing vehicle reminder events: {e}")
            return jsonify({"error": "Failed to sync reminder events"}), 500

        return jsonify(result.to_api())

    @app.route("/api/calendar-events", methods=["GET"])
    def list_calendar_events():
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()

        asset_param = request.args.get("assetId", "")
        service = engine.calendar_events
        if asset_param:
            asset_id = _parse_id(asset_param)
            if asset_id is None:
                return jsonify({"error": "Invalid assetId"}), 400
            events = service.list_for_asset(asset_id, user_id)
        else:
            events = service.list_for_user(user_id)
        return jsonify({"events": [event.to_api() for event in events]})

    @app.route("/api/calendar-events", methods=["POST"])
    def create_calendar_event():
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Expected a JSON object"}), 422

        event = engine.calendar_events.create(payload, user_id)
        logger.info(f"Calendar event created: {event.id}")
        return jsonify({"event": event.to_api()}), 201

    @app.route("/api/calendar-events.ics", methods=["GET"])
    def calendar_feed():
        """The acting user's events as an iCalendar feed."""
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()

        events = engine.calendar_events.list_for_user(user_id)
        return Response(
            ICSWriter().to_bytes(events),
            content_type="text/calendar; charset=utf-8",
            headers={"Content-Disposition": "attachment; filename=assetcal.ics"},
        )

    @app.route("/api/calendar-events/<event_id>", methods=["GET"])
    def get_calendar_event(event_id: str):
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()
        parsed_id = _parse_id(event_id)
        if parsed_id is None:
            return jsonify({"error": "Invalid event ID"}), 400

        event = engine.calendar_events.get(parsed_id, user_id)
        return jsonify({"event": event.to_api()})

    @app.route("/api/calendar-events/<event_id>", methods=["PATCH"])
    def update_calendar_event(event_id: str):
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()
        parsed_id = _parse_id(event_id)
        if parsed_id is None:
            return jsonify({"error": "Invalid event ID"}), 400

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Expected a JSON object"}), 422

        event = engine.calendar_events.update(parsed_id, payload, user_id)
        return jsonify({"event": event.to_api()})

    @app.route("/api/calendar-events/<event_id>", methods=["DELETE"])
    def delete_calendar_event(event_id: str):
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()
        parsed_id = _parse_id(event_id)
        if parsed_id is None:
            return jsonify({"error": "Invalid event ID"}), 400

        engine.calendar_events.delete(parsed_id, user_id)
        return jsonify({"success": True})

    @app.route("/api/notifications", methods=["GET"])
    def list_notifications():
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()

        limit = request.args.get("limit", type=int)
        service = engine.notifications
        records = service.list_for_user(user_id, limit) if limit else service.list_for_user(user_id)
        return jsonify({"notifications": [record.to_api() for record in records]})

    @app.route("/api/notifications/<notification_id>", methods=["PATCH"])
    def mark_notification_read(notification_id: str):
        """Mark a notification as read."""
        user_id = _current_user()
        if user_id is None:
            return _unauthorized()
        parsed_id = _parse_id(notification_id)
        if parsed_id is None:
            return jsonify({"error": "Invalid notification ID"}), 400

        record = engine.notifications.mark_read(parsed_id, user_id)
        return jsonify({"notification": record.to_api()})

    return app
