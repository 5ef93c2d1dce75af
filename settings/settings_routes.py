from flask import Blueprint, request, jsonify
from settings.settings_service import SettingsService
from store.record_store import get_record_store
from src.exceptions import error_response

bp = Blueprint("settings", __name__)

@bp.route("/", methods=["GET"])
def get_settings():
    settings = SettingsService.get_settings(get_record_store())
    return jsonify(settings.to_dict()), 200

@bp.route("/", methods=["PUT"])
def update_settings():
    data = request.get_json() or {}
    try:
        settings = SettingsService.update_settings(get_record_store(), data)
        return jsonify({"message": "Settings updated successfully", "settings": settings.to_dict()}), 200
    except Exception as e:
        body, status = error_response(e)
        return jsonify(body), status
