from __future__ import annotations

from flask import Blueprint, jsonify, session, current_app

from design_gallery.api.utils.payload import get_payload
from design_gallery.extensions import db
from design_gallery.models import Design
from design_gallery.services import download_gate

api_downloads = Blueprint("api_downloads", __name__, url_prefix="/api/designs")


def _get_design(design_id: int):
    return db.session.get(Design, design_id)


@api_downloads.post("/<int:design_id>/download")
def open_download(design_id: int):
    d = _get_design(design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404

    gate = download_gate.open_gate(d, session)
    current_app.logger.info(
        "[DOWNLOAD] gate opened design=%s popunder=%s", d.id, gate["popunder"]
    )
    return jsonify(gate), 200


@api_downloads.post("/<int:design_id>/download/continue")
def continue_download(design_id: int):
    d = _get_design(design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404

    data = get_payload()
    result = download_gate.proceed(d, data.get("gate_token"))
    current_app.logger.info("[DOWNLOAD] link released design=%s", d.id)
    return jsonify(result), 200
