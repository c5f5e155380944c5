"""Flask JSON API for the vehicle maintenance log."""

import io
import logging
from pathlib import Path

from flask import Flask, jsonify, request, send_file

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Settings, load_settings
from models import (
    NotFound,
    PersistenceFailure,
    RecordFields,
    RecordStore,
    ValidationError,
)
from report import PDF_CONTENT_TYPE, build_report

logger = logging.getLogger(__name__)


def request_body() -> dict:
    """JSON body of the current request, or {} if absent or not an object."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def document_json(document):
    return jsonify(document.to_dict(sort=True))


def create_app(settings: Settings = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    store = RecordStore(settings.data_file)
    app.config["STORE"] = store

    @app.errorhandler(ValidationError)
    def bad_request(error: ValidationError):
        return jsonify({"error": error.message, "field": error.field}), 400

    @app.errorhandler(NotFound)
    def not_found(error: NotFound):
        return jsonify({"error": error.message}), 404

    @app.errorhandler(PersistenceFailure)
    def storage_failure(error: PersistenceFailure):
        logger.error("Storage failure: %s", error)
        return jsonify({"error": "Storage failure."}), 500

    @app.route("/api/data")
    def get_data():
        """Full document: sorted entries plus notes."""
        return document_json(store.document())

    @app.route("/api/entries", methods=["GET"])
    def list_entries():
        return jsonify([record.to_dict() for record in store.list()])

    @app.route("/api/entries", methods=["POST"])
    def create_entry():
        document = store.create(RecordFields.from_mapping(request_body()))
        return document_json(document), 201

    @app.route("/api/entries/<entry_id>", methods=["PUT"])
    def update_entry(entry_id: str):
        document = store.update(entry_id, RecordFields.from_mapping(request_body()))
        return document_json(document)

    @app.route("/api/entries/<entry_id>", methods=["DELETE"])
    def delete_entry(entry_id: str):
        return document_json(store.delete(entry_id))

    @app.route("/api/notes", methods=["PUT"])
    def update_notes():
        store.set_notes(request_body().get("notes"))
        return jsonify({"success": True})

    @app.route("/api/stats")
    def get_stats():
        """Total spend, entry count and average oil change interval."""
        return jsonify(store.stats())

    @app.route("/api/entries.pdf")
    def download_report():
        pdf = build_report(
            store.load(), settings.report_title, logo_path=settings.logo_path
        )
        return send_file(
            io.BytesIO(pdf),
            mimetype=PDF_CONTENT_TYPE,
            as_attachment=True,
            download_name=settings.report_filename,
        )

    return app


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    app.run(debug=True, host=settings.host, port=settings.port)
