from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from pool_price.config import Settings
from pool_price.errors import MalformedRecordError
from pool_price.loaders import (
    load_energy_series,
    load_price_series,
    read_records_from_lines,
)
from pool_price.pipeline import build_report
from pool_price.reporting import report_to_dict
from upload_flow import ParsingError, UploadValidationError, decode_upload

MAX_UPLOAD_MB = 20
UPLOAD_FIELDS = ("prices", "consumption")

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024


@app.post("/api/report")
def report() -> object:
    missing = [name for name in UPLOAD_FIELDS if not _has_file(name)]
    if missing:
        return jsonify({"error": f"Missing upload: {', '.join(missing)}."}), 400

    try:
        settings = Settings.from_mapping(request.form)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    skip_price_header = _parse_bool_field("skip_price_header")
    skip_consumption_header = _parse_bool_field("skip_consumption_header")

    try:
        lines = _decode_uploads()
    except UploadValidationError as exc:
        logger.warning("Rejected upload: %s", exc.user_messages())
        return jsonify({"error": "Upload validation failed.", "details": exc.user_messages()}), 422

    try:
        prices = list(
            load_price_series(
                read_records_from_lines(
                    lines["prices"], skip_header=skip_price_header, source="price"
                )
            )
        )
        consumption = list(
            load_energy_series(
                read_records_from_lines(
                    lines["consumption"], skip_header=skip_consumption_header, source="energy"
                )
            )
        )
    except MalformedRecordError as exc:
        logger.warning("Malformed record: %s", exc)
        return (
            jsonify(
                {
                    "error": "Malformed record.",
                    "details": [
                        {
                            "code": "malformed_record",
                            "message": exc.message,
                            "source": exc.source,
                            "record": exc.position or 0,
                        }
                    ],
                }
            ),
            422,
        )

    return jsonify(report_to_dict(build_report(prices, consumption, settings)))


@app.errorhandler(RequestEntityTooLarge)
def handle_file_too_large(_: RequestEntityTooLarge) -> object:
    return (
        jsonify({"error": f"Upload too large. At most {MAX_UPLOAD_MB} MB allowed."}),
        413,
    )


def _has_file(name: str) -> bool:
    file = request.files.get(name)
    return file is not None and bool(file.filename)


def _decode_uploads() -> dict[str, list[str]]:
    decoded: dict[str, list[str]] = {}
    errors: list[ParsingError] = []
    for name in UPLOAD_FIELDS:
        file = request.files[name]
        try:
            decoded[name] = decode_upload(file.read(), file.filename or "", name)
        except UploadValidationError as exc:
            errors.extend(exc.errors)
    if errors:
        raise UploadValidationError(errors)
    return decoded


def _parse_bool_field(name: str) -> bool:
    raw = request.form.get(name, "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
