"""JSON envelope helpers for API responses."""
from typing import List, Optional

from flask import jsonify


def success_response(data=None, message: Optional[str] = None):
    """Return an ok envelope with optional data and message."""
    body = {"status": "ok"}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return jsonify(body), 200


def error_response(message: str, status_code: int = 400):
    """Return an error envelope."""
    return jsonify({"status": "error", "message": message}), status_code


def validation_response(errors: List[str]):
    """Return a validation result; always HTTP 200."""
    return jsonify({"valid": not errors, "errors": list(errors)}), 200
