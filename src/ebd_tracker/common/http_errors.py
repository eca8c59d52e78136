from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, StorageError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to JSON ``{"erro": ...}`` bodies with their HTTP status."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StorageError):
            logger.error("Storage failure: %s", e)
        return jsonify({"erro": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"erro": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"erro": str(e)}), 500
