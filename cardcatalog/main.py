"""Flask application entry point."""

import logging
import sys

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .api import catalog_bp
from .auth.api import auth_bp
from .auth.token import TokenConfig, TokenIssuer, TokenVerifier
from .config import Settings, get_settings, settings, validate_settings
from .db import init_db
from .exceptions import CardCatalogError, ConfigurationError
from .utils import isodatetime

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-Permitted-Cross-Domain-Policies": "none",
}


def _error_response(code: str, error_type: str, message: str, details: dict | None, status: int):
    body = {
        "success": False,
        "error": {
            "code": code,
            "type": error_type,
            "message": message,
        }
    }
    if details:
        body["error"]["details"] = details
    return jsonify(body), status


# Error handlers
def handle_card_catalog_error(error: CardCatalogError):
    """Handle CardCatalogError and its subclasses."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message}")
        if not get_settings().is_development:
            return _error_response(
                "INTERNAL", "InternalServerError", "Internal server error", None, error.status_code
            )

    return _error_response(
        error.code, error.__class__.__name__, error.message, error.details, error.status_code
    )


def handle_http_error(error: HTTPException):
    """Handle routing-level errors (unknown route, wrong method)."""
    if error.code == 404:
        return _error_response(
            "NOT_FOUND", "ResourceNotFound", f"Route {request.path} not found", None, 404
        )

    code = (error.name or "HTTP error").upper().replace(" ", "_")
    return _error_response(code, error.__class__.__name__, error.description, None, error.code or 500)


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Internal error: {error}")
    message = str(error) if get_settings().is_development else "Internal server error"
    return _error_response("INTERNAL", "InternalServerError", message, None, 500)


def _add_security_headers(response):
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def health():
    """Health check endpoint."""
    config = get_settings()
    return jsonify({
        "status": "ok",
        "message": "Card Catalog API is running",
        "timestamp": isodatetime.now(),
        "environment": config.environment,
    })


def create_app(config: Settings | None = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Settings to bind to the app; defaults to the
                environment-loaded settings

    Returns:
        Configured Flask app

    Raises:
        ConfigurationError: If required settings (the JWT secret) are
            missing or invalid. Nothing is started in that case.
    """
    config = config or settings
    validate_settings(config)
    token_config = TokenConfig.from_settings(config)

    app = Flask(__name__)
    app.config["SETTINGS"] = config
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    app.extensions["token_issuer"] = TokenIssuer(token_config)
    app.extensions["token_verifier"] = TokenVerifier(token_config)

    try:
        init_db(config.database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.register_error_handler(CardCatalogError, handle_card_catalog_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)
    app.after_request(_add_security_headers)

    app.add_url_rule(f"{config.api_prefix}/health", "health", health)
    app.register_blueprint(auth_bp, url_prefix=config.auth_prefix)
    app.register_blueprint(catalog_bp, url_prefix=config.api_prefix)

    logger.info(f"Card Catalog API initialized ({config.environment})")
    return app


def main() -> None:
    """Validate configuration and run the development server."""
    try:
        app = create_app()
    except ConfigurationError as e:
        logger.critical(f"Refusing to start: {e.message}")
        sys.exit(1)

    app.run(host=settings.host, port=settings.port, debug=settings.is_development)


if __name__ == "__main__":
    main()
