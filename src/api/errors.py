# src/api/errors.py
# Defines custom application exceptions and Flask error handlers.

from flask import jsonify, request
from werkzeug.exceptions import HTTPException
from src.utils.logger import logger

# --- Custom Application Exceptions ---

class ApiError(Exception):
    """Base class for custom API errors."""
    status_code = 500
    message = "An internal server error occurred."

    def __init__(self, message=None, status_code=None, payload=None):
        super().__init__(message if message is not None else self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload # Optional additional data

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        return rv

class ValidationError(ApiError):
    """Indicates invalid data provided by the client."""
    status_code = 400
    message = "Validation failed."

class InvalidCompositorError(ValidationError):
    """Indicates a compositor type outside the supported kinds (AMBIENTE, MATERIAL)."""
    message = "Invalid compositor type."

    def __init__(self, value=None, message=None):
        self.value = value
        super().__init__(
            message or f"Tipo de compositor inválido: {value}",
            payload={'compositor_type': str(value)},
        )

class NotFoundError(ApiError):
    """Indicates a requested resource was not found."""
    status_code = 404
    message = "The requested resource was not found."

class ServiceError(ApiError):
     """Indicates a general error within a service layer operation."""
     status_code = 500
     message = "A service error occurred."

class DatabaseError(ApiError):
    """Indicates an error during a database operation."""
    status_code = 500
    message = "A database error occurred."

class ConfigurationError(ApiError):
     """Indicates a problem with the application's configuration."""
     status_code = 500
     message = "Application configuration error."


# --- Flask Error Handlers ---

def _json_error(body: dict, status_code: int):
    response = jsonify(body)
    response.status_code = status_code
    return response

def register_error_handlers(app):
    """Registers JSON error handlers with the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        """4xx errors are logged as warnings, 5xx as errors."""
        log = logger.error if error.status_code >= 500 else logger.warning
        log(f"{type(error).__name__} on {request.method} {request.path} "
            f"-> {error.status_code}: {error.message}")
        return _json_error(error.to_dict(), error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        """Unknown routes, wrong methods and other werkzeug errors."""
        logger.warning(f"HTTP {error.code} {error.name} on {request.method} {request.path}: {error.description}")
        return _json_error({"error": f"{error.name}: {error.description}"}, error.code)

    @app.errorhandler(Exception)
    def handle_generic_exception(error):
        logger.error(f"Unhandled exception on {request.method} {request.path}: {error}", exc_info=True)
        return _json_error({"error": "An unexpected internal server error occurred."}, 500)

    logger.info("JSON error handlers registered.")
