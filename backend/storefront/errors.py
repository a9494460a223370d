from flask import current_app, jsonify
from storefront.domain.exceptions import (
    InvariantViolation,
    NotFound,
    PersistenceFailure,
    SessionBusy,
    ValidationFailure,
)

def _error_response(error, status_code, **extra):
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error),
        **extra
    })
    response.status_code = status_code
    return response

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response(error, 400)

    @app.errorhandler(ValidationFailure)
    def handle_validation_failure(error):
        return _error_response(error, 422, errors=error.errors)

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(SessionBusy)
    def handle_session_busy(error):
        return _error_response(error, 409)

    @app.errorhandler(PersistenceFailure)
    def handle_persistence_failure(error):
        # Working copies are kept on failure, so the client can simply retry
        current_app.logger.error("Persistence failure: %s (cause: %r)", error, error.__cause__)
        return _error_response(error, 503, retry=True)
