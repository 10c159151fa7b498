"""
Routes package for MachinaTrack
One JSON blueprint per entity, all mounted under /api
"""

from flask import Blueprint
from werkzeug.exceptions import HTTPException

from machinatrack.buisness.core.errors import DatabaseError, ValidationError
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import error_response, success_response
from machinatrack.utils.logging_sanitizer import sanitize_exception_message
from machinatrack.utils.dates import utcnow

logger = get_logger("machinatrack.routes")

# Create main blueprint
main = Blueprint('main', __name__)


@main.route('/api/health')
def health():
    return success_response({'status': 'ok', 'timestamp': utcnow().isoformat()})


def register_error_handlers(app):
    """Translate domain and HTTP errors into the JSON envelope"""

    @app.errorhandler(DatabaseError)
    def handle_domain_error(error):
        if error.status_code >= 500:
            logger.error(f"Database error: {sanitize_exception_message(error)}")
        else:
            logger.info(f"{type(error).__name__}: {error.message}")
        details = error.details if isinstance(error, ValidationError) else None
        return error_response(error.message, error.status_code, details)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.error(f"Unhandled error: {sanitize_exception_message(error)}", exc_info=True)
        return error_response('Internal server error', 500)


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import (
        calibration_logs,
        consumables,
        cutting_tools,
        dashboard,
        equipment,
        machine_logs,
        maintenance_tasks,
        metrology_tools,
        service_records,
        settings,
    )

    app.register_blueprint(main)
    app.register_blueprint(equipment.bp, url_prefix='/api/equipment')
    app.register_blueprint(machine_logs.bp, url_prefix='/api/machine-logs')
    app.register_blueprint(maintenance_tasks.bp, url_prefix='/api/maintenance-tasks')
    app.register_blueprint(service_records.bp, url_prefix='/api/service-records')
    app.register_blueprint(metrology_tools.bp, url_prefix='/api/metrology-tools')
    app.register_blueprint(calibration_logs.bp, url_prefix='/api/calibration-logs')
    app.register_blueprint(consumables.bp, url_prefix='/api/consumables')
    app.register_blueprint(cutting_tools.bp, url_prefix='/api/cutting-tools')
    app.register_blueprint(settings.bp, url_prefix='/api/settings')
    app.register_blueprint(dashboard.bp, url_prefix='/api/dashboard')

    register_error_handlers(app)

    logger.info("All route blueprints registered successfully")
