from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from machinatrack.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "200 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_flag(name, default='True'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Application factory for MachinaTrack.

    Args:
        config_overrides (dict, optional): Values applied on top of the
            environment-derived configuration before extensions are bound.
            Tests use this to point at an in-memory database.

    Returns:
        Flask: configured application
    """
    from pathlib import Path

    app = Flask(__name__)

    logger = get_logger("machinatrack")
    logger.info("Initializing Flask application")

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL env var; otherwise keep the SQLite
    # database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        default_db_path = base_dir / 'instance' / 'machinatrack.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.json.sort_keys = False

    # HTTPS/TLS Configuration
    # Default to True (secure) for production - only disable for development
    app.config['ENABLE_HTTPS'] = _env_flag('ENABLE_HTTPS')
    app.config['FORCE_HTTPS_REDIRECT'] = _env_flag('FORCE_HTTPS_REDIRECT')

    # Rate limiting
    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED')
    if os.environ.get('RATELIMIT_DEFAULT'):
        app.config['RATELIMIT_DEFAULT'] = os.environ['RATELIMIT_DEFAULT']

    # Dashboard / listing windows
    app.config['UPCOMING_MAINTENANCE_DAYS'] = int(os.environ.get('UPCOMING_MAINTENANCE_DAYS', '30'))

    if config_overrides:
        app.config.update(config_overrides)

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    database_uri = app.config['SQLALCHEMY_DATABASE_URI']
    if database_uri.startswith('sqlite:///'):
        Path(database_uri[len('sqlite:///'):]).parent.mkdir(parents=True, exist_ok=True)

    # Log security configuration status
    if app.config['ENABLE_HTTPS']:
        logger.info("HTTPS enforcement enabled")
        if app.config['FORCE_HTTPS_REDIRECT']:
            logger.info("Automatic HTTP to HTTPS redirect enabled")
    else:
        logger.warning("HTTPS enforcement DISABLED - Acceptable for development only!")

    logger.debug(f"Database configured: {database_uri.split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from machinatrack.data.equipment.equipment import Equipment
    from machinatrack.data.equipment.machine_logs import MachineLogEntry
    from machinatrack.data.maintenance.maintenance_tasks import MaintenanceTask, MaintenancePart
    from machinatrack.data.maintenance.service_records import ServiceRecord
    from machinatrack.data.metrology.metrology_tools import MetrologyTool
    from machinatrack.data.metrology.calibration_logs import CalibrationLog
    from machinatrack.data.inventory.consumables import Consumable
    from machinatrack.data.inventory.cutting_tools import CuttingTool
    from machinatrack.data.settings import lookups

    logger.debug("Models imported and registered")

    # Register API blueprints and JSON error handlers
    from machinatrack.presentation.routes import init_app as init_routes
    init_routes(app)

    # Add HTTPS redirect before request processing
    @app.before_request
    def enforce_https():
        """Redirect HTTP requests to HTTPS if HTTPS enforcement is enabled"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            from flask import request, redirect

            if not request.is_secure and not request.headers.get('X-Forwarded-Proto') == 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)  # 301 Permanent Redirect

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

        # HTTPS Strict Transport Security (HSTS)
        if app.config.get('ENABLE_HTTPS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    logger.info("Flask application initialization complete")

    return app
