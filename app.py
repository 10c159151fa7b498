#!/usr/bin/env python3
"""
Run script for MachinaTrack
"""

from machinatrack import create_app
from machinatrack.build import build_database
from machinatrack.logger import get_logger
import sys
import os
import argparse
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = get_logger("machinatrack.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='MachinaTrack maintenance management')
    parser.add_argument('--build-only', action='store_true',
                       help='Build database tables only, then exit without starting the server')
    parser.add_argument('--enable-debug-data', action='store_true', default=True,
                       help='Enable debug data insertion (default: enabled if flag not present)')
    parser.add_argument('--no-debug-data', action='store_false', dest='enable_debug_data',
                       help='Disable debug data insertion')

    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting MachinaTrack...")
    app = create_app()

    if args.build_only:
        logger.debug("--build-only mode: Creating tables only")

    build_database(
        enable_debug_data=args.enable_debug_data and not args.build_only,
        app=app,
    )

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
