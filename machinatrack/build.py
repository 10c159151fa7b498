#!/usr/bin/env python3
"""
Build orchestrator for MachinaTrack
Creates the database tables and optionally loads the sample shop data
"""

from machinatrack import create_app, db
from machinatrack.logger import get_logger

logger = get_logger("machinatrack.build")


def build_models():
    """Create every table registered on the SQLAlchemy metadata"""
    logger.info("Building models")
    # Models register themselves on import
    import machinatrack.data  # noqa: F401
    db.create_all()
    logger.info("All database tables created")


def build_database(enable_debug_data=True, app=None):
    """
    Create tables and, when enabled, insert debug data.

    Args:
        enable_debug_data (bool): Whether to insert the sample shop data (default: True)
        app (Flask, optional): Application to build against; a new one is created when omitted

    Returns:
        dict: Debug data summary per module (empty when debug data is disabled)
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build - debug data: {enable_debug_data}")
        build_models()

        summary = {}
        if enable_debug_data:
            from machinatrack.debug.debug_data_manager import insert_debug_data
            logger.info("Inserting debug data...")
            try:
                summary = insert_debug_data(enabled=True)
            except Exception as e:
                logger.error(f"Debug data insertion failed: {e}")
                raise

        logger.info("Database build completed successfully")
        return summary
