"""
Pytest configuration and fixtures
Every test gets a fresh application on an in-memory SQLite database.
"""
import os
import tempfile

# Must be set before machinatrack creates its logger or app
os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('MACHINATRACK_LOG_DIR', tempfile.mkdtemp(prefix='machinatrack-logs-'))

import pytest
from datetime import date

from machinatrack import create_app
from machinatrack import db as _db
from machinatrack.services.core.unit_of_work import UnitOfWork

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'ENABLE_HTTPS': False,
    'FORCE_HTTPS_REDIRECT': False,
    'RATELIMIT_ENABLED': False,
}


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing"""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def uow(app):
    return UnitOfWork(_db.session)


@pytest.fixture
def equipment(uow):
    """One committed piece of equipment"""
    with uow.transaction():
        record = uow.equipment.create({
            'name': 'Haas VF-2',
            'model': 'VF-2',
            'serial_number': 'VF2-0001',
            'location': 'Bay 1',
        })
    return record


@pytest.fixture
def make_task(uow, equipment):
    """Factory for committed maintenance tasks on the `equipment` fixture"""
    def _make_task(**overrides):
        data = {
            'equipment_id': equipment.id,
            'description': 'Check way lube',
            'status': 'pending',
        }
        data.update(overrides)
        with uow.transaction():
            task = uow.maintenance_tasks.create(data)
        return task
    return _make_task


@pytest.fixture
def make_tool(uow):
    def _make_tool(serial_number='MIC-0001', **overrides):
        data = {
            'name': 'Outside Micrometer',
            'type': 'Micrometer',
            'serial_number': serial_number,
            'calibration_interval_days': 365,
        }
        data.update(overrides)
        with uow.transaction():
            tool = uow.metrology_tools.create(data)
        return tool
    return _make_tool


@pytest.fixture
def completion_day():
    return date(2025, 6, 18)
