"""
Tests for recording calibrations against metrology tools.
"""

from datetime import date

import pytest

from machinatrack import db
from machinatrack.buisness.core.errors import ImmutableRecordError, NotFoundError, ValidationError
from machinatrack.buisness.metrology.calibration_context import (
    MetrologyToolContext,
    compute_tool_update,
)
from machinatrack.presentation.routes.responses import get_uow, success_response
from machinatrack.utils.dates import add_days, today_utc


@pytest.mark.parametrize('result, status', [
    ('pass', 'calibrated'),
    ('adjusted', 'calibrated'),
    ('fail', 'out_of_calibration'),
])
def test_compute_tool_update(result, status):
    update = compute_tool_update(180, result, date(2025, 1, 15))
    assert update == {
        'last_calibration_date': date(2025, 1, 15),
        'next_calibration_date': date(2025, 7, 14),
        'status': status,
    }


def test_passing_calibration_reschedules_tool(uow, make_tool):
    tool = make_tool(calibration_interval_days=365)

    result = MetrologyToolContext(uow, tool.id).record_calibration({
        'date': '2025-01-15',
        'performedBy': 'QC Lab',
        'result': 'pass',
        'certificateUrl': 'https://docs.example.com/certs/1.pdf',
    })

    assert result.tool.status == 'calibrated'
    assert result.tool.last_calibration_date == date(2025, 1, 15)
    assert result.tool.next_calibration_date == date(2026, 1, 15)
    assert result.calibration_log.next_due_date == result.tool.next_calibration_date
    assert result.calibration_log.metrology_tool_id == tool.id


def test_failed_calibration_still_advances_due_date(uow, make_tool):
    tool = make_tool(calibration_interval_days=30, status='calibrated')

    result = MetrologyToolContext(uow, tool.id).record_calibration({
        'date': '2025-03-01',
        'performedBy': 'QC Lab',
        'result': 'fail',
    })

    assert result.tool.status == 'out_of_calibration'
    assert result.tool.next_calibration_date == date(2025, 3, 31)


def test_calibration_date_defaults_to_today(uow, make_tool):
    tool = make_tool(calibration_interval_days=10)

    result = MetrologyToolContext(uow, tool.id).record_calibration({
        'performedBy': 'QC Lab',
        'result': 'adjusted',
    })

    assert result.calibration_log.date == today_utc()
    assert result.tool.next_calibration_date == add_days(today_utc(), 10)


def test_calibration_logs_listed_newest_first(uow, make_tool):
    tool = make_tool()
    context = MetrologyToolContext(uow, tool.id)
    older = context.record_calibration({'date': '2024-01-10', 'performedBy': 'A', 'result': 'pass'})
    newer = context.record_calibration({'date': '2025-01-10', 'performedBy': 'B', 'result': 'pass'})

    data = uow.metrology_tools.find_by_id(tool.id).to_dict()
    assert data['calibrationLogIds'] == [newer.calibration_log.id, older.calibration_log.id]


def test_invalid_result_is_rejected(uow, make_tool):
    tool = make_tool()
    with pytest.raises(ValidationError) as excinfo:
        MetrologyToolContext(uow, tool.id).record_calibration({'performedBy': 'A', 'result': 'maybe'})
    assert excinfo.value.details[0]['field'] == 'result'
    assert uow.calibration_logs.count() == 0


def test_unknown_tool_raises_not_found(uow):
    with pytest.raises(NotFoundError):
        MetrologyToolContext(uow, 'missing').record_calibration({'performedBy': 'A', 'result': 'pass'})


def test_calibration_log_is_immutable(uow, make_tool):
    tool = make_tool()
    result = MetrologyToolContext(uow, tool.id).record_calibration({'performedBy': 'A', 'result': 'pass'})

    log = uow.calibration_logs.find_by_id(result.calibration_log.id)
    log.notes = 'edited afterwards'
    with pytest.raises(ImmutableRecordError, match='immutable'):
        db.session.flush()
    db.session.rollback()

    with pytest.raises(ImmutableRecordError):
        uow.calibration_logs.update(log.id, {'notes': 'edited'})


def test_immutable_log_error_uses_envelope(app, client, uow, make_tool):
    tool = make_tool()
    result = MetrologyToolContext(uow, tool.id).record_calibration({'performedBy': 'A', 'result': 'pass'})
    log_id = result.calibration_log.id

    @app.route('/api/test-only/calibration-logs/<log_id>', methods=['PUT'])
    def edit_log(log_id):
        uow = get_uow()
        with uow.transaction():
            uow.calibration_logs.update(log_id, {'notes': 'edited'})
        return success_response({})

    response = client.put(f'/api/test-only/calibration-logs/{log_id}', json={})
    body = response.get_json()
    assert response.status_code == 409
    assert body['success'] is False
    assert 'immutable' in body['error']
