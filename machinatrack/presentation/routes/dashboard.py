"""
Dashboard route
"""

from flask import Blueprint, current_app

from machinatrack.presentation.routes.responses import get_uow, int_arg, success_response

bp = Blueprint('dashboard', __name__)


@bp.route('', methods=['GET'])
def dashboard():
    """Summary counts, status breakdowns and recent activity in one payload"""
    dashboard_service = get_uow().dashboard
    upcoming_days = current_app.config.get('UPCOMING_MAINTENANCE_DAYS', 30)

    return success_response({
        'summary': dashboard_service.get_dashboard_summary(upcoming_days=upcoming_days),
        'equipmentStatusCounts': dashboard_service.get_equipment_status_counts(),
        'maintenanceStatusCounts': dashboard_service.get_maintenance_status_counts(),
        'recentActivity': dashboard_service.get_recent_activity(int_arg('activityLimit', 10)),
    })
