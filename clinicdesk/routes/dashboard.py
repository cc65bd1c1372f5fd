from datetime import datetime
from zoneinfo import ZoneInfo

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required

from clinicdesk.services import get_repository

dashboard_bp = Blueprint('dashboard', __name__)


def practice_today():
    zone = ZoneInfo(current_app.config.get('PRACTICE_TIMEZONE', 'UTC'))
    return datetime.now(zone).date()


@dashboard_bp.route('/dashboard/summary')
@login_required
def summary():
    return jsonify(get_repository().dashboard_summary(current_user.id, practice_today()))
