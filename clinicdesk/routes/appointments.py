import re
from datetime import date

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from clinicdesk.decorators.auth import owned_resource
from clinicdesk.errors import ValidationFailed
from clinicdesk.schemas import AppointmentCreate, AppointmentPatch
from clinicdesk.services import get_repository
from clinicdesk.storage import Collection

appointments_bp = Blueprint('appointments', __name__)

DAY_FORMAT = re.compile(r'\d{4}-\d{2}-\d{2}')


def parse_day(value):
    """Calendar day in YYYY-MM-DD; no timezone conversion is applied."""
    if DAY_FORMAT.fullmatch(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationFailed('Invalid date', [{
        'field': 'date',
        'message': 'date must use the YYYY-MM-DD format',
        'code': 'date_from_datetime_parsing',
    }])


@appointments_bp.route('/appointments')
@login_required
def list_appointments():
    appointments = get_repository().appointments_for_user(current_user.id)
    return jsonify([a.to_json() for a in appointments])


@appointments_bp.route('/appointments/date/<day>')
@login_required
def appointments_on_date(day):
    appointments = get_repository().appointments_for_date(current_user.id, parse_day(day))
    return jsonify([a.to_json() for a in appointments])


@appointments_bp.route('/appointments/patient/<int:patient_id>')
@login_required
@owned_resource(Collection.PATIENTS, 'patient_id', 'patient')
def appointments_for_patient(patient):
    appointments = get_repository().appointments_for_patient(patient.id)
    return jsonify([a.to_json() for a in appointments])


@appointments_bp.route('/appointments/<int:appointment_id>')
@login_required
@owned_resource(Collection.APPOINTMENTS, 'appointment_id', 'appointment')
def get_appointment(appointment):
    return jsonify(appointment.to_json())


@appointments_bp.route('/appointments', methods=['POST'])
@login_required
def create_appointment():
    data = AppointmentCreate.parse(request.get_json(silent=True))
    appointment = get_repository().create_appointment(current_user.id, data)
    return jsonify(appointment.to_json()), 201


@appointments_bp.route('/appointments/<int:appointment_id>', methods=['PUT'])
@login_required
@owned_resource(Collection.APPOINTMENTS, 'appointment_id', 'appointment')
def update_appointment(appointment):
    patch = AppointmentPatch.parse(request.get_json(silent=True))
    updated = get_repository().update_appointment(appointment, patch)
    return jsonify(updated.to_json())
