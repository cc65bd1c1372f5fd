from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from clinicdesk.decorators.auth import owned_resource
from clinicdesk.errors import ValidationFailed
from clinicdesk.schemas import PatientCreate, PatientPatch
from clinicdesk.services import get_repository
from clinicdesk.storage import Collection

patients_bp = Blueprint('patients', __name__)

PATIENT_STATUSES = ('active', 'inactive')


@patients_bp.route('/patients')
@login_required
def list_patients():
    status = request.args.get('status') or None
    if status is not None and status not in PATIENT_STATUSES:
        raise ValidationFailed('Invalid patient filter', [{
            'field': 'status',
            'message': f"status must be one of {', '.join(PATIENT_STATUSES)}",
            'code': 'literal_error',
        }])
    patients = get_repository().patients_for_user(
        current_user.id,
        status=status,
        search=request.args.get('search') or None,
    )
    return jsonify([p.to_json() for p in patients])


@patients_bp.route('/patients/<int:patient_id>')
@login_required
@owned_resource(Collection.PATIENTS, 'patient_id', 'patient')
def get_patient(patient):
    return jsonify(patient.to_json())


@patients_bp.route('/patients', methods=['POST'])
@login_required
def create_patient():
    data = PatientCreate.parse(request.get_json(silent=True))
    patient = get_repository().create_patient(current_user.id, data)
    return jsonify(patient.to_json()), 201


@patients_bp.route('/patients/<int:patient_id>', methods=['PUT'])
@login_required
@owned_resource(Collection.PATIENTS, 'patient_id', 'patient')
def update_patient(patient):
    patch = PatientPatch.parse(request.get_json(silent=True))
    updated = get_repository().update_patient(patient, patch)
    return jsonify(updated.to_json())
