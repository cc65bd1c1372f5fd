from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from clinicdesk.decorators.auth import owned_resource
from clinicdesk.schemas import MedicalRecordCreate
from clinicdesk.services import get_repository
from clinicdesk.storage import Collection

medical_records_bp = Blueprint('medical_records', __name__)


@medical_records_bp.route('/medical-records/patient/<int:patient_id>')
@login_required
@owned_resource(Collection.PATIENTS, 'patient_id', 'patient')
def records_for_patient(patient):
    records = get_repository().records_for_patient(patient.id)
    return jsonify([r.to_json() for r in records])


@medical_records_bp.route('/medical-records/<int:record_id>')
@login_required
@owned_resource(Collection.MEDICAL_RECORDS, 'record_id', 'record')
def get_medical_record(record):
    return jsonify(record.to_json())


@medical_records_bp.route('/medical-records', methods=['POST'])
@login_required
def create_medical_record():
    # Records are append-only: there is no PUT
    data = MedicalRecordCreate.parse(request.get_json(silent=True))
    record = get_repository().create_medical_record(current_user.id, data)
    return jsonify(record.to_json()), 201
