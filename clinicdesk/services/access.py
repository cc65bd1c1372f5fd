# clinicdesk/services/access.py
"""
Access-scoped queries over the Record Store.

Every read is filtered to one practitioner, and every write stamps the
owner server-side. ``owned_by`` is the single authorization predicate used
by the route decorators; it checks the direct ``user_id`` and, for children
of a patient, the parent patient's owner as well.
"""
import logging
from datetime import date
from typing import List, Optional

from clinicdesk.errors import Forbidden, NotFound, ValidationFailed
from clinicdesk.schemas import (
    Appointment, AppointmentCreate, AppointmentPatch, MedicalRecord, MedicalRecordCreate,
    Patient, PatientCreate, PatientPatch, WhatsappTemplate, WhatsappTemplateCreate,
    WhatsappTemplatePatch,
)
from clinicdesk.models.base import utcnow
from clinicdesk.storage import Collection, Storage

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGES = {
    Collection.USERS: 'User not found',
    Collection.PATIENTS: 'Patient not found',
    Collection.APPOINTMENTS: 'Appointment not found',
    Collection.MEDICAL_RECORDS: 'Medical record not found',
    Collection.WHATSAPP_TEMPLATES: 'WhatsApp template not found',
}


class ClinicRepository:
    def __init__(self, storage: Storage):
        self.storage = storage

    # Ownership

    def owned_by(self, collection: Collection, entity, user_id: int) -> bool:
        if collection is Collection.USERS:
            return entity.id == user_id
        if entity.user_id != user_id:
            return False
        if collection in (Collection.APPOINTMENTS, Collection.MEDICAL_RECORDS):
            parent = self.storage.get(Collection.PATIENTS, entity.patient_id)
            return parent is not None and parent.user_id == user_id
        return True

    def get_owned(self, collection: Collection, record_id: int, user_id: int):
        """Fetch a record the caller owns. NotFound if absent, Forbidden if foreign."""
        entity = self.storage.get(collection, record_id)
        if entity is None:
            raise NotFound(NOT_FOUND_MESSAGES[collection])
        if not self.owned_by(collection, entity, user_id):
            logger.warning(f"User {user_id} denied access to {collection.value} {record_id}")
            raise Forbidden()
        return entity

    def require_owned_patient(self, patient_id: int, user_id: int) -> Patient:
        """Parent check for creates; a missing patient is reported as Forbidden too."""
        patient = self.storage.get(Collection.PATIENTS, patient_id)
        if patient is None or patient.user_id != user_id:
            logger.warning(f"User {user_id} referenced patient {patient_id} they do not own")
            raise Forbidden('Not authorized to use this patient')
        return patient

    # Patients

    def patients_for_user(self, user_id: int, status: Optional[str] = None,
                          search: Optional[str] = None) -> List[Patient]:
        criteria = {'user_id': user_id}
        if status:
            criteria['status'] = status
        patients = self.storage.list_where(Collection.PATIENTS, **criteria)
        if search:
            needle = search.strip().lower()
            patients = [
                p for p in patients
                if needle in p.name.lower() or needle in p.email.lower() or needle in p.phone
            ]
        return patients

    def create_patient(self, user_id: int, data: PatientCreate) -> Patient:
        patient = self.storage.insert(Collection.PATIENTS, {**data.model_dump(), 'user_id': user_id})
        logger.info(f"Patient {patient.id} created by user {user_id}")
        return patient

    def update_patient(self, patient: Patient, patch: PatientPatch) -> Patient:
        updated = self.storage.update(Collection.PATIENTS, patient.id, patch.changes())
        logger.info(f"Patient {patient.id} updated by user {patient.user_id}")
        return updated

    # Appointments

    def appointments_for_user(self, user_id: int) -> List[Appointment]:
        return self._chronological(self.storage.list_where(Collection.APPOINTMENTS, user_id=user_id))

    def appointments_for_patient(self, patient_id: int) -> List[Appointment]:
        return self._chronological(self.storage.list_where(Collection.APPOINTMENTS, patient_id=patient_id))

    def appointments_for_date(self, user_id: int, day: date) -> List[Appointment]:
        return self._chronological(
            self.storage.list_where(Collection.APPOINTMENTS, user_id=user_id, date=day)
        )

    @staticmethod
    def _chronological(appointments):
        return sorted(appointments, key=lambda a: (a.date, a.start_time))

    def create_appointment(self, user_id: int, data: AppointmentCreate) -> Appointment:
        self.require_owned_patient(data.patient_id, user_id)
        appointment = self.storage.insert(Collection.APPOINTMENTS, {**data.model_dump(), 'user_id': user_id})
        logger.info(f"Appointment {appointment.id} created by user {user_id} for patient {data.patient_id}")
        return appointment

    def update_appointment(self, appointment: Appointment, patch: AppointmentPatch) -> Appointment:
        changes = patch.changes()
        if 'patient_id' in changes:
            self.require_owned_patient(changes['patient_id'], appointment.user_id)

        start = changes.get('start_time', appointment.start_time)
        end = changes.get('end_time', appointment.end_time)
        if end <= start:
            raise ValidationFailed(patch.error_message, [{
                'field': 'endTime',
                'message': 'endTime must be after startTime',
                'code': 'value_error',
            }])

        updated = self.storage.update(Collection.APPOINTMENTS, appointment.id, changes)
        logger.info(f"Appointment {appointment.id} updated by user {appointment.user_id}")
        return updated

    # Medical records

    def records_for_patient(self, patient_id: int) -> List[MedicalRecord]:
        return self.storage.list_where(Collection.MEDICAL_RECORDS, patient_id=patient_id)

    def create_medical_record(self, user_id: int, data: MedicalRecordCreate) -> MedicalRecord:
        self.require_owned_patient(data.patient_id, user_id)
        payload = data.model_dump()
        if payload.get('date') is None:
            payload['date'] = utcnow()
        record = self.storage.insert(Collection.MEDICAL_RECORDS, {**payload, 'user_id': user_id})
        logger.info(f"Medical record {record.id} ({record.record_type}) created by user {user_id}")
        return record

    # WhatsApp templates

    def templates_for_user(self, user_id: int) -> List[WhatsappTemplate]:
        return self.storage.list_where(Collection.WHATSAPP_TEMPLATES, user_id=user_id)

    def create_template(self, user_id: int, data: WhatsappTemplateCreate) -> WhatsappTemplate:
        template = self.storage.insert(Collection.WHATSAPP_TEMPLATES, {**data.model_dump(), 'user_id': user_id})
        logger.info(f"WhatsApp template {template.id} created by user {user_id}")
        return template

    def update_template(self, template: WhatsappTemplate, patch: WhatsappTemplatePatch) -> WhatsappTemplate:
        updated = self.storage.update(Collection.WHATSAPP_TEMPLATES, template.id, patch.changes())
        logger.info(f"WhatsApp template {template.id} updated by user {template.user_id}")
        return updated

    # Dashboard

    def dashboard_summary(self, user_id: int, today: date) -> dict:
        patients = self.patients_for_user(user_id)
        todays = self.appointments_for_date(user_id, today)
        by_status = {'confirmed': 0, 'pending': 0, 'canceled': 0}
        for appointment in todays:
            by_status[appointment.status] += 1

        upcoming = [a for a in todays if a.status != 'canceled']
        return {
            'date': today.isoformat(),
            'totalPatients': len(patients),
            'activePatients': sum(1 for p in patients if p.status == 'active'),
            'appointmentsToday': len(todays),
            'appointmentsByStatus': by_status,
            'firstAppointment': upcoming[0].to_json() if upcoming else None,
        }
