"""Placeholder substitution for reminder templates. Nothing here sends messages."""
from clinicdesk.schemas import Appointment, Patient, WhatsappTemplate

PLACEHOLDERS = ('{nome}', '{data}', '{hora}')


def placeholder_values(patient: Patient, appointment: Appointment) -> dict:
    return {
        '{nome}': patient.name,
        '{data}': appointment.date.strftime('%d/%m/%Y'),
        '{hora}': appointment.start_time.strftime('%H:%M'),
    }


def render_message(template: WhatsappTemplate, patient: Patient, appointment: Appointment) -> str:
    """Fill the known tags; unknown ``{...}`` text is left untouched."""
    message = template.message
    for tag, value in placeholder_values(patient, appointment).items():
        message = message.replace(tag, value)
    return message
