from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from clinicdesk.decorators.auth import owned_resource
from clinicdesk.schemas import TemplatePreviewRequest, WhatsappTemplateCreate, WhatsappTemplatePatch
from clinicdesk.services import get_repository
from clinicdesk.services.reminders import PLACEHOLDERS, render_message
from clinicdesk.storage import Collection

templates_bp = Blueprint('templates', __name__)


@templates_bp.route('/whatsapp-templates')
@login_required
def list_templates():
    templates = get_repository().templates_for_user(current_user.id)
    return jsonify([t.to_json() for t in templates])


@templates_bp.route('/whatsapp-templates/<int:template_id>')
@login_required
@owned_resource(Collection.WHATSAPP_TEMPLATES, 'template_id', 'template')
def get_template(template):
    return jsonify(template.to_json())


@templates_bp.route('/whatsapp-templates', methods=['POST'])
@login_required
def create_template():
    data = WhatsappTemplateCreate.parse(request.get_json(silent=True))
    template = get_repository().create_template(current_user.id, data)
    return jsonify(template.to_json()), 201


@templates_bp.route('/whatsapp-templates/<int:template_id>', methods=['PUT'])
@login_required
@owned_resource(Collection.WHATSAPP_TEMPLATES, 'template_id', 'template')
def update_template(template):
    patch = WhatsappTemplatePatch.parse(request.get_json(silent=True))
    updated = get_repository().update_template(template, patch)
    return jsonify(updated.to_json())


@templates_bp.route('/whatsapp-templates/<int:template_id>/preview', methods=['POST'])
@login_required
@owned_resource(Collection.WHATSAPP_TEMPLATES, 'template_id', 'template')
def preview_template(template):
    """Render the template for one of the caller's appointments. Nothing is sent."""
    data = TemplatePreviewRequest.parse(request.get_json(silent=True))
    repository = get_repository()
    appointment = repository.get_owned(Collection.APPOINTMENTS, data.appointment_id, current_user.id)
    patient = repository.get_owned(Collection.PATIENTS, appointment.patient_id, current_user.id)
    return jsonify({
        'templateId': template.id,
        'appointmentId': appointment.id,
        'message': render_message(template, patient, appointment),
        'tags': [tag for tag in PLACEHOLDERS if tag in template.message],
        'requestConfirmation': template.request_confirmation,
    })
