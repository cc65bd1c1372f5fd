from datetime import date, time, timedelta

import click

from clinicdesk.errors import DuplicateIdentity, ValidationFailed
from clinicdesk.schemas import AppointmentCreate, PatientCreate, RegisterRequest, WhatsappTemplateCreate
from clinicdesk.storage import Collection, SqlStorage

demo_practitioner = {
    "username": "drsofia",
    "email": "sofia@nutrisofia.com.br",
    "password": "demo1234",
    "name": "Sofia Mendes",
    "profession": "Nutricionista",
}

demo_patients = [
    {"name": "Lucas Silva", "email": "lucas.silva@gmail.com", "phone": "11999990000", "profession": "Engenheiro"},
    {"name": "Marina Costa", "email": "marina.costa@gmail.com", "phone": "11988887777", "birthDate": "1990-04-12"},
    {"name": "Paulo Ramos", "email": "paulo.ramos@outlook.com", "phone": "11977776666", "status": "inactive"},
]

demo_templates = [
    {
        "name": "Confirmação de consulta",
        "message": "Olá {nome}, tudo bem?\n\nLembrete da sua consulta amanhã ({data}) às {hora}.\n\n"
                   "Confirme sua presença respondendo esta mensagem.",
        "timeBeforeAppointment": "1 day",
        "sendTime": "09:00",
        "requestConfirmation": True,
    },
    {
        "name": "Lembrete de retorno",
        "message": "Olá {nome}, passando para lembrar da sua consulta de retorno em {data} às {hora}.\n\n"
                   "Importante trazer seus exames recentes.",
        "timeBeforeAppointment": "2 days",
        "sendTime": "10:00",
        "requestConfirmation": False,
    },
]


def register_commands(app):
    """Register all custom CLI commands with the Flask app."""

    def storage():
        return app.extensions['clinicdesk.storage']

    def require_sql():
        if not isinstance(storage(), SqlStorage):
            raise click.ClickException("This command needs STORAGE_BACKEND=sql")
        return storage()

    def warn_if_ephemeral():
        if not isinstance(storage(), SqlStorage):
            click.echo("Note: STORAGE_BACKEND is 'memory'; data created here ends with this command.")

    @app.cli.command("init-db")
    def init_db():
        """Creates all database tables. Run this first."""
        require_sql().create_all()
        click.echo("Database tables created successfully!")

    @app.cli.command("reset-db")
    def reset_db():
        """Drop all tables and recreate them. WARNING: This deletes all data!"""
        sql_storage = require_sql()
        if click.confirm('This will delete ALL data. Are you sure?'):
            sql_storage.drop_all()
            sql_storage.create_all()
            click.echo("Database reset successfully!")
        else:
            click.echo("Database reset cancelled.")

    @app.cli.command("create-practitioner")
    def create_practitioner():
        """Create a practitioner account interactively."""
        warn_if_ephemeral()
        payload = {
            'username': click.prompt('Username'),
            'email': click.prompt('Email'),
            'password': click.prompt('Password', hide_input=True, confirmation_prompt=True),
            'name': click.prompt('Full name'),
        }
        profession = click.prompt('Profession (optional)', default='', show_default=False)
        if profession:
            payload['profession'] = profession

        try:
            user = app.extensions['clinicdesk.auth'].register_user(RegisterRequest.parse(payload))
        except (DuplicateIdentity, ValidationFailed) as e:
            raise click.ClickException(_describe(e))
        click.echo(f"Practitioner {user.username} (id {user.id}) created successfully!")

    @app.cli.command("list-users")
    def list_users():
        """List all practitioner accounts."""
        users = storage().list_where(Collection.USERS)
        if not users:
            click.echo("No users found.")
            return
        for user in users:
            click.echo(f"{user.id:>4}  {user.username:<20} {user.email:<30} {user.profession or '-'}")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed a demo practitioner with patients, appointments and reminder templates."""
        warn_if_ephemeral()
        auth = app.extensions['clinicdesk.auth']
        repository = app.extensions['clinicdesk.repository']

        user = storage().find_user_by_username(demo_practitioner['username'])
        if user is not None:
            click.echo(f"  - User '{user.username}' already exists, nothing to seed.")
            return

        user = auth.register_user(RegisterRequest.parse(demo_practitioner))
        click.echo(f"  - User '{user.username}' created (password: {demo_practitioner['password']}).")

        patients = [repository.create_patient(user.id, PatientCreate.parse(p)) for p in demo_patients]
        click.echo(f"  - {len(patients)} patients created.")

        today = date.today()
        slots = [(today, time(9, 0), 'initial'), (today, time(10, 30), 'followup'),
                 (today + timedelta(days=1), time(14, 0), 'followup')]
        for patient, (day, start, kind) in zip(patients, slots):
            end = time(start.hour + 1, start.minute)
            repository.create_appointment(user.id, AppointmentCreate.parse({
                'patientId': patient.id,
                'date': day.isoformat(),
                'startTime': start.strftime('%H:%M'),
                'endTime': end.strftime('%H:%M'),
                'type': kind,
            }))
        click.echo(f"  - {len(slots)} appointments created.")

        for template in demo_templates:
            repository.create_template(user.id, WhatsappTemplateCreate.parse(template))
        click.echo(f"  - {len(demo_templates)} reminder templates created.")
        click.echo("Demo seeding complete.")


def _describe(error):
    details = getattr(error, 'errors', None)
    if not details:
        return error.message
    fields = ', '.join(f"{e['field']}: {e['message']}" for e in details)
    return f"{error.message} ({fields})"
