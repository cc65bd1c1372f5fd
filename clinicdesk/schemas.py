from __future__ import annotations
from datetime import date as Date, datetime, time as Time, timezone
from typing import Annotated, ClassVar, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StringConstraints, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from clinicdesk.errors import ValidationFailed

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PatientStatus = Literal['active', 'inactive']
AppointmentStatus = Literal['confirmed', 'pending', 'canceled']
TemplateStatus = Literal['active', 'inactive']


# Largest id a 64-bit integer primary key can hold
MAX_ID = 2 ** 63 - 1
RecordId = Annotated[int, Field(ge=1, le=MAX_ID)]


def _format_clock(value: Optional[Time]) -> Optional[str]:
    return value.strftime('%H:%M') if value is not None else None


def _wall_clock(value: Time) -> Time:
    """Practice-local time of day, kept to the minute."""
    if value.tzinfo is not None:
        raise ValueError('time must not carry a UTC offset')
    return value.replace(second=0, microsecond=0)


Clock = Annotated[Time, AfterValidator(_wall_clock)]


# Records

class Record(BaseModel):
    """Stored entity; serialized to the wire with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int

    def to_json(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)


class User(Record):
    username: str
    email: str
    password: str = Field(exclude=True)
    name: str
    profession: Optional[str] = None
    role: str = 'practitioner'


class Patient(Record):
    name: str
    email: str
    phone: str
    birth_date: Optional[Date] = None
    profession: Optional[str] = None
    status: PatientStatus = 'active'
    user_id: int


class Appointment(Record):
    patient_id: int
    user_id: int
    date: Date
    start_time: Time
    end_time: Time
    type: str
    status: AppointmentStatus = 'confirmed'
    notes: Optional[str] = None

    @field_serializer('start_time', 'end_time')
    def serialize_clock(self, value: Time) -> str:
        return _format_clock(value)


class MedicalRecord(Record):
    patient_id: int
    user_id: int
    date: datetime
    record_type: str
    content: str

    @field_validator('date')
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class WhatsappTemplate(Record):
    user_id: int
    name: str
    message: str
    time_before_appointment: str
    status: TemplateStatus = 'active'
    request_confirmation: bool = True
    send_time: Time

    @field_serializer('send_time')
    def serialize_clock(self, value: Time) -> str:
        return _format_clock(value)


# Request shapes

class RequestShape(BaseModel):
    """Incoming JSON body. Unknown keys are rejected; server-owned keys are dropped."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')

    server_fields: ClassVar[frozenset] = frozenset({'id', 'userId', 'user_id'})
    error_message: ClassVar[str] = 'Invalid data'

    @classmethod
    def parse(cls, payload):
        if not isinstance(payload, dict):
            raise ValidationFailed(cls.error_message, [{
                'field': None,
                'message': 'Request body must be a JSON object',
                'code': 'object_type',
            }])
        data = {key: value for key, value in payload.items() if key not in cls.server_fields}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValidationFailed.from_pydantic(e, cls.error_message)

    def changes(self) -> dict:
        """Only the fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class RegisterRequest(RequestShape):
    error_message = 'Invalid registration data'

    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=80)]
    email: EmailStr
    password: str = Field(min_length=6)
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    profession: Optional[str] = None


class LoginRequest(RequestShape):
    error_message = 'Invalid login data'

    email: NonEmptyStr
    password: str = Field(min_length=1)


class PatientCreate(RequestShape):
    error_message = 'Invalid patient data'

    name: NonEmptyStr
    email: EmailStr
    phone: NonEmptyStr
    birth_date: Optional[Date] = None
    profession: Optional[str] = None
    status: PatientStatus = 'active'


class PatientPatch(RequestShape):
    # Non-nullable columns default to None but reject an explicit null
    error_message = 'Invalid patient data'

    name: NonEmptyStr = None
    email: EmailStr = None
    phone: NonEmptyStr = None
    birth_date: Optional[Date] = None
    profession: Optional[str] = None
    status: PatientStatus = None


class AppointmentCreate(RequestShape):
    error_message = 'Invalid appointment data'

    patient_id: RecordId
    date: Date
    start_time: Clock
    end_time: Clock
    type: NonEmptyStr
    status: AppointmentStatus = 'confirmed'
    notes: Optional[str] = None

    @field_validator('end_time')
    @classmethod
    def ends_after_start(cls, value, info):
        start = info.data.get('start_time')
        if start is not None and value <= start:
            raise ValueError('endTime must be after startTime')
        return value


class AppointmentPatch(RequestShape):
    error_message = 'Invalid appointment data'

    patient_id: RecordId = None
    date: Date = None
    start_time: Clock = None
    end_time: Clock = None
    type: NonEmptyStr = None
    status: AppointmentStatus = None
    notes: Optional[str] = None


class MedicalRecordCreate(RequestShape):
    error_message = 'Invalid medical record data'

    patient_id: RecordId
    record_type: NonEmptyStr
    content: NonEmptyStr
    date: Optional[datetime] = None


class WhatsappTemplateCreate(RequestShape):
    error_message = 'Invalid WhatsApp template data'

    name: NonEmptyStr
    message: NonEmptyStr
    time_before_appointment: NonEmptyStr
    status: TemplateStatus = 'active'
    request_confirmation: bool = True
    send_time: Clock


class WhatsappTemplatePatch(RequestShape):
    error_message = 'Invalid WhatsApp template data'

    name: NonEmptyStr = None
    message: NonEmptyStr = None
    time_before_appointment: NonEmptyStr = None
    status: TemplateStatus = None
    request_confirmation: bool = None
    send_time: Clock = None


class TemplatePreviewRequest(RequestShape):
    error_message = 'Invalid preview request'

    appointment_id: RecordId
