from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, field_validator

from healthrecords.domain.exceptions import MalformedRecordError
from healthrecords.storage.codec import DELIMITER, sanitize_field


class AppointmentStatus(str, Enum):
    """Known states of an appointment. Stored status text is not restricted to these."""

    SCHEDULED = "Scheduled"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class PrescriptionStatus(str, Enum):
    ISSUED = "Issued"
    COLLECTED = "Collected"


class ReferralStatus(str, Enum):
    SENT = "Sent"
    ACCEPTED = "Accepted"
    COMPLETED = "Completed"


class Record(BaseModel):
    """A flat record of text fields persisted as one delimited line.

    Field declaration order is the file's column order. Subclasses name their
    identifier column in ``id_field``.
    """

    model_config = ConfigDict(frozen=True)

    id_field: ClassVar[str]

    @field_validator("*", mode="before")
    @classmethod
    def _absent_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def record_id(self) -> str:
        return getattr(self, self.id_field)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields)

    @classmethod
    def header(cls) -> str:
        return DELIMITER.join(cls.field_names())

    @classmethod
    def from_row(
        cls, row: Sequence[str], line_number: int = 0, path: Path | None = None
    ) -> Self:
        """Build a record from a positional row; extra trailing fields are ignored.

        Raises:
            MalformedRecordError: If ``row`` is narrower than the record.
        """
        names = cls.field_names()
        if len(row) < len(names):
            raise MalformedRecordError(path, line_number, expected=len(names), actual=len(row))
        return cls(**dict(zip(names, row)))

    def to_line(self) -> str:
        return DELIMITER.join(sanitize_field(getattr(self, name)) for name in self.field_names())


class Patient(Record):
    """A registered patient."""

    id_field: ClassVar[str] = "patient_id"

    patient_id: str
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    nhs_number: str = ""
    gender: str = ""
    phone_number: str = ""
    email: str = ""
    address: str = ""
    postcode: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    registration_date: str = ""
    gp_surgery_id: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Clinician(Record):
    """A GP, consultant, nurse or other clinician."""

    id_field: ClassVar[str] = "clinician_id"

    clinician_id: str
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    speciality: str = ""
    gmc_number: str = ""
    phone_number: str = ""
    email: str = ""
    workplace_id: str = ""
    workplace_type: str = ""
    employment_status: str = ""
    start_date: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_gp(self) -> bool:
        return self.title.upper() == "GP"


class Facility(Record):
    """A GP surgery, hospital or other site where care is delivered."""

    id_field: ClassVar[str] = "facility_id"

    facility_id: str
    facility_name: str = ""
    facility_type: str = ""
    address: str = ""
    postcode: str = ""
    phone_number: str = ""
    email: str = ""
    opening_hours: str = ""
    manager_name: str = ""
    capacity: str = ""
    specialities_offered: str = ""


class Appointment(Record):
    """A booking between a patient and a clinician at a facility."""

    id_field: ClassVar[str] = "appointment_id"

    appointment_id: str
    patient_id: str = ""
    clinician_id: str = ""
    facility_id: str = ""
    appointment_date: str = ""
    appointment_time: str = ""
    duration_minutes: str = ""
    appointment_type: str = ""
    status: str = AppointmentStatus.SCHEDULED.value
    reason_for_visit: str = ""
    notes: str = ""
    created_date: str = ""
    last_modified: str = ""


class Prescription(Record):
    """A medication issued to a patient, optionally tied to an appointment."""

    id_field: ClassVar[str] = "prescription_id"

    prescription_id: str
    patient_id: str = ""
    clinician_id: str = ""
    appointment_id: str = ""
    prescription_date: str = ""
    medication_name: str = ""
    dosage: str = ""
    frequency: str = ""
    duration_days: str = ""
    quantity: str = ""
    instructions: str = ""
    pharmacy_name: str = ""
    status: str = PrescriptionStatus.ISSUED.value
    issue_date: str = ""
    collection_date: str = ""


class Referral(Record):
    """A referral of a patient from one clinician and facility to another."""

    id_field: ClassVar[str] = "referral_id"

    referral_id: str
    patient_id: str = ""
    referring_clinician_id: str = ""
    referred_to_clinician_id: str = ""
    referring_facility_id: str = ""
    referred_to_facility_id: str = ""
    referral_date: str = ""
    urgency_level: str = ""
    referral_reason: str = ""
    clinical_summary: str = ""
    requested_investigations: str = ""
    status: str = ReferralStatus.SENT.value
    appointment_id: str = ""
    notes: str = ""
    created_date: str = ""
    last_updated: str = ""


class Staff(Record):
    """A non-clinical staff member attached to a facility."""

    id_field: ClassVar[str] = "staff_id"

    staff_id: str
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    department: str = ""
    facility_id: str = ""
    phone_number: str = ""
    email: str = ""
    employment_status: str = ""
    start_date: str = ""
    line_manager: str = ""
    access_level: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
