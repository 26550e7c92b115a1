import datetime as dt

from loguru import logger
from pydantic import BaseModel, ConfigDict

from healthrecords.config import AppConfig, EntityKind
from healthrecords.domain.models import (
    Appointment,
    Clinician,
    Facility,
    Patient,
    Prescription,
    Record,
    Referral,
    Staff,
)
from healthrecords.records.managers import (
    AppointmentManager,
    ClinicianManager,
    FacilityManager,
    PatientManager,
    PrescriptionManager,
    StaffManager,
)
from healthrecords.records.referrals import (
    ReferralManager,
    ReferralManagerHandle,
    ReferralNotifier,
)
from healthrecords.records.service import Clock
from healthrecords.storage.repository import FlatFileRepository

_RECORD_TYPES: dict[EntityKind, type[Record]] = {
    EntityKind.PATIENT: Patient,
    EntityKind.CLINICIAN: Clinician,
    EntityKind.FACILITY: Facility,
    EntityKind.APPOINTMENT: Appointment,
    EntityKind.PRESCRIPTION: Prescription,
    EntityKind.REFERRAL: Referral,
    EntityKind.STAFF: Staff,
}


class RecordServices(BaseModel):
    """One service per entity kind, plus the handle that owns the referral manager."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    patients: PatientManager
    clinicians: ClinicianManager
    facilities: FacilityManager
    appointments: AppointmentManager
    prescriptions: PrescriptionManager
    referrals: ReferralManager
    staff: StaffManager
    referral_handle: ReferralManagerHandle


def build_repository(config: AppConfig, kind: EntityKind) -> FlatFileRepository:
    """Build the flat-file repository for ``kind``, creating its file if configured to."""
    repository = FlatFileRepository(config.storage.path_for(kind), _RECORD_TYPES[kind])
    if config.storage.create_missing_files:
        repository.ensure_exists()
    return repository


def build_services(
    config: AppConfig,
    referral_handle: ReferralManagerHandle | None = None,
    clock: Clock = dt.date.today,
) -> RecordServices:
    """Load every entity kind and wire up its service.

    Pass an existing ``referral_handle`` to share its referral manager;
    otherwise a new handle is created.
    """
    logger.info("Building record services from {}", config.storage.data_dir)

    handle = referral_handle or ReferralManagerHandle()
    notification_dir = config.storage.notification_dir
    if config.storage.create_missing_files:
        notification_dir.mkdir(parents=True, exist_ok=True)

    return RecordServices(
        patients=PatientManager(build_repository(config, EntityKind.PATIENT), clock=clock),
        clinicians=ClinicianManager(build_repository(config, EntityKind.CLINICIAN), clock=clock),
        facilities=FacilityManager(build_repository(config, EntityKind.FACILITY), clock=clock),
        appointments=AppointmentManager(
            build_repository(config, EntityKind.APPOINTMENT), clock=clock
        ),
        prescriptions=PrescriptionManager(
            build_repository(config, EntityKind.PRESCRIPTION), clock=clock
        ),
        referrals=handle.get(
            build_repository(config, EntityKind.REFERRAL),
            notifier=ReferralNotifier(notification_dir),
            clock=clock,
        ),
        staff=StaffManager(build_repository(config, EntityKind.STAFF), clock=clock),
        referral_handle=handle,
    )
