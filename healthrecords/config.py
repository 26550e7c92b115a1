from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EntityKind(Enum):
    PATIENT = "patient"
    CLINICIAN = "clinician"
    FACILITY = "facility"
    APPOINTMENT = "appointment"
    PRESCRIPTION = "prescription"
    REFERRAL = "referral"
    STAFF = "staff"


class StorageConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HEALTHRECORDS_", env_file=".env", extra="ignore")

    data_dir: Path = Path("data")
    notification_dir: Path = Path(".")
    create_missing_files: bool = True

    patients_file: str = "patients.csv"
    clinicians_file: str = "clinicians.csv"
    facilities_file: str = "facilities.csv"
    appointments_file: str = "appointments.csv"
    prescriptions_file: str = "prescriptions.csv"
    referrals_file: str = "referrals.csv"
    staff_file: str = "staff.csv"

    def path_for(self, kind: EntityKind) -> Path:
        """Resolve the backing file for ``kind`` inside ``data_dir``."""
        file_names = {
            EntityKind.PATIENT: self.patients_file,
            EntityKind.CLINICIAN: self.clinicians_file,
            EntityKind.FACILITY: self.facilities_file,
            EntityKind.APPOINTMENT: self.appointments_file,
            EntityKind.PRESCRIPTION: self.prescriptions_file,
            EntityKind.REFERRAL: self.referrals_file,
            EntityKind.STAFF: self.staff_file,
        }
        return self.data_dir / file_names[kind]


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    storage: StorageConfig = Field(default_factory=lambda: StorageConfig())
