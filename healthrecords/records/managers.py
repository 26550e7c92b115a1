from loguru import logger

from healthrecords.domain.models import (
    Appointment,
    AppointmentStatus,
    Clinician,
    Facility,
    Patient,
    Prescription,
    PrescriptionStatus,
    Staff,
)
from healthrecords.records.service import RecordService


class PatientManager(RecordService[Patient]):
    kind = "Patient"
    prefix = "P"

    def create(
        self,
        first_name: str,
        last_name: str,
        *,
        date_of_birth: str = "",
        nhs_number: str = "",
        gender: str = "",
        phone_number: str = "",
        email: str = "",
        address: str = "",
        postcode: str = "",
        emergency_contact_name: str = "",
        emergency_contact_phone: str = "",
        registration_date: str = "",
        gp_surgery_id: str = "",
    ) -> Patient:
        """Register a patient under the next free ``P`` identifier."""
        return self._insert(
            lambda patient_id: Patient(
                patient_id=patient_id,
                first_name=first_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                nhs_number=nhs_number,
                gender=gender,
                phone_number=phone_number,
                email=email,
                address=address,
                postcode=postcode,
                emergency_contact_name=emergency_contact_name,
                emergency_contact_phone=emergency_contact_phone,
                registration_date=registration_date,
                gp_surgery_id=gp_surgery_id,
            )
        )


class ClinicianManager(RecordService[Clinician]):
    """Clinician identifiers are matched case-insensitively (``c001`` finds ``C001``)."""

    kind = "Clinician"
    prefix = "C"
    case_insensitive_ids = True

    def create(
        self,
        first_name: str,
        last_name: str,
        *,
        title: str = "",
        speciality: str = "",
        gmc_number: str = "",
        phone_number: str = "",
        email: str = "",
        workplace_id: str = "",
        workplace_type: str = "",
        employment_status: str = "",
        start_date: str = "",
    ) -> Clinician:
        return self._insert(
            lambda clinician_id: Clinician(
                clinician_id=clinician_id,
                first_name=first_name,
                last_name=last_name,
                title=title,
                speciality=speciality,
                gmc_number=gmc_number,
                phone_number=phone_number,
                email=email,
                workplace_id=workplace_id,
                workplace_type=workplace_type,
                employment_status=employment_status,
                start_date=start_date,
            )
        )


class FacilityManager(RecordService[Facility]):
    kind = "Facility"
    prefix = "F"

    def create(
        self,
        facility_name: str,
        facility_type: str = "",
        *,
        address: str = "",
        postcode: str = "",
        phone_number: str = "",
        email: str = "",
        opening_hours: str = "",
        manager_name: str = "",
        capacity: str = "",
        specialities_offered: str = "",
    ) -> Facility:
        return self._insert(
            lambda facility_id: Facility(
                facility_id=facility_id,
                facility_name=facility_name,
                facility_type=facility_type,
                address=address,
                postcode=postcode,
                phone_number=phone_number,
                email=email,
                opening_hours=opening_hours,
                manager_name=manager_name,
                capacity=capacity,
                specialities_offered=specialities_offered,
            )
        )


class StaffManager(RecordService[Staff]):
    kind = "Staff"
    prefix = "ST"

    def create(
        self,
        first_name: str,
        last_name: str,
        *,
        role: str = "",
        department: str = "",
        facility_id: str = "",
        phone_number: str = "",
        email: str = "",
        employment_status: str = "",
        start_date: str = "",
        line_manager: str = "",
        access_level: str = "",
    ) -> Staff:
        return self._insert(
            lambda staff_id: Staff(
                staff_id=staff_id,
                first_name=first_name,
                last_name=last_name,
                role=role,
                department=department,
                facility_id=facility_id,
                phone_number=phone_number,
                email=email,
                employment_status=employment_status,
                start_date=start_date,
                line_manager=line_manager,
                access_level=access_level,
            )
        )


class AppointmentManager(RecordService[Appointment]):
    kind = "Appointment"
    prefix = "A"

    def create(
        self,
        patient_id: str,
        clinician_id: str,
        facility_id: str,
        appointment_date: str,
        appointment_time: str,
        *,
        duration_minutes: str = "",
        appointment_type: str = "",
        reason_for_visit: str = "",
    ) -> Appointment:
        """Book an appointment; it starts out ``Scheduled`` and stamped with today's date."""
        today = self._today()
        return self._insert(
            lambda appointment_id: Appointment(
                appointment_id=appointment_id,
                patient_id=patient_id,
                clinician_id=clinician_id,
                facility_id=facility_id,
                appointment_date=appointment_date,
                appointment_time=appointment_time,
                duration_minutes=duration_minutes,
                appointment_type=appointment_type,
                status=AppointmentStatus.SCHEDULED.value,
                reason_for_visit=reason_for_visit,
                notes="",
                created_date=today,
                last_modified=today,
            )
        )

    def cancel(self, appointment_id: str) -> Appointment | None:
        """Mark an appointment ``Cancelled`` and re-stamp ``last_modified``.

        Cancelling an already-cancelled appointment succeeds again. Returns
        None, without touching storage, when the identifier is unknown.
        """
        appointment = self._update(
            appointment_id,
            status=AppointmentStatus.CANCELLED.value,
            last_modified=self._today(),
        )
        if appointment is None:
            logger.warning("Appointment not found for cancellation: id={}", appointment_id)
            return None

        logger.info("Appointment cancelled: id={}", appointment_id)
        return appointment


class PrescriptionManager(RecordService[Prescription]):
    kind = "Prescription"
    prefix = "RX"

    def create(
        self,
        patient_id: str,
        clinician_id: str,
        appointment_id: str,
        medication_name: str,
        *,
        dosage: str = "",
        frequency: str = "",
        duration_days: str = "",
        quantity: str = "",
        instructions: str = "",
        pharmacy_name: str = "",
    ) -> Prescription:
        """Issue a prescription dated today; ``collection_date`` stays empty until collected."""
        today = self._today()
        return self._insert(
            lambda prescription_id: Prescription(
                prescription_id=prescription_id,
                patient_id=patient_id,
                clinician_id=clinician_id,
                appointment_id=appointment_id,
                prescription_date=today,
                medication_name=medication_name,
                dosage=dosage,
                frequency=frequency,
                duration_days=duration_days,
                quantity=quantity,
                instructions=instructions,
                pharmacy_name=pharmacy_name,
                status=PrescriptionStatus.ISSUED.value,
                issue_date=today,
                collection_date="",
            )
        )
