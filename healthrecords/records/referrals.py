import datetime as dt
import threading
from pathlib import Path

from loguru import logger

from healthrecords.domain.exceptions import RecordNotFoundError
from healthrecords.domain.models import Referral, ReferralStatus
from healthrecords.records.ports import RecordRepositoryProtocol
from healthrecords.records.service import Clock, RecordService


class ReferralNotifier:
    """Writes the patient notice and EHR audit note for a new referral.

    Files are named ``referral_email_<id>.txt`` and ``referral_ehr_<id>.txt``
    and written once. Failures are logged and never raised.
    """

    def __init__(self, directory: Path = Path(".")) -> None:
        self._directory = Path(directory)

    def email_path(self, referral_id: str) -> Path:
        return self._directory / f"referral_email_{referral_id}.txt"

    def ehr_path(self, referral_id: str) -> Path:
        return self._directory / f"referral_ehr_{referral_id}.txt"

    def notify(self, referral: Referral) -> bool:
        """Write both artifacts. Returns False if either could not be written."""
        try:
            self.email_path(referral.referral_id).write_text(
                _email_body(referral), encoding="utf-8"
            )
            self.ehr_path(referral.referral_id).write_text(_ehr_body(referral), encoding="utf-8")
        except OSError as exc:
            logger.warning(
                "Referral notification failed for id={}: {}", referral.referral_id, exc
            )
            return False

        logger.info("Referral notification written: id={}", referral.referral_id)
        return True


def _email_body(referral: Referral) -> str:
    return (
        f"Referral ID: {referral.referral_id}\n"
        f"Patient ID: {referral.patient_id}\n"
        f"Urgency: {referral.urgency_level}\n"
        f"Reason: {referral.referral_reason}\n"
        f"Clinical Summary:\n{referral.clinical_summary}\n"
    )


def _ehr_body(referral: Referral) -> str:
    return (
        "Referral recorded in EHR\n"
        f"Referral ID: {referral.referral_id}\n"
        f"Status: {referral.status}\n"
    )


class ReferralManager(RecordService[Referral]):
    """The single authoritative referral collection.

    Obtain it through a ``ReferralManagerHandle`` so every consumer shares
    one instance. Unlike the other managers, deleting an unknown referral
    raises ``RecordNotFoundError``.
    """

    kind = "Referral"
    prefix = "R"

    def __init__(
        self,
        repository: RecordRepositoryProtocol[Referral],
        notifier: ReferralNotifier | None = None,
        clock: Clock = dt.date.today,
    ) -> None:
        super().__init__(repository, clock=clock)
        self._notifier = notifier or ReferralNotifier()

    def create(
        self,
        patient_id: str,
        referring_clinician_id: str,
        referred_to_clinician_id: str,
        referring_facility_id: str,
        referred_to_facility_id: str,
        *,
        urgency_level: str = "",
        referral_reason: str = "",
        clinical_summary: str = "",
        appointment_id: str = "",
    ) -> Referral:
        """Record a ``Sent`` referral, persist it, then write its notification files.

        Notification failures do not undo the referral.
        """
        today = self._today()
        referral = self._insert(
            lambda referral_id: Referral(
                referral_id=referral_id,
                patient_id=patient_id,
                referring_clinician_id=referring_clinician_id,
                referred_to_clinician_id=referred_to_clinician_id,
                referring_facility_id=referring_facility_id,
                referred_to_facility_id=referred_to_facility_id,
                referral_date=today,
                urgency_level=urgency_level,
                referral_reason=referral_reason,
                clinical_summary=clinical_summary,
                requested_investigations="",
                status=ReferralStatus.SENT.value,
                appointment_id=appointment_id,
                notes="",
                created_date=today,
                last_updated=today,
            )
        )
        self._notifier.notify(referral)
        return referral

    def delete(self, record_id: str) -> bool:
        """Remove a referral.

        Raises:
            RecordNotFoundError: If no referral has ``record_id``.
        """
        if not super().delete(record_id):
            raise RecordNotFoundError(self.kind, record_id)
        return True


class ReferralManagerHandle:
    """Hands out the one ``ReferralManager`` of a process.

    Create one handle at startup and pass it to every consumer. The first
    ``get`` builds the manager; later calls return that same manager and
    ignore their arguments.
    """

    def __init__(self) -> None:
        self._manager: ReferralManager | None = None
        self._lock = threading.Lock()

    def get(
        self,
        repository: RecordRepositoryProtocol[Referral],
        notifier: ReferralNotifier | None = None,
        clock: Clock = dt.date.today,
    ) -> ReferralManager:
        with self._lock:
            if self._manager is None:
                self._manager = ReferralManager(repository, notifier=notifier, clock=clock)
            elif repository is not self._manager.repository:
                logger.warning("Referral manager already initialised; ignoring new repository")
            return self._manager

    @property
    def manager(self) -> ReferralManager:
        """The already-built manager.

        Raises:
            RuntimeError: If ``get`` has not been called yet.
        """
        if self._manager is None:
            raise RuntimeError("Referral manager has not been initialised")
        return self._manager
