import datetime as dt
from collections.abc import Callable
from pathlib import Path

import pytest

from healthrecords.domain.models import Appointment, Patient, Referral
from healthrecords.records.managers import AppointmentManager, PatientManager
from healthrecords.records.referrals import ReferralManager, ReferralNotifier
from healthrecords.storage.fake import FakeRecordRepository

TODAY = dt.date(2026, 3, 15)


@pytest.fixture
def clock() -> Callable[[], dt.date]:
    return lambda: TODAY


@pytest.fixture
def patient_repo() -> FakeRecordRepository[Patient]:
    return FakeRecordRepository()


@pytest.fixture
def patients(
    patient_repo: FakeRecordRepository[Patient], clock: Callable[[], dt.date]
) -> PatientManager:
    return PatientManager(patient_repo, clock=clock)


@pytest.fixture
def appointment_repo() -> FakeRecordRepository[Appointment]:
    return FakeRecordRepository()


@pytest.fixture
def appointments(
    appointment_repo: FakeRecordRepository[Appointment], clock: Callable[[], dt.date]
) -> AppointmentManager:
    return AppointmentManager(appointment_repo, clock=clock)


@pytest.fixture
def referral_repo() -> FakeRecordRepository[Referral]:
    return FakeRecordRepository()


@pytest.fixture
def notifier(tmp_path: Path) -> ReferralNotifier:
    return ReferralNotifier(tmp_path)


@pytest.fixture
def referrals(
    referral_repo: FakeRecordRepository[Referral],
    notifier: ReferralNotifier,
    clock: Callable[[], dt.date],
) -> ReferralManager:
    return ReferralManager(referral_repo, notifier=notifier, clock=clock)
