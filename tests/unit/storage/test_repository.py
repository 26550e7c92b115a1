from pathlib import Path

import pytest

from healthrecords.domain.exceptions import MalformedRecordError, StorageError
from healthrecords.domain.models import Appointment, Patient, Referral
from healthrecords.storage.repository import FlatFileRepository


@pytest.fixture
def patient_file(tmp_path: Path) -> Path:
    path = tmp_path / "patients.csv"
    path.write_text(Patient.header() + "\n", encoding="utf-8")
    return path


class TestLoadAll:
    def test_loads_records_in_file_order(self, patient_file: Path) -> None:
        with patient_file.open("a", encoding="utf-8") as handle:
            handle.write("P002,Bo,Chen" + "," * 11 + "\n")
            handle.write("P001,Ann,Lee" + "," * 11 + "\n")
        repository = FlatFileRepository(patient_file, Patient)

        records = repository.load_all()

        assert [r.patient_id for r in records] == ["P002", "P001"]
        assert records[1].full_name == "Ann Lee"

    def test_short_row_reports_file_line(self, patient_file: Path) -> None:
        with patient_file.open("a", encoding="utf-8") as handle:
            handle.write("P001,Ann,Lee" + "," * 11 + "\n")
            handle.write("P002,Bo\n")
        repository = FlatFileRepository(patient_file, Patient)

        with pytest.raises(MalformedRecordError) as excinfo:
            repository.load_all()

        assert excinfo.value.line_number == 3
        assert excinfo.value.path == patient_file

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        repository = FlatFileRepository(tmp_path / "nope.csv", Patient)

        with pytest.raises(StorageError):
            repository.load_all()


class TestSaveAll:
    def test_full_overwrite_with_header(self, patient_file: Path) -> None:
        repository = FlatFileRepository(patient_file, Patient)
        repository.save_all([Patient(patient_id="P001"), Patient(patient_id="P002")])

        repository.save_all([Patient(patient_id="P003", first_name="Cy")])

        lines = patient_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == Patient.header()
        assert len(lines) == 2
        assert lines[1].startswith("P003,Cy,")

    def test_round_trip_is_lossy_only_for_unsafe_characters(self, tmp_path: Path) -> None:
        repository = FlatFileRepository(tmp_path / "referrals.csv", Referral)
        originals = [
            Referral(
                referral_id="R001",
                patient_id="P001",
                referral_reason="Suspected fracture",
                clinical_summary="Fell, pain in\nleft wrist\r\nswelling",
            ),
            Referral(referral_id="R002", patient_id="P002", notes=None),
        ]

        repository.save_all(originals)
        loaded = repository.load_all()

        assert len(loaded) == 2
        assert loaded[0].clinical_summary == "Fell  pain in left wrist  swelling"
        assert loaded[0].model_copy(update={"clinical_summary": ""}) == originals[0].model_copy(
            update={"clinical_summary": ""}
        )
        assert loaded[1] == originals[1]

    def test_unwritable_target_is_fatal(self, tmp_path: Path) -> None:
        repository = FlatFileRepository(tmp_path / "missing-dir" / "a.csv", Appointment)

        with pytest.raises(StorageError):
            repository.save_all([Appointment(appointment_id="A001")])


class TestEnsureExists:
    def test_creates_header_only_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "appointments.csv"
        repository = FlatFileRepository(path, Appointment)

        created = repository.ensure_exists()

        assert created is True
        assert path.read_text(encoding="utf-8") == Appointment.header() + "\n"
        assert repository.load_all() == []

    def test_leaves_existing_file_alone(self, patient_file: Path) -> None:
        with patient_file.open("a", encoding="utf-8") as handle:
            handle.write("P001" + "," * 13 + "\n")
        repository = FlatFileRepository(patient_file, Patient)

        assert repository.ensure_exists() is False
        assert len(repository.load_all()) == 1
