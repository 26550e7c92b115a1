from pathlib import Path

import pytest

from healthrecords.config import AppConfig, EntityKind, StorageConfig


class TestStorageConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)

        config = StorageConfig()

        assert config.data_dir == Path("data")
        assert config.notification_dir == Path(".")
        assert config.create_missing_files is True
        assert config.path_for(EntityKind.PATIENT) == Path("data") / "patients.csv"
        assert config.path_for(EntityKind.STAFF) == Path("data") / "staff.csv"

    def test_reads_prefixed_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HEALTHRECORDS_DATA_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("HEALTHRECORDS_REFERRALS_FILE", "refs.csv")
        monkeypatch.setenv("HEALTHRECORDS_CREATE_MISSING_FILES", "false")

        config = AppConfig()

        assert config.storage.path_for(EntityKind.REFERRAL) == tmp_path / "store" / "refs.csv"
        assert config.storage.create_missing_files is False

    def test_every_kind_has_a_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        config = StorageConfig()

        paths = {config.path_for(kind) for kind in EntityKind}

        assert len(paths) == len(EntityKind)
