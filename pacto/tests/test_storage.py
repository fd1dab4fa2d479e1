"""
Tests for the JSON file storage.
"""

import json
import pytest
from datetime import datetime, timezone

from pacto.models import Ledger, FavorRecord, FavorStatus, Participant, RedemptionStatus
from pacto.service import LedgerService, StorageUnavailableError
from pacto.storage import JsonFileStorage


LEGACY_DOCUMENT = {
    "users": {"marcos": {"points": 0}, "sofi": {"points": 0}},
    "gestos": [
        {
            "id": 1,
            "user": "marcos",
            "gestoId": "foto",
            "gestoName": "Foto linda sin que la pida",
            "points": 1,
            "timestamp": "2026-10-18T14:03:11.512Z",
            "status": "approved",
        }
    ],
    "canjes": [
        {
            "id": 2,
            "user": "marcos",
            "canjeId": "alarma",
            "canjeName": "Pospuesto extra alarma",
            "cost": 1,
            "timestamp": "2026-10-18T15:00:00.000Z",
            "status": "pending",
        }
    ],
    "counter": 2,
}


class TestJsonFileStorage:
    def test_missing_file_is_bootstrapped(self, tmp_path):
        path = tmp_path / "pacto-data.json"
        storage = JsonFileStorage(path)

        ledger = storage.load()

        assert ledger.counter == 0
        assert ledger.favors == []
        assert ledger.redemptions == []
        assert path.exists()
        assert json.loads(path.read_text()) == {"counter": 0, "gestos": [], "canjes": []}

    def test_save_and_load(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data.json")
        ledger = Ledger()
        ledger.favors.append(FavorRecord(
            id=ledger.next_id(),
            user=Participant.SOFI,
            favor_type_id="pelo",
            favor_name="Lavar/secar pelo",
            points=2,
            timestamp=datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc),
        ))

        storage.save(ledger)
        loaded = storage.load()

        assert loaded.model_dump() == ledger.model_dump()
        saved = json.loads((tmp_path / "data.json").read_text())
        assert saved["gestos"][0]["gestoId"] == "pelo"
        assert saved["gestos"][0]["status"] == "pending"

    def test_save_leaves_no_temp_files(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "data.json")
        storage.save(Ledger())
        storage.save(Ledger(counter=3))

        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_reads_legacy_document(self, tmp_path):
        path = tmp_path / "pacto-data.json"
        path.write_text(json.dumps(LEGACY_DOCUMENT))

        ledger = JsonFileStorage(path).load()

        assert ledger.counter == 2
        assert ledger.favors[0].status == FavorStatus.APPROVED
        assert ledger.favors[0].favor_name == "Foto linda sin que la pida"
        assert ledger.redemptions[0].status == RedemptionStatus.PENDING

    def test_corrupt_file_raises_and_is_kept(self, tmp_path):
        path = tmp_path / "pacto-data.json"
        path.write_text("{not json")

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(path).load()
        assert path.read_text() == "{not json"

    def test_non_utf8_file_raises_and_is_kept(self, tmp_path):
        path = tmp_path / "pacto-data.json"
        content = b'{"counter": 0, "gestos": [], "canjes": [], "x": "\xff\xfe"}'
        path.write_bytes(content)

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(path).load()
        assert path.read_bytes() == content

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(blocker / "data.json").save(Ledger())

    def test_service_on_file_storage(self, tmp_path):
        path = tmp_path / "pacto-data.json"
        path.write_text(json.dumps(LEGACY_DOCUMENT))
        clock = lambda: datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)
        service = LedgerService(JsonFileStorage(path), clock=clock)

        service.review_redemption("sofi", 2, "approve")
        service.submit_favor("sofi", "compu")

        reloaded = LedgerService(JsonFileStorage(path), clock=clock)
        status = reloaded.get_status("marcos")
        assert status.my_points == 0
        assert status.other_points == 0
        assert reloaded.storage.load().counter == 3
