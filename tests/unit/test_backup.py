"""
Unit tests for backup export and import.

Tests cover:
- Exported document shape (camelCase keys, numbers)
- Import validation and rejection messages
- Legacy field names
- Rejected imports leave state and storage untouched
"""

import json
from decimal import Decimal

import pytest

from portfolio_local.backup import BackupExporter, BackupImporter, dump_state, load_state
from portfolio_local.core.exceptions import MalformedImportError
from portfolio_local.domain.models import AssetType, PriceEntry, PriceKey

from tests.conftest import make_snapshot


BROWSER_BACKUP = {
    "settings": {"baseCurrency": "EUR", "people": ["Dean", "Sam"]},
    "assets": [
        {
            "id": "1718000000000",
            "type": "stock",
            "symbol": "AAPL",
            "name": "Apple",
            "holdings": {"p1": {"qty": 10, "avgCost": 0}, "p2": {"qty": 2.5, "avgCost": 0}},
        },
        {
            "id": "1718000000001",
            "type": "metal",
            "symbol": "gold",
            "name": "Gold",
            "unit": "toz",
            "holdings": {"p1": {"qty": 1, "avgCost": 0}, "p2": {"qty": 0, "avgCost": 0}},
        },
    ],
    "priceCache": {
        "lastUpdated": 1718450000000,
        "prices": {"stock:AAPL": 185.5, "metal:gold": 2300},
        "previousPrices": {"stock:AAPL": 180},
        "changePercents": {"stock:AAPL": 0.75},
    },
    "snapshots": [
        {
            "date": "2024-06-01T10:00:00.000Z",
            "timestamp": 1717236000000,
            "totalValue": 4000,
            "deanTotal": 3000,
            "samTotal": 1000,
            "byType": {"stock": 1700, "metal": 2300},
            "assetCount": 2,
        }
    ],
}


# =============================================================================
# EXPORT
# =============================================================================


class TestExport:
    """Tests for BackupExporter and dump_state."""

    def test_document_uses_camel_case_and_numbers(self, sample_state, fixed_now):
        """
        GIVEN a populated state
        WHEN it is dumped
        THEN keys are camelCase and money is written as JSON numbers
        """
        sample_state.snapshots.append(make_snapshot(fixed_now, "100", {AssetType.STOCK: "100"}))

        doc = json.loads(dump_state(sample_state))

        assert set(doc) == {"settings", "assets", "priceCache", "snapshots"}
        assert doc["settings"] == {"baseCurrency": "USD", "people": ["Person 1", "Person 2"]}
        assert doc["priceCache"]["prices"]["stock:AAA"] == 5
        assert doc["priceCache"]["changePercents"]["stock:AAA"] == 1.5
        assert doc["assets"][0]["holdings"]["p1"]["qty"] == 10
        assert doc["snapshots"][0]["totalValue"] == 100
        assert doc["snapshots"][0]["p1Total"] == 100
        assert "unit" not in doc["assets"][0]
        assert doc["assets"][2]["unit"] == "toz"

    def test_export_to_directory_uses_default_name(self, sample_state, tmp_path):
        path = BackupExporter().export_json(sample_state, tmp_path)

        assert path == tmp_path / "portfolio_backup.json"
        assert json.loads(path.read_text(encoding="utf-8"))["assets"][0]["id"] == "a-stock"

    def test_export_then_import_restores_state(self, sample_state, tmp_path):
        path = BackupExporter().export_json(sample_state, tmp_path / "backup.json")

        restored = BackupImporter().import_json(path)

        assert restored.assets == sample_state.assets
        assert restored.price_cache.entries == sample_state.price_cache.entries


# =============================================================================
# IMPORT
# =============================================================================


class TestImport:
    """Tests for BackupImporter."""

    def test_reads_browser_backup(self):
        """
        GIVEN a backup downloaded from the browser tracker
        WHEN it is parsed
        THEN settings, assets, prices and legacy snapshot fields come through
        """
        state = BackupImporter().parse(json.dumps(BROWSER_BACKUP))

        assert state.settings.base_currency == "EUR"
        assert state.settings.people == ("Dean", "Sam")
        assert [a.symbol for a in state.assets] == ["AAPL", "gold"]
        assert state.assets[0].p2.qty == Decimal("2.5")
        assert state.assets[1].unit == "toz"

        entry = state.price_cache.get(PriceKey("stock", "AAPL"))
        assert entry == PriceEntry(price=Decimal("185.5"), previous_price=Decimal("180"), change_percent=Decimal("0.75"))
        assert state.price_cache.last_updated is not None

        snap = state.snapshots[0]
        assert snap.p1_total == Decimal("3000")
        assert snap.p2_total == Decimal("1000")
        assert snap.type_value(AssetType.METAL) == Decimal("2300")
        assert snap.type_value(AssetType.CRYPTO) == Decimal("0")

    def test_missing_assets_rejected(self):
        payload = {k: v for k, v in BROWSER_BACKUP.items() if k != "assets"}

        with pytest.raises(MalformedImportError) as exc_info:
            BackupImporter().parse(json.dumps(payload))

        assert exc_info.value.message == "Invalid backup file: missing assets array"

    def test_assets_not_a_list_rejected(self):
        payload = dict(BROWSER_BACKUP, assets={"id": "1"})

        with pytest.raises(MalformedImportError):
            BackupImporter().parse(json.dumps(payload))

    def test_missing_settings_rejected(self):
        payload = {k: v for k, v in BROWSER_BACKUP.items() if k != "settings"}

        with pytest.raises(MalformedImportError) as exc_info:
            BackupImporter().parse(json.dumps(payload))

        assert exc_info.value.message == "Invalid backup file: missing settings"

    def test_invalid_json_rejected(self):
        with pytest.raises(MalformedImportError) as exc_info:
            BackupImporter().parse("{not json")

        assert exc_info.value.message == "Failed to import: invalid JSON file"

    def test_bad_price_key_rejected(self):
        payload = json.loads(json.dumps(BROWSER_BACKUP))
        payload["priceCache"]["prices"] = {"AAPL": 1}

        with pytest.raises(MalformedImportError) as exc_info:
            BackupImporter().parse(json.dumps(payload))

        assert exc_info.value.message.startswith("Invalid backup file:")

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedImportError) as exc_info:
            BackupImporter().import_json(tmp_path / "nope.json")

        assert "File not found" in exc_info.value.message

    def test_unknown_asset_type_preserved(self):
        payload = json.loads(json.dumps(BROWSER_BACKUP))
        payload["assets"][0]["type"] = "bond"

        state = BackupImporter().parse(json.dumps(payload))

        assert state.assets[0].known_type is None
        assert state.assets[0].type_value == "bond"


class TestLoadState:
    """Tests for load_state on stored documents."""

    def test_round_trip_keeps_unknown_type(self, sample_state):
        sample_state.assets[0].asset_type = "bond"

        restored = load_state(dump_state(sample_state))

        assert restored.assets[0].type_value == "bond"

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            load_state("not json at all")
