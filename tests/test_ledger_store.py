"""Tests for booking records and ledger storage."""

import json
from unittest.mock import patch

import pytest

from src.exceptions import LedgerIOError
from src.ledger.ledger_store import LedgerStore
from src.models.booking import BookingRecord, BookingStatus


class TestBookingRecord:
    """Tests for BookingRecord serialization."""

    def test_from_dict_with_optional_fields(self):
        record = BookingRecord.from_dict({
            "parking_date": "10-03-2025",
            "status": "booked",
            "created_at": "01-03-2025",
            "last_attempt": "09-03-2025",
            "attempt_message": "Attempted on 09-03-2025 04:30. Result: booked",
        })

        assert record.status == BookingStatus.BOOKED
        assert record.last_attempt == "09-03-2025"

    def test_legacy_no_spaces_status(self):
        record = BookingRecord.from_dict({
            "parking_date": "10-03-2025", "status": "no_spaces", "created_at": "01-03-2025",
        })

        assert record.status == BookingStatus.NO_SPACE
        assert record.to_dict()["status"] == "no_space"

    def test_to_dict_omits_absent_fields(self):
        record = BookingRecord("10-03-2025", BookingStatus.PENDING, "01-03-2025")

        assert record.to_dict() == {
            "parking_date": "10-03-2025",
            "status": "pending",
            "created_at": "01-03-2025",
        }

    @pytest.mark.parametrize("entry", [
        {"status": "pending", "created_at": "01-03-2025"},
        {"parking_date": "10-03-2025", "created_at": "01-03-2025"},
        {"parking_date": "10-03-2025", "status": "pending"},
        {"parking_date": "10-03-2025", "status": "cancelled", "created_at": "01-03-2025"},
        "10-03-2025",
    ])
    def test_from_dict_rejects_invalid(self, entry):
        with pytest.raises(ValueError):
            BookingRecord.from_dict(entry)

    def test_record_attempt_keeps_message_when_none_given(self):
        record = BookingRecord("10-03-2025", BookingStatus.PENDING, "01-03-2025", attempt_message="Re-added by user")

        record.record_attempt(BookingStatus.FAILED, "09-03-2025")

        assert record.status == BookingStatus.FAILED
        assert record.attempt_message == "Re-added by user"
        assert record.created_at == "01-03-2025"


class TestLedgerStore:
    """Tests for LedgerStore load/save."""

    def test_missing_file_is_empty(self, store):
        assert store.load() == []

    def test_load_preserves_order(self, store, write_ledger):
        write_ledger([
            {"parking_date": "12-03-2025", "status": "pending", "created_at": "01-03-2025"},
            {"parking_date": "10-03-2025", "status": "booked", "created_at": "01-03-2025"},
        ])

        assert [r.parking_date for r in store.load()] == ["12-03-2025", "10-03-2025"]

    def test_load_drops_invalid_entries(self, store, write_ledger):
        write_ledger([
            {"parking_date": "10-03-2025", "status": "pending", "created_at": "01-03-2025"},
            {"parking_date": "11-03-2025"},
            None,
            {"parking_date": "12-03-2025", "status": "failed", "created_at": "01-03-2025"},
        ])

        records = store.load()

        assert [r.parking_date for r in records] == ["10-03-2025", "12-03-2025"]

    def test_corrupt_json_loads_as_empty(self, store, bookings_file):
        bookings_file.write_text("{not json", encoding="utf-8")

        assert store.load() == []

    def test_undecodable_bytes_load_as_empty(self, store, bookings_file):
        bookings_file.write_bytes(
            b'[{"parking_date": "10-03-2025", "status": "pending", "created_at": "\xff\xfe"}]'
        )

        assert store.load() == []

    def test_undecodable_bytes_raise_ledger_error(self, store, bookings_file):
        bookings_file.write_bytes(b"\xff")

        with pytest.raises(LedgerIOError):
            store.read_entries()

    def test_non_array_loads_as_empty(self, store, write_ledger):
        write_ledger({"parking_date": "10-03-2025"})

        assert store.load() == []

    def test_read_entries_raises_ledger_error(self, store, bookings_file):
        bookings_file.write_text("[", encoding="utf-8")

        with pytest.raises(LedgerIOError):
            store.read_entries()

    def test_save_overwrites_file(self, store, write_ledger, read_ledger):
        write_ledger([
            {"parking_date": "01-01-2025", "status": "booked", "created_at": "01-12-2024"},
        ])

        assert store.save([BookingRecord("10-03-2025", BookingStatus.PENDING, "01-03-2025")])

        assert read_ledger() == [
            {"parking_date": "10-03-2025", "status": "pending", "created_at": "01-03-2025"},
        ]

    def test_save_writes_indented_json(self, store, bookings_file):
        store.save([BookingRecord("10-03-2025", BookingStatus.PENDING, "01-03-2025")])

        text = bookings_file.read_text(encoding="utf-8")
        assert text.startswith("[\n  {\n")
        assert json.loads(text)[0]["parking_date"] == "10-03-2025"

    def test_save_failure_returns_false(self, tmp_path):
        store = LedgerStore(tmp_path / "ledger")

        with patch("builtins.open", side_effect=PermissionError("read-only")):
            assert store.save([]) is False

    def test_saved_records_load_back(self, store):
        records = [
            BookingRecord("10-03-2025", BookingStatus.BOOKED, "01-03-2025", "09-03-2025", "done"),
            BookingRecord("11-03-2025", BookingStatus.PENDING, "01-03-2025"),
        ]

        store.save(records)

        assert store.load() == records
