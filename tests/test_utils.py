import io

import pandas as pd
import pytest

from models import Complaint, ComplaintStatus, Expenditure, MaintenanceRecord
from utils import (
    complaints_to_csv_bytes,
    expenditure_items,
    expenditure_total,
    expenditures_to_csv_bytes,
    overdue_flats,
    payment_summary,
    payments_to_csv_bytes,
    rupees_to_paise,
    sanitize_error,
    validate_maintenance_amount,
    validate_settings,
    visitor_request_message,
)

JUNE_5_2025_NS = 1749133800 * 1_000_000_000


def _records():
    return [
        MaintenanceRecord(101, "June", 2025, True, "UPI123", JUNE_5_2025_NS),
        MaintenanceRecord(102, "June", 2025, False),
        MaintenanceRecord(523, "June", 2025, True, None, None),
    ]


class TestSettingsValidation:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("", "Maintenance amount is required"),
            ("   ", "Maintenance amount is required"),
            ("abc", "Must be a valid number"),
            ("0", "Must be greater than 0"),
            ("-5", "Must be greater than 0"),
            ("1500", None),
        ],
    )
    def test_maintenance_amount(self, value, expected):
        assert validate_maintenance_amount(value) == expected

    def test_all_fields(self):
        errors = validate_settings("", " ", "")
        assert errors == {
            "maintenance_amount": "Maintenance amount is required",
            "upi_id": "UPI ID is required",
            "guard_mobile_number": "Guard mobile number is required",
        }

    def test_valid_settings(self):
        assert validate_settings("1500", "society@upi", "+91 98765 43210") == {}


class TestExports:
    def test_payments_csv(self):
        df = pd.read_csv(io.BytesIO(payments_to_csv_bytes(_records())), dtype=str, keep_default_na=False)
        assert list(df.columns) == ["Flat Number", "Month", "Year", "Status", "UPI Reference", "Payment Date"]
        assert df.iloc[0].tolist() == ["101", "June", "2025", "Paid", "UPI123", "Jun 5, 2025"]
        assert df.iloc[1].tolist() == ["102", "June", "2025", "Unpaid", "N/A", "N/A"]

    def test_empty_export_has_header_only(self):
        assert payments_to_csv_bytes([]) == b"Flat Number,Month,Year,Status,UPI Reference,Payment Date\n"

    def test_complaints_csv_quotes_special_characters(self):
        complaint = Complaint(7, 204, "Plumbing", 'Leak, "bad"\nin kitchen', ComplaintStatus.OPEN)
        text = complaints_to_csv_bytes([complaint]).decode("utf-8")
        assert text.startswith("ID,Flat Number,Category,Description,Priority,Status,Resolution Note\n")
        assert '"Leak, ""bad""\nin kitchen"' in text
        assert text.rstrip("\n").endswith(",,Open,")


class TestPayments:
    def test_summary(self):
        assert payment_summary(_records()) == {"paid": 2, "unpaid": 1}

    def test_overdue_flats(self):
        flats = overdue_flats(_records())
        assert len(flats) == 113
        assert "101" not in flats
        assert "523" not in flats
        assert flats[:2] == ["102", "103"]

    def test_no_records_means_every_flat_is_overdue(self):
        assert len(overdue_flats([])) == 115


def test_visitor_request_message():
    message = visitor_request_message("Ravi", "Delivery", "305", 42)
    assert message.splitlines() == [
        "Visitor Entry Request",
        "",
        "Visitor: Ravi",
        "Purpose: Delivery",
        "Flat: 305",
        "Request ID: 42",
        "",
        "Please reply with ACCEPT or DECLINE",
    ]


class TestSanitizeError:
    def test_empty(self):
        assert sanitize_error(None) == "An unknown error occurred. Please try again."
        assert sanitize_error("") == "An unknown error occurred. Please try again."

    def test_exception_message(self):
        assert sanitize_error(RuntimeError("Flat not found")) == "Flat not found"

    def test_truncates_long_messages(self):
        result = sanitize_error("x " * 400)
        assert len(result) <= 503
        assert result.endswith("...")

    def test_redacts_credentials(self):
        result = sanitize_error("Rejected token=abc123 for user")
        assert "abc123" not in result
        assert "token: [REDACTED]" in result

        result = sanitize_error("Call failed: " + "a" * 40)
        assert result == "Call failed: [REDACTED]"

    def test_blank_after_cleanup(self):
        assert sanitize_error("   ") == "An error occurred while loading the application. Please try again."


class TestExpenditures:
    @pytest.mark.parametrize(
        "amount, paise",
        [("250", 25000), ("0.5", 50), ("19.99", 1999), ("12.345", 1234), ("12.346", 1235)],
    )
    def test_rupees_to_paise(self, amount, paise):
        assert rupees_to_paise(amount) == paise

    def test_items_skip_incomplete_rows(self):
        rows = [("Lift repair", "1200.50"), ("", "10"), ("Cleaning", " "), (" Water tanker ", "800")]
        items = expenditure_items(rows)
        assert items == [("Lift repair", 120050), ("Water tanker", 80000)]
        assert expenditure_total(items) == 200050

    def test_items_require_at_least_one_row(self):
        with pytest.raises(ValueError, match="at least one expenditure item"):
            expenditure_items([("", ""), ("Cleaning", "")])

    def test_bad_amount_raises(self):
        with pytest.raises(ValueError):
            expenditure_items([("Cleaning", "abc")])

    def test_csv_has_total_row(self):
        items = (("Lift repair", 120050), ("Paint, lobby", 80000))
        expenditure = Expenditure("June", 2025, items, expenditure_total(items), None)
        assert expenditures_to_csv_bytes(expenditure) == (
            b"Description,Amount\n"
            b"Lift repair,1200.50\n"
            b'"Paint, lobby",800.00\n'
            b"TOTAL,2000.50\n"
        )

    def test_csv_without_items(self):
        expenditure = Expenditure("June", 2025, (), 0)
        assert expenditures_to_csv_bytes(expenditure) == b"Description,Amount\nTOTAL,0.00\n"
