"""
utils.py
Settings validation, exports, payment summaries, visitor messages, error text.
"""

from __future__ import annotations

import math
import re

import pandas as pd

from flats import list_valid_flats
from models import Complaint, Expenditure, MaintenanceRecord
from periods import format_date

EXPENDITURE_COLUMNS = ["Description", "Amount"]
PAYMENT_COLUMNS = ["Flat Number", "Month", "Year", "Status", "UPI Reference", "Payment Date"]
COMPLAINT_COLUMNS = ["ID", "Flat Number", "Category", "Description", "Priority", "Status", "Resolution Note"]

MAX_ERROR_LENGTH = 500


# ---------- Settings validation ----------

def validate_maintenance_amount(value: str) -> str | None:
    """
    Returns an error message, or None when the amount is a whole number > 0.
    """
    if not value or not value.strip():
        return "Maintenance amount is required"
    try:
        amount = int(value.strip())
    except ValueError:
        return "Must be a valid number"
    if amount <= 0:
        return "Must be greater than 0"
    return None


def validate_upi_id(value: str) -> str | None:
    if not value or not value.strip():
        return "UPI ID is required"
    return None


def validate_guard_mobile_number(value: str) -> str | None:
    if not value or not value.strip():
        return "Guard mobile number is required"
    return None


def validate_settings(maintenance_amount: str, upi_id: str, guard_mobile_number: str) -> dict[str, str]:
    """
    Validate the secretary settings form. Returns {field: message}; empty means valid.
    """
    errors: dict[str, str] = {}
    checks = {
        "maintenance_amount": validate_maintenance_amount(maintenance_amount),
        "upi_id": validate_upi_id(upi_id),
        "guard_mobile_number": validate_guard_mobile_number(guard_mobile_number),
    }
    for field, message in checks.items():
        if message:
            errors[field] = message
    return errors


# ---------- Exports ----------

def _to_csv_bytes(rows: list[dict], columns: list[str]) -> bytes:
    df = pd.DataFrame(rows, columns=columns)
    return df.to_csv(index=False, na_rep="", lineterminator="\n").encode("utf-8")


def payments_to_csv_bytes(records: list[MaintenanceRecord]) -> bytes:
    rows = [
        {
            "Flat Number": str(r.flat_number),
            "Month": r.month,
            "Year": str(r.year),
            "Status": "Paid" if r.is_paid else "Unpaid",
            "UPI Reference": r.upi_ref or "N/A",
            "Payment Date": format_date(r.payment_timestamp) if r.payment_timestamp else "N/A",
        }
        for r in records
    ]
    return _to_csv_bytes(rows, PAYMENT_COLUMNS)


def complaints_to_csv_bytes(complaints: list[Complaint]) -> bytes:
    rows = [
        {
            "ID": str(c.id),
            "Flat Number": str(c.flat_number),
            "Category": c.category,
            "Description": c.description,
            "Priority": c.priority,
            "Status": c.status.value,
            "Resolution Note": c.resolution_note,
        }
        for c in complaints
    ]
    return _to_csv_bytes(rows, COMPLAINT_COLUMNS)


def expenditures_to_csv_bytes(expenditure: Expenditure) -> bytes:
    """
    One row per item in rupees, then a TOTAL row.
    """
    rows = [{"Description": desc, "Amount": f"{paise / 100:.2f}"} for desc, paise in expenditure.items]
    rows.append({"Description": "TOTAL", "Amount": f"{expenditure.total_amount / 100:.2f}"})
    return _to_csv_bytes(rows, EXPENDITURE_COLUMNS)


# ---------- Expenditures ----------

def rupees_to_paise(amount: str) -> int:
    # half-up on the float product, so "12.345" gives 1234
    return math.floor(float(amount) * 100 + 0.5)


def expenditure_items(rows: list[tuple[str, str]]) -> list[tuple[str, int]]:
    """
    Turn (description, rupee amount) form rows into (description, paise) items.
    Rows missing either field are skipped; raises ValueError when none remain
    or an amount is not a number.
    """
    items = [(desc.strip(), rupees_to_paise(amount)) for desc, amount in rows if desc.strip() and amount.strip()]
    if not items:
        raise ValueError("Please add at least one expenditure item")
    return items


def expenditure_total(items: list[tuple[str, int]]) -> int:
    return sum(paise for _, paise in items)


# ---------- Payments ----------

def payment_summary(records: list[MaintenanceRecord]) -> dict[str, int]:
    paid = sum(1 for r in records if r.is_paid)
    return {"paid": paid, "unpaid": len(records) - paid}


def overdue_flats(records: list[MaintenanceRecord]) -> list[str]:
    """
    Flats without a paid record among `records` (one billing period), in flat order.
    """
    paid = {str(r.flat_number) for r in records if r.is_paid}
    return [flat for flat in list_valid_flats() if flat not in paid]


# ---------- Visitors ----------

def visitor_request_message(visitor_name: str, purpose: str, flat_number: str, request_id: int) -> str:
    return (
        "Visitor Entry Request\n\n"
        f"Visitor: {visitor_name}\n"
        f"Purpose: {purpose}\n"
        f"Flat: {flat_number}\n"
        f"Request ID: {request_id}\n\n"
        "Please reply with ACCEPT or DECLINE"
    )


# ---------- Errors ----------

_REDACTIONS = [
    (re.compile(r"[a-zA-Z0-9]{32,}"), "[REDACTED]"),
    (re.compile(r"token[:\s]*[^\s]+", re.IGNORECASE), "token: [REDACTED]"),
    (re.compile(r"key[:\s]*[^\s]+", re.IGNORECASE), "key: [REDACTED]"),
    (re.compile(r"secret[:\s]*[^\s]+", re.IGNORECASE), "secret: [REDACTED]"),
]


def sanitize_error(error) -> str:
    """
    Turn an exception (or message) into text safe to show a resident:
    long messages are cut and anything resembling a credential is redacted.
    """
    if not error:
        return "An unknown error occurred. Please try again."

    if isinstance(error, str):
        message = error
    elif isinstance(error, BaseException):
        message = str(error)
    else:
        message = str(getattr(error, "message", error))

    if len(message) > MAX_ERROR_LENGTH:
        message = message[:MAX_ERROR_LENGTH] + "..."

    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)

    if not message.strip():
        return "An error occurred while loading the application. Please try again."
    return message.strip()
