"""
models.py
Lightweight domain helpers (society constants, statuses, dataclasses).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

# Building shape: 5 floors x 23 units, flat id = floor * 100 + unit
FLOORS = range(1, 6)
UNITS_PER_FLOOR = 23
MIN_FLAT = 101
MAX_FLAT = 523

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Maintenance is overdue from this day of the month onward
OVERDUE_FROM_DAY = 6

# Years shown either side of the current one in pickers
YEAR_SPAN = 2

SOCIETY_NAME = "Vision Galaxy Society"
CURRENCY = "INR"


class ComplaintStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"

    @classmethod
    def parse(cls, value: str) -> "ComplaintStatus":
        for status in cls:
            if status.value.lower() == value.strip().lower():
                return status
        raise ValueError(f"Unknown complaint status: {value!r}")


class VisitorRequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"

    @classmethod
    def parse(cls, value: str) -> "VisitorRequestStatus":
        for status in cls:
            if status.value.lower() == value.strip().lower():
                return status
        raise ValueError(f"Unknown visitor request status: {value!r}")


@dataclass(frozen=True)
class BillingPeriod:
    month: str
    year: int

    def __post_init__(self):
        if self.month not in MONTHS:
            raise ValueError(f"Unknown month: {self.month!r}")

    @property
    def label(self) -> str:
        return f"{self.month} {self.year}"


@dataclass(frozen=True)
class MaintenanceRecord:
    flat_number: int
    month: str
    year: int
    is_paid: bool
    upi_ref: str | None = None
    payment_timestamp: int | None = None  # nanoseconds since epoch


@dataclass(frozen=True)
class Complaint:
    id: int
    flat_number: int
    category: str
    description: str
    status: ComplaintStatus
    priority: str | None = None
    resolution_note: str | None = None


@dataclass(frozen=True)
class VisitorRequest:
    id: int
    visitor_name: str
    purpose: str
    flat_number: int
    mobile_number: str
    status: VisitorRequestStatus = VisitorRequestStatus.PENDING


@dataclass(frozen=True)
class Expenditure:
    month: str
    year: int
    items: tuple[tuple[str, int], ...]  # (description, amount in paise)
    total_amount: int  # paise
    notes: str | None = None


@dataclass(frozen=True)
class SocietySettings:
    maintenance_amount: int
    upi_id: str
    guard_mobile_number: str


@dataclass(frozen=True)
class PaymentLinkRequest:
    payee_id: str
    amount: int | float
    note: str


@dataclass(frozen=True)
class NotificationLinkRequest:
    phone_number: str
    message: str
