"""Enumerations shared by the models, input schemas and handlers."""

from enum import Enum


class ServiceStatus(str, Enum):
    RECEIVED = "received"
    IN_PROGRESS = "in_progress"
    READY_FOR_PICKUP = "ready_for_pickup"
    COMPLETED = "completed"


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def values(enum_cls):
    return [member.value for member in enum_cls]


__all__ = [
    "ServiceStatus",
    "TransactionType",
    "InvoiceStatus",
    "ReportPeriod",
    "values",
]
