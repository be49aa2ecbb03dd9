"""Input schemas validated at the RPC boundary before a handler runs.

Update schemas carry only optional fields. Handlers apply
``model_dump(exclude_unset=True)`` so a field the caller omitted keeps its
stored value while an explicit ``null`` clears it.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from .constants import InvoiceStatus, ReportPeriod, ServiceStatus, TransactionType


NonNegativeMoney = Annotated[Decimal, Field(ge=0)]


class InputModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="forbid")


class IdInput(InputModel):
    id: int


class AliasedInput(InputModel):
    """Accepts both the camelCase names the UI sends and the field names."""

    model_config = ConfigDict(populate_by_name=True)


# Customers

class CreateCustomerInput(InputModel):
    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UpdateCustomerInput(InputModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @model_validator(mode="after")
    def _name_not_null(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self


# Suppliers

class CreateSupplierInput(InputModel):
    name: str = Field(min_length=1)
    contact_person: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UpdateSupplierInput(InputModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    contact_person: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @model_validator(mode="after")
    def _name_not_null(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self


# Products

class CreateProductInput(InputModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    purchase_price: NonNegativeMoney
    selling_price: NonNegativeMoney
    stock_quantity: int = Field(ge=0)
    min_stock_level: int = Field(default=0, ge=0)


class UpdateProductInput(InputModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    purchase_price: Optional[NonNegativeMoney] = None
    selling_price: Optional[NonNegativeMoney] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        for name in ("name", "purchase_price", "selling_price", "stock_quantity", "min_stock_level"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


# Services

class CreateServiceInput(InputModel):
    customer_id: int
    device_type: str = Field(min_length=1)
    device_model: Optional[str] = None
    device_serial: Optional[str] = None
    problem_description: str = Field(min_length=1)
    repair_notes: Optional[str] = None
    estimated_cost: Optional[NonNegativeMoney] = None


class UpdateServiceInput(InputModel):
    id: int
    device_type: Optional[str] = Field(default=None, min_length=1)
    device_model: Optional[str] = None
    device_serial: Optional[str] = None
    problem_description: Optional[str] = Field(default=None, min_length=1)
    repair_notes: Optional[str] = None
    estimated_cost: Optional[NonNegativeMoney] = None
    final_cost: Optional[NonNegativeMoney] = None
    status: Optional[ServiceStatus] = None
    completed_date: Optional[date] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        for name in ("device_type", "problem_description", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ServiceStatusInput(InputModel):
    status: ServiceStatus


class CustomerIdInput(AliasedInput):
    customer_id: int = Field(alias="customerId")

class ServiceIdInput(AliasedInput):
    service_id: int = Field(alias="serviceId")

class TransactionIdInput(AliasedInput):
    transaction_id: int = Field(alias="transactionId")

# Transactions

class CreateTransactionInput(InputModel):
    type: TransactionType
    supplier_id: Optional[int] = None
    customer_id: Optional[int] = None
    total_amount: NonNegativeMoney
    transaction_date: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _party_matches_type(self):
        if self.type == TransactionType.PURCHASE.value and self.customer_id is not None:
            raise ValueError("a purchase is made from a supplier, not a customer")
        if self.type == TransactionType.SALE.value and self.supplier_id is not None:
            raise ValueError("a sale is made to a customer, not a supplier")
        return self


class CreateTransactionItemInput(InputModel):
    transaction_id: int
    product_id: int
    quantity: int = Field(ge=1)
    unit_price: NonNegativeMoney


class CreateServiceItemInput(InputModel):
    service_id: int
    product_id: int
    quantity: int = Field(ge=1)
    unit_price: NonNegativeMoney


# Invoices

class CreateInvoiceInput(InputModel):
    customer_id: int
    service_id: Optional[int] = None
    transaction_id: Optional[int] = None
    invoice_number: str = Field(min_length=1)
    subtotal: NonNegativeMoney
    tax_amount: Optional[NonNegativeMoney] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None


class UpdateInvoiceInput(InputModel):
    id: int
    status: Optional[InvoiceStatus] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _status_not_null(self):
        if "status" in self.model_fields_set and self.status is None:
            raise ValueError("status cannot be null")
        return self


class InvoiceStatusInput(InputModel):
    # checked by the handler so an unknown value reports the allowed set
    status: str


# Point of sale

class PosItemInput(InputModel):
    product_id: int
    quantity: int = Field(ge=1)
    unit_price: NonNegativeMoney


class CreatePosTransactionInput(InputModel):
    customer_id: int
    service_id: Optional[int] = None
    service_charge: Optional[NonNegativeMoney] = None
    items: List[PosItemInput] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=1)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _something_to_sell(self):
        if not self.items and self.service_id is None:
            raise ValueError("a checkout needs at least one item or a service")
        return self


# Reports

class ReportRequest(InputModel):
    period: ReportPeriod
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _ordered_range(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class DailySummaryInput(AliasedInput):
    day: date = Field(alias="date")


class WeeklySummaryInput(AliasedInput):
    start_date: date = Field(alias="startDate")

class MonthlySummaryInput(InputModel):
    year: int = Field(ge=1900, le=9999)
    month: int = Field(ge=1, le=12)


class YearlySummaryInput(InputModel):
    year: int = Field(ge=1900, le=9999)
