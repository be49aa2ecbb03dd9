import time

from sqlalchemy import func

from ..accounting import invoice_total, money
from ..constants import InvoiceStatus, values
from ..errors import InvalidStatusError
from ..extensions import db
from ..logs import log
from ..models import Customer, Invoice, Service, ServiceItem, Transaction, today, utcnow
from ..schemas import CreateInvoiceInput, UpdateInvoiceInput
from . import apply_changes, require, unit_of_work


def _insert_invoice(data: CreateInvoiceInput) -> Invoice:
    require(Customer, data.customer_id)
    if data.service_id is not None:
        require(Service, data.service_id)
    if data.transaction_id is not None:
        require(Transaction, data.transaction_id)

    inv = Invoice(
        customer_id=data.customer_id,
        service_id=data.service_id,
        transaction_id=data.transaction_id,
        invoice_number=data.invoice_number,
        subtotal=money(data.subtotal),
        tax_amount=money(data.tax_amount),
        total_amount=invoice_total(data.subtotal, data.tax_amount),
        status=InvoiceStatus.DRAFT.value,
        due_date=data.due_date,
        notes=data.notes,
    )
    db.session.add(inv)
    db.session.flush()
    log.info("Issued invoice %s (%s) for %s", inv.id, inv.invoice_number, inv.total_amount)
    return inv


@unit_of_work("Invoice creation")
def create_invoice(data: CreateInvoiceInput) -> Invoice:
    return _insert_invoice(data)


def get_invoices():
    return Invoice.query.order_by(Invoice.id).all()


def get_invoice(invoice_id: int):
    return db.session.get(Invoice, invoice_id)


@unit_of_work("Invoice update")
def update_invoice(data: UpdateInvoiceInput) -> Invoice:
    inv = require(Invoice, data.id)
    changes = data.model_dump(exclude_unset=True, exclude={'id'})
    if (changes.get('status') == InvoiceStatus.PAID.value
            and 'paid_date' not in changes and inv.paid_date is None):
        changes['paid_date'] = today()

    apply_changes(inv, changes)
    inv.updated_at = utcnow()
    log.info("Updated invoice %s (status %s)", inv.id, inv.status)
    return inv


def get_invoices_by_customer(customer_id: int):
    return Invoice.query.filter_by(customer_id=customer_id).order_by(Invoice.id).all()


def get_invoices_by_status(status: str):
    allowed = values(InvoiceStatus)
    if status not in allowed:
        log.warning("Rejected invoice status filter '%s'", status)
        raise InvalidStatusError(status, allowed)
    return Invoice.query.filter_by(status=status).order_by(Invoice.id).all()


def parts_total(service_id: int):
    total = (db.session.query(func.sum(ServiceItem.total_price))
             .filter(ServiceItem.service_id == service_id)
             .scalar())
    return money(total)


@unit_of_work("Invoice generation from service")
def generate_invoice_from_service(service_id: int) -> Invoice:
    s = require(Service, service_id)

    # parts used plus labor
    subtotal = parts_total(service_id) + money(s.final_cost)
    invoice_number = f"INV-SRV-{service_id}-{int(time.time() * 1000)}"

    return _insert_invoice(CreateInvoiceInput(
        customer_id=s.customer_id,
        service_id=service_id,
        invoice_number=invoice_number,
        subtotal=subtotal,
        tax_amount=0,
        notes=f"Auto-generated invoice for service #{service_id}",
    ))
