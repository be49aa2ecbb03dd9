"""Cashier checkout: sells cart lines and, optionally, bills a finished repair."""

from ..accounting import add_item, finalize, money, new_pricing_ctx
from ..constants import ServiceStatus, TransactionType
from ..errors import BusinessRuleViolation
from ..extensions import db
from ..logs import log
from ..models import Customer, Product, Service, Transaction, today
from ..schemas import CreatePosTransactionInput
from . import require, unit_of_work
from .transactions import add_line


def _billable_service(service_id: int, customer_id: int) -> Service:
    s = require(Service, service_id)
    if s.customer_id != customer_id:
        log.warning("Service %s does not belong to customer %s", service_id, customer_id)
        raise BusinessRuleViolation(
            f"Service with id {service_id} does not belong to customer {customer_id}")
    if s.status != ServiceStatus.COMPLETED.value:
        log.warning("Service %s is not completed (status %s)", service_id, s.status)
        raise BusinessRuleViolation(
            f"Service with id {service_id} is not completed (status: {s.status})")
    return s


def _summary(transaction, customer, service, lines, ctx):
    return {
        'transaction': transaction,
        'customer': customer,
        'service': service,
        'items': lines,
        'subtotal': ctx['subtotal'],
        'service_charge': ctx['service_charge'],
        'tax_amount': ctx['tax_amount'],
        'total_amount': ctx['total_amount'],
    }


@unit_of_work("POS transaction creation")
def create_pos_transaction(data: CreatePosTransactionInput):
    customer = require(Customer, data.customer_id)

    service = None
    service_charge = None
    if data.service_id is not None:
        service = _billable_service(data.service_id, customer.id)
        service_charge = data.service_charge if data.service_charge is not None else service.final_cost

    ctx = new_pricing_ctx(service_charge)
    products = []
    lines = []
    for line in data.items:
        product = require(Product, line.product_id)
        products.append(product)
        lines.append(add_item(ctx, product, line.quantity, line.unit_price))
    finalize(ctx, data.tax_rate)

    t = Transaction(
        type=TransactionType.SALE.value,
        customer_id=customer.id,
        service_id=service.id if service else None,
        total_amount=ctx['total_amount'],
        service_charge=ctx['service_charge'],
        tax_amount=ctx['tax_amount'],
        transaction_date=today(),
        notes=data.notes,
    )
    db.session.add(t)
    db.session.flush()

    for product, line in zip(products, data.items):
        add_line(t, product, line.quantity, line.unit_price)

    log.info(
        "POS sale %s for customer %s: %s lines, total %s",
        t.id, customer.id, len(lines), ctx['total_amount'],
    )
    return _summary(t, customer, service, lines, ctx)


def get_pos_summary(transaction_id: int):
    t = db.session.get(Transaction, transaction_id)
    if t is None or t.type != TransactionType.SALE.value or t.customer is None:
        return None

    lines = []
    for item in t.items:
        product = item.product
        lines.append({
            'product_id': item.product_id,
            'product_name': product.name if product else None,
            'product_sku': product.sku if product else None,
            'quantity': item.quantity,
            'unit_price': money(item.unit_price),
            'total_price': money(item.total_price),
        })

    ctx = {
        'subtotal': sum((line['total_price'] for line in lines), money(0)),
        'service_charge': money(t.service_charge),
        'tax_amount': money(t.tax_amount),
        'total_amount': money(t.total_amount),
    }
    return _summary(t, t.customer, t.service, lines, ctx)
