from ..accounting import line_total, money
from ..constants import TransactionType
from ..extensions import db
from ..inventory import receive_stock, return_stock, take_stock
from ..logs import log
from ..models import Customer, Product, Supplier, Transaction, TransactionItem, today
from ..schemas import CreateTransactionInput, CreateTransactionItemInput
from . import require, unit_of_work


@unit_of_work("Transaction creation")
def create_transaction(data: CreateTransactionInput) -> Transaction:
    if data.supplier_id is not None:
        require(Supplier, data.supplier_id)
    if data.customer_id is not None:
        require(Customer, data.customer_id)

    t = Transaction(
        type=data.type,
        supplier_id=data.supplier_id,
        customer_id=data.customer_id,
        total_amount=money(data.total_amount),
        transaction_date=data.transaction_date or today(),
        notes=data.notes,
    )
    db.session.add(t)
    db.session.flush()
    log.info("Recorded %s transaction %s for %s", t.type, t.id, t.total_amount)
    return t


def get_transactions():
    return Transaction.query.order_by(Transaction.id).all()


def get_transaction(transaction_id: int):
    return db.session.get(Transaction, transaction_id)


def get_purchase_transactions():
    return (Transaction.query
            .filter_by(type=TransactionType.PURCHASE.value)
            .order_by(Transaction.id)
            .all())


def get_sale_transactions():
    return (Transaction.query
            .filter_by(type=TransactionType.SALE.value)
            .order_by(Transaction.id)
            .all())


def add_line(transaction: Transaction, product: Product, quantity: int, unit_price) -> TransactionItem:
    """Stage one line item and move stock for it; the caller commits."""

    if transaction.type == TransactionType.PURCHASE.value:
        receive_stock(product, quantity)
    else:
        take_stock(product, quantity)

    item = TransactionItem(
        transaction_id=transaction.id,
        product_id=product.id,
        quantity=quantity,
        unit_price=money(unit_price),
        total_price=line_total(quantity, unit_price),
    )
    db.session.add(item)
    return item


@unit_of_work("Transaction item creation")
def create_transaction_item(data: CreateTransactionItemInput) -> TransactionItem:
    t = require(Transaction, data.transaction_id)
    p = require(Product, data.product_id)

    item = add_line(t, p, data.quantity, data.unit_price)
    db.session.flush()
    log.info(
        "Added item %s to %s transaction %s: %s x product %s",
        item.id, t.type, t.id, item.quantity, p.id,
    )
    return item


def get_transaction_items(transaction_id: int):
    return (TransactionItem.query
            .filter_by(transaction_id=transaction_id)
            .order_by(TransactionItem.id)
            .all())


@unit_of_work("Transaction item deletion")
def delete_transaction_item(item_id: int) -> None:
    item = require(TransactionItem, item_id, 'Transaction item')
    product = db.session.get(Product, item.product_id)

    # undo the stock movement the item caused, if the product is still stocked
    if product is not None:
        if item.transaction.type == TransactionType.PURCHASE.value:
            take_stock(product, item.quantity)
        else:
            return_stock(product, item.quantity)

    db.session.delete(item)
    log.info("Deleted transaction item %s", item_id)
