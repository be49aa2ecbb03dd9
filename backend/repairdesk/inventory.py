"""Stock ledger rules applied when line items are created or removed.

Every stock movement is a single UPDATE statement evaluated by the database,
so the check and the write cannot be interleaved by another request. The
caller owns the surrounding transaction: nothing here commits.
"""

from sqlalchemy import update

from .errors import InsufficientStockError
from .extensions import db
from .logs import log
from .models import Product, utcnow

STOCK_FIELDS = ["stock_quantity", "updated_at"]


def take_stock(product: Product, quantity: int) -> None:
    """Decrease on-hand stock, refusing to go below zero."""

    stmt = (
        update(Product)
        .where(Product.id == product.id, Product.stock_quantity >= quantity)
        .values(stock_quantity=Product.stock_quantity - quantity, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    result = db.session.execute(stmt)
    db.session.expire(product, STOCK_FIELDS)
    if result.rowcount == 0:
        log.warning(
            "Stock check failed for product %s: available %s, requested %s",
            product.id, product.stock_quantity, quantity,
        )
        raise InsufficientStockError(product.name, product.stock_quantity, quantity)


def receive_stock(product: Product, quantity: int) -> None:
    """Increase on-hand stock unconditionally."""

    stmt = (
        update(Product)
        .where(Product.id == product.id)
        .values(stock_quantity=Product.stock_quantity + quantity, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    db.session.execute(stmt)
    db.session.expire(product, STOCK_FIELDS)


# reversing a consumption is the same movement as receiving goods
return_stock = receive_stock


__all__ = ["take_stock", "receive_stock", "return_stock"]
