from ..accounting import money
from ..extensions import db
from ..logs import log
from ..models import Product, utcnow
from ..schemas import CreateProductInput, UpdateProductInput
from . import apply_changes, require, unit_of_work

PRICE_FIELDS = ('purchase_price', 'selling_price')


@unit_of_work("Product creation")
def create_product(data: CreateProductInput) -> Product:
    p = Product(
        name=data.name,
        description=data.description,
        sku=data.sku,
        category=data.category,
        purchase_price=money(data.purchase_price),
        selling_price=money(data.selling_price),
        stock_quantity=data.stock_quantity,
        min_stock_level=data.min_stock_level,
    )
    db.session.add(p)
    db.session.flush()
    log.info("Created product %s (%s) with stock %s", p.id, p.name, p.stock_quantity)
    return p


def get_products():
    return Product.query.order_by(Product.id).all()


def get_product(product_id: int):
    return db.session.get(Product, product_id)


@unit_of_work("Product update")
def update_product(data: UpdateProductInput) -> Product:
    p = require(Product, data.id)
    apply_changes(p, data.model_dump(exclude_unset=True, exclude={'id'}), PRICE_FIELDS)
    p.updated_at = utcnow()
    log.info("Updated product %s", p.id)
    return p


@unit_of_work("Product deletion")
def delete_product(product_id: int) -> None:
    p = require(Product, product_id)
    db.session.delete(p)
    log.info("Deleted product %s", product_id)


def get_low_stock_products():
    return (Product.query
            .filter(Product.stock_quantity < Product.min_stock_level)
            .order_by(Product.id)
            .all())
