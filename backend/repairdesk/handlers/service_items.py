from ..accounting import line_total, money
from ..extensions import db
from ..inventory import return_stock, take_stock
from ..logs import log
from ..models import Product, Service, ServiceItem
from ..schemas import CreateServiceItemInput
from . import require, unit_of_work


@unit_of_work("Service item creation")
def create_service_item(data: CreateServiceItemInput) -> ServiceItem:
    s = require(Service, data.service_id)
    p = require(Product, data.product_id)

    take_stock(p, data.quantity)

    item = ServiceItem(
        service_id=s.id,
        product_id=p.id,
        quantity=data.quantity,
        unit_price=money(data.unit_price),
        total_price=line_total(data.quantity, data.unit_price),
    )
    db.session.add(item)
    db.session.flush()
    log.info("Service %s consumed %s x product %s", s.id, item.quantity, p.id)
    return item


def get_service_items(service_id: int):
    require(Service, service_id)
    return (ServiceItem.query
            .filter_by(service_id=service_id)
            .order_by(ServiceItem.id)
            .all())


@unit_of_work("Service item deletion")
def delete_service_item(item_id: int) -> None:
    item = require(ServiceItem, item_id, 'Service item')
    product = db.session.get(Product, item.product_id)
    if product is not None:
        return_stock(product, item.quantity)
    else:
        log.warning("Product %s is gone; stock for service item %s not restored",
                    item.product_id, item_id)

    db.session.delete(item)
    log.info("Deleted service item %s", item_id)
