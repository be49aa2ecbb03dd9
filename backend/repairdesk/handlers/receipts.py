from ..accounting import money
from ..extensions import db
from ..models import Service


def generate_service_receipt(service_id: int):
    s = db.session.get(Service, service_id)
    if s is None or s.customer is None:
        return None

    items = [
        {
            'id': item.id,
            'service_id': item.service_id,
            'product_id': item.product_id,
            'quantity': item.quantity,
            'unit_price': item.unit_price,
            'total_price': item.total_price,
            'created_at': item.created_at,
            'product': item.product,
        }
        for item in s.items
        if item.product is not None
    ]

    return {
        'service': s,
        'customer': s.customer,
        'service_items': items,
        'total_parts_cost': sum((money(i['total_price']) for i in items), money(0)),
    }
