from sqlalchemy import func

from ..accounting import money
from ..constants import ServiceStatus, TransactionType
from ..extensions import db
from ..models import Customer, Product, Service, Transaction


def get_dashboard_stats():
    completed = Service.query.filter_by(status=ServiceStatus.COMPLETED.value).count()
    revenue = (db.session.query(func.sum(Transaction.total_amount))
               .filter(Transaction.type == TransactionType.SALE.value)
               .scalar())
    return {
        'customers': Customer.query.count(),
        'products': Product.query.count(),
        'low_stock_products': Product.query.filter(
            Product.stock_quantity < Product.min_stock_level).count(),
        'pending_services': Service.query.count() - completed,
        'completed_services': completed,
        'total_revenue': money(revenue),
    }
