"""Read-only aggregations over services, products and transactions.

All ranges are inclusive calendar-date ranges. Money is summed in the
database and returned as two-place ``Decimal`` values.
"""

import calendar
from datetime import date, timedelta

from sqlalchemy import func, select

from ..accounting import ZERO, money
from ..constants import ReportPeriod, ServiceStatus, TransactionType
from ..extensions import db
from ..models import Product, Service, Transaction
from ..schemas import ReportRequest


def period_window(period: str, start: date):
    """Return the inclusive (start, end) window a period covers from ``start``."""

    if period == ReportPeriod.DAILY.value:
        return start, start
    if period == ReportPeriod.WEEKLY.value:
        return start, start + timedelta(days=6)
    if period == ReportPeriod.MONTHLY.value:
        last_day = calendar.monthrange(start.year, start.month)[1]
        return start, start.replace(day=last_day)
    if period == ReportPeriod.YEARLY.value:
        return start, date(start.year, 12, 31)
    raise ValueError(f"Unknown report period: {period}")


def _resolve_range(request: ReportRequest):
    if request.end_date is not None:
        return request.start_date, request.end_date
    return period_window(request.period, request.start_date)


def _transaction_total(kind: str, start: date, end: date):
    total = (db.session.query(func.sum(Transaction.total_amount))
             .filter(Transaction.type == kind,
                     Transaction.transaction_date.between(start, end))
             .scalar())
    return money(total)


def _received_services(start: date, end: date):
    return Service.query.filter(Service.received_date.between(start, end))


def generate_service_report(request: ReportRequest):
    start, end = _resolve_range(request)
    services = _received_services(start, end).all()

    completed = [s for s in services if s.status == ServiceStatus.COMPLETED.value]
    in_progress = [s for s in services if s.status == ServiceStatus.IN_PROGRESS.value]
    revenue = sum((money(s.final_cost) for s in completed), ZERO)
    average = money(revenue / len(completed)) if completed else ZERO

    return {
        'total_services': len(services),
        'completed_services': len(completed),
        'in_progress_services': len(in_progress),
        'total_revenue': revenue,
        'average_service_cost': average,
        'period': request.period,
        'start_date': start,
        'end_date': end,
    }


def generate_inventory_report(request: ReportRequest):
    start, end = _resolve_range(request)

    total_products = Product.query.count()
    low_stock = Product.query.filter(Product.stock_quantity < Product.min_stock_level).count()
    inventory_value = (db.session.query(
                           func.sum(Product.stock_quantity * Product.purchase_price))
                       .scalar())

    return {
        'total_products': total_products,
        'low_stock_products': low_stock,
        'total_inventory_value': money(inventory_value),
        'total_purchases': _transaction_total(TransactionType.PURCHASE.value, start, end),
        'total_sales': _transaction_total(TransactionType.SALE.value, start, end),
        'period': request.period,
        'start_date': start,
        'end_date': end,
    }


def summarize(start: date, end: date):
    services_count = _received_services(start, end).count()
    purchases = _transaction_total(TransactionType.PURCHASE.value, start, end)
    sales = _transaction_total(TransactionType.SALE.value, start, end)

    # repairs billed through the till are already part of sales
    billed_at_till = select(Transaction.service_id).where(Transaction.service_id.isnot(None))
    labor = (db.session.query(func.sum(Service.final_cost))
             .filter(Service.status == ServiceStatus.COMPLETED.value,
                     Service.completed_date.between(start, end),
                     Service.id.notin_(billed_at_till))
             .scalar())

    return {
        'services_count': services_count,
        'revenue': sales + money(labor),
        'purchases': purchases,
        'sales': sales,
    }


def get_daily_summary(day: date):
    return summarize(*period_window(ReportPeriod.DAILY.value, day))


def get_weekly_summary(start_date: date):
    return summarize(*period_window(ReportPeriod.WEEKLY.value, start_date))


def get_monthly_summary(year: int, month: int):
    return summarize(*period_window(ReportPeriod.MONTHLY.value, date(year, month, 1)))


def get_yearly_summary(year: int):
    return summarize(*period_window(ReportPeriod.YEARLY.value, date(year, 1, 1)))
