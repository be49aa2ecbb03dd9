"""Named remote procedures over HTTP.

Queries are ``GET /rpc/<name>?input=<json>``, mutations are
``POST /rpc/<name>`` with a JSON body. Every response is
``{"result": ...}`` on success or ``{"error": ..., "message": ...}``.
"""

import json
from collections import namedtuple
from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, HTTPException

from ..errors import RepairDeskError
from ..extensions import db
from ..handlers import (customers, invoices, pos, products, receipts, reports,
                        service_items, services, suppliers, transactions)
from ..logs import log
from .. import schemas as s
from ..serializers import to_jsonable

rpc_bp = Blueprint('rpc', __name__)

QUERY = 'query'
MUTATION = 'mutation'

Procedure = namedtuple('Procedure', 'kind schema call')


def query(call, schema=None):
    return Procedure(QUERY, schema, call)


def mutation(call, schema=None):
    return Procedure(MUTATION, schema, call)


def _healthcheck():
    return {'status': 'ok', 'timestamp': datetime.now(timezone.utc)}


PROCEDURES = {
    'healthcheck': query(_healthcheck),

    # customers
    'createCustomer': mutation(customers.create_customer, s.CreateCustomerInput),
    'getCustomers': query(customers.get_customers),
    'getCustomer': query(lambda i: customers.get_customer(i.id), s.IdInput),
    'updateCustomer': mutation(customers.update_customer, s.UpdateCustomerInput),
    'deleteCustomer': mutation(lambda i: customers.delete_customer(i.id), s.IdInput),

    # suppliers
    'createSupplier': mutation(suppliers.create_supplier, s.CreateSupplierInput),
    'getSuppliers': query(suppliers.get_suppliers),
    'getSupplier': query(lambda i: suppliers.get_supplier(i.id), s.IdInput),
    'updateSupplier': mutation(suppliers.update_supplier, s.UpdateSupplierInput),
    'deleteSupplier': mutation(lambda i: suppliers.delete_supplier(i.id), s.IdInput),

    # products
    'createProduct': mutation(products.create_product, s.CreateProductInput),
    'getProducts': query(products.get_products),
    'getProduct': query(lambda i: products.get_product(i.id), s.IdInput),
    'updateProduct': mutation(products.update_product, s.UpdateProductInput),
    'deleteProduct': mutation(lambda i: products.delete_product(i.id), s.IdInput),
    'getLowStockProducts': query(products.get_low_stock_products),

    # repair services
    'createService': mutation(services.create_service, s.CreateServiceInput),
    'getServices': query(services.get_services),
    'getService': query(lambda i: services.get_service(i.id), s.IdInput),
    'updateService': mutation(services.update_service, s.UpdateServiceInput),
    'getServicesByStatus': query(lambda i: services.get_services_by_status(i.status),
                                 s.ServiceStatusInput),
    'getServicesByCustomer': query(lambda i: services.get_services_by_customer(i.customer_id),
                                   s.CustomerIdInput),

    # purchases and sales
    'createTransaction': mutation(transactions.create_transaction, s.CreateTransactionInput),
    'getTransactions': query(transactions.get_transactions),
    'getTransaction': query(lambda i: transactions.get_transaction(i.id), s.IdInput),
    'getPurchaseTransactions': query(transactions.get_purchase_transactions),
    'getSaleTransactions': query(transactions.get_sale_transactions),
    'createTransactionItem': mutation(transactions.create_transaction_item,
                                      s.CreateTransactionItemInput),
    'getTransactionItems': query(lambda i: transactions.get_transaction_items(i.transaction_id),
                                 s.TransactionIdInput),
    'deleteTransactionItem': mutation(lambda i: transactions.delete_transaction_item(i.id),
                                      s.IdInput),

    # parts used in repairs
    'createServiceItem': mutation(service_items.create_service_item, s.CreateServiceItemInput),
    'getServiceItems': query(lambda i: service_items.get_service_items(i.service_id),
                             s.ServiceIdInput),
    'deleteServiceItem': mutation(lambda i: service_items.delete_service_item(i.id), s.IdInput),

    # invoices
    'createInvoice': mutation(invoices.create_invoice, s.CreateInvoiceInput),
    'getInvoices': query(invoices.get_invoices),
    'getInvoice': query(lambda i: invoices.get_invoice(i.id), s.IdInput),
    'updateInvoice': mutation(invoices.update_invoice, s.UpdateInvoiceInput),
    'getInvoicesByCustomer': query(lambda i: invoices.get_invoices_by_customer(i.customer_id),
                                   s.CustomerIdInput),
    'getInvoicesByStatus': query(lambda i: invoices.get_invoices_by_status(i.status),
                                 s.InvoiceStatusInput),
    'generateInvoiceFromService': mutation(
        lambda i: invoices.generate_invoice_from_service(i.service_id), s.ServiceIdInput),

    # reports
    'generateServiceReport': query(reports.generate_service_report, s.ReportRequest),
    'generateInventoryReport': query(reports.generate_inventory_report, s.ReportRequest),
    'getDailySummary': query(lambda i: reports.get_daily_summary(i.day), s.DailySummaryInput),
    'getWeeklySummary': query(lambda i: reports.get_weekly_summary(i.start_date),
                              s.WeeklySummaryInput),
    'getMonthlySummary': query(lambda i: reports.get_monthly_summary(i.year, i.month),
                               s.MonthlySummaryInput),
    'getYearlySummary': query(lambda i: reports.get_yearly_summary(i.year),
                              s.YearlySummaryInput),

    # receipts and till
    'generateServiceReceipt': query(lambda i: receipts.generate_service_receipt(i.service_id),
                                    s.ServiceIdInput),
    'createPosTransaction': mutation(pos.create_pos_transaction, s.CreatePosTransactionInput),
    'getPosSummary': query(lambda i: pos.get_pos_summary(i.transaction_id),
                           s.TransactionIdInput),
}


def _error(kind, message, status, **extra):
    body = {'error': kind, 'message': message}
    body.update(extra)
    return jsonify(body), status


def _read_input(kind):
    if kind == QUERY:
        raw = request.args.get('input')
        if not raw:
            return {}
        return json.loads(raw)
    if not request.get_data():
        return {}
    return request.get_json(force=True, silent=False)


@rpc_bp.route('/<name>', methods=['GET', 'POST'])
def call(name):
    proc = PROCEDURES.get(name)
    if proc is None:
        return _error('not_found', f"No procedure named '{name}'", 404)

    expected = 'GET' if proc.kind == QUERY else 'POST'
    if request.method != expected:
        return _error('method_not_allowed', f"'{name}' is a {proc.kind}; use {expected}", 405)

    try:
        payload = _read_input(proc.kind)
    except (ValueError, BadRequest):
        return _error('validation', 'input is not valid JSON', 400)

    if proc.schema is None:
        result = proc.call()
    else:
        result = proc.call(proc.schema.model_validate(payload))
    return jsonify({'result': to_jsonable(result)})


@rpc_bp.errorhandler(ValidationError)
def handle_validation_error(exc):
    log.info("Rejected input for %s: %s", request.path, exc.error_count())
    return _error('validation', 'input failed validation', 400,
                  issues=json.loads(exc.json(include_url=False)))


@rpc_bp.errorhandler(RepairDeskError)
def handle_domain_error(exc):
    db.session.rollback()
    return jsonify(exc.to_dict()), exc.status_code


@rpc_bp.errorhandler(IntegrityError)
def handle_integrity_error(exc):
    db.session.rollback()
    log.warning("Integrity error on %s: %s", request.path, exc.orig)
    return _error('conflict', 'the change conflicts with existing records', 409)


@rpc_bp.errorhandler(Exception)
def handle_unknown_error(exc):
    if isinstance(exc, HTTPException):
        return exc
    db.session.rollback()
    log.exception("Procedure %s failed", request.path)
    return _error('unknown', 'internal error', 500)
