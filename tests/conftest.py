"""Shared pytest fixtures for the RepairDesk test-suite."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Callable, Iterator

import pytest
from flask import Flask

from repairdesk import create_app
from repairdesk.config import TestConfig
from repairdesk.extensions import db
from repairdesk.handlers import customers, products, services, suppliers, transactions
from repairdesk.models import Customer, Product, Service, Supplier, Transaction
from repairdesk.schemas import (
    CreateCustomerInput,
    CreateProductInput,
    CreateServiceInput,
    CreateSupplierInput,
    CreateTransactionInput,
    UpdateServiceInput,
)


@pytest.fixture
def app() -> Iterator[Flask]:
    """Application bound to a fresh in-memory database for each test."""

    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        try:
            yield application
        finally:
            db.session.remove()
            db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def rpc(client):
    """Call a procedure by name: queries via GET, mutations via POST."""

    def _call(name: str, payload=None, *, method: str = "GET"):
        if method == "GET":
            query = {"input": json.dumps(payload)} if payload is not None else {}
            return client.get(f"/rpc/{name}", query_string=query)
        return client.post(f"/rpc/{name}", json=payload or {})

    return _call


@pytest.fixture
def make_customer(app) -> Callable[..., Customer]:
    def _make(**overrides) -> Customer:
        fields = {"name": "Test Customer", "email": "test@example.com", "phone": "555-0100"}
        fields.update(overrides)
        return customers.create_customer(CreateCustomerInput(**fields))

    return _make


@pytest.fixture
def make_supplier(app) -> Callable[..., Supplier]:
    def _make(**overrides) -> Supplier:
        fields = {"name": "Parts Depot", "contact_person": "Jane Smith"}
        fields.update(overrides)
        return suppliers.create_supplier(CreateSupplierInput(**fields))

    return _make


@pytest.fixture
def make_product(app) -> Callable[..., Product]:
    def _make(**overrides) -> Product:
        fields = {
            "name": "iPhone 12 Screen",
            "purchase_price": Decimal("80.00"),
            "selling_price": Decimal("120.00"),
            "stock_quantity": 10,
            "min_stock_level": 2,
        }
        fields.update(overrides)
        return products.create_product(CreateProductInput(**fields))

    return _make


@pytest.fixture
def make_service(app, make_customer) -> Callable[..., Service]:
    """Create a repair ticket; ``final_cost``/``status`` are applied as an update."""

    def _make(customer_id=None, final_cost=None, status=None, **overrides) -> Service:
        if customer_id is None:
            customer_id = make_customer().id
        fields = {
            "customer_id": customer_id,
            "device_type": "Smartphone",
            "device_model": "iPhone 12",
            "problem_description": "Cracked screen",
        }
        fields.update(overrides)
        service = services.create_service(CreateServiceInput(**fields))

        changes = {}
        if final_cost is not None:
            changes["final_cost"] = final_cost
        if status is not None:
            changes["status"] = status
        if changes:
            service = services.update_service(UpdateServiceInput(id=service.id, **changes))
        return service

    return _make


@pytest.fixture
def make_transaction(app) -> Callable[..., Transaction]:
    def _make(type="sale", total_amount=Decimal("0"), **overrides) -> Transaction:
        fields = {"type": type, "total_amount": total_amount}
        fields.update(overrides)
        return transactions.create_transaction(CreateTransactionInput(**fields))

    return _make


@pytest.fixture
def stock_of(app) -> Callable[[int], int]:
    """Read the committed on-hand quantity for a product id."""

    def _read(product_id: int) -> int:
        db.session.expire_all()
        return db.session.get(Product, product_id).stock_quantity

    return _read
