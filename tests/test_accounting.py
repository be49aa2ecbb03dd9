"""Money arithmetic and transaction header rules."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from repairdesk.accounting import add_item, calc_tax, finalize, line_total, money, new_pricing_ctx
from repairdesk.errors import NotFoundError
from repairdesk.handlers import transactions
from repairdesk.models import today
from repairdesk.schemas import CreateTransactionInput


@pytest.mark.parametrize("raw, expected", [
    (None, Decimal("0.00")),
    (0, Decimal("0.00")),
    ("19.999", Decimal("20.00")),
    ("2.345", Decimal("2.35")),
    (1.1, Decimal("1.10")),
])
def test_money_rounds_half_up_to_cents(raw, expected):
    assert money(raw) == expected


def test_line_total():
    assert line_total(3, "9.99") == Decimal("29.97")
    assert line_total(2, Decimal("25.50")) == Decimal("51.00")


def test_calc_tax_uses_configured_default(app):
    app.config["DEFAULT_TAX_RATE"] = 0.2

    assert calc_tax(Decimal("50.00")) == Decimal("10.00")
    assert calc_tax(Decimal("50.00"), Decimal("0.05")) == Decimal("2.50")


def test_pricing_ctx_adds_service_charge_before_tax(app, make_product):
    product = make_product(name="Fan")
    ctx = new_pricing_ctx(Decimal("30.00"))

    line = add_item(ctx, product, 2, Decimal("10.00"))
    finalize(ctx, Decimal("0.10"))

    assert line["total_price"] == Decimal("20.00")
    assert ctx == {
        "subtotal": Decimal("20.00"),
        "service_charge": Decimal("30.00"),
        "tax_amount": Decimal("5.00"),
        "total_amount": Decimal("55.00"),
    }


def test_create_transaction_defaults_date_to_today(make_customer):
    customer = make_customer()

    t = transactions.create_transaction(CreateTransactionInput(
        type="sale", customer_id=customer.id, total_amount="99.999",
    ))

    assert t.transaction_date == today()
    assert t.total_amount == Decimal("100.00")


def test_purchase_and_sale_listings(make_supplier, make_transaction):
    supplier = make_supplier()
    bought = make_transaction(type="purchase", supplier_id=supplier.id,
                              transaction_date=date(2024, 5, 1))
    sold = make_transaction(type="sale")

    assert [t.id for t in transactions.get_purchase_transactions()] == [bought.id]
    assert [t.id for t in transactions.get_sale_transactions()] == [sold.id]
    assert len(transactions.get_transactions()) == 2
    assert transactions.get_transaction(bought.id).supplier_id == supplier.id


def test_transaction_party_must_match_type():
    with pytest.raises(ValidationError, match="purchase is made from a supplier"):
        CreateTransactionInput(type="purchase", customer_id=1, total_amount=0)
    with pytest.raises(ValidationError, match="sale is made to a customer"):
        CreateTransactionInput(type="sale", supplier_id=1, total_amount=0)


def test_transaction_references_must_exist(app):
    with pytest.raises(NotFoundError, match="Supplier with id 42 not found"):
        transactions.create_transaction(CreateTransactionInput(
            type="purchase", supplier_id=42, total_amount=0))
