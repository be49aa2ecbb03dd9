"""End-to-end tests through the HTTP procedure facade."""

from __future__ import annotations

import pytest


def test_healthcheck(rpc):
    response = rpc("healthcheck")

    assert response.status_code == 200
    body = response.get_json()["result"]
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_create_customer_returns_record_with_nulls(rpc):
    response = rpc("createCustomer", {"name": "Walk-in"}, method="POST")

    assert response.status_code == 200
    customer = response.get_json()["result"]
    assert customer["id"] == 1
    assert customer["name"] == "Walk-in"
    assert customer["email"] is None
    assert customer["phone"] is None
    assert customer["created_at"].endswith("Z")


def test_query_returns_null_for_missing_record(rpc):
    response = rpc("getCustomer", {"id": 999})

    assert response.status_code == 200
    assert response.get_json() == {"result": None}


def test_validation_errors_are_400(rpc):
    missing_name = rpc("createCustomer", {"email": "a@example.com"}, method="POST")
    bad_status = rpc("getServicesByStatus", {"status": "lost"})
    unknown_field = rpc("createCustomer", {"name": "A", "nickname": "B"}, method="POST")

    for response in (missing_name, bad_status, unknown_field):
        assert response.status_code == 400
        assert response.get_json()["error"] == "validation"
    assert missing_name.get_json()["issues"][0]["loc"] == ["name"]


def test_malformed_json_input_is_400(client):
    query = client.get("/rpc/getCustomer", query_string={"input": "{not json"})
    mutation = client.post("/rpc/createCustomer", data="{not json",
                           content_type="application/json")

    for response in (query, mutation):
        assert response.status_code == 400
        assert response.get_json() == {
            "error": "validation",
            "message": "input is not valid JSON",
        }


@pytest.mark.parametrize("name", ["updateCustomer", "updateSupplier"])
def test_null_name_on_update_is_400(rpc, make_customer, make_supplier, name):
    make_customer()
    make_supplier()

    response = rpc(name, {"id": 1, "name": None}, method="POST")

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation"


def test_missing_reference_is_404(rpc):
    response = rpc("updateCustomer", {"id": 999, "name": "Ghost"}, method="POST")

    assert response.status_code == 404
    assert response.get_json() == {
        "error": "not_found",
        "message": "Customer with id 999 not found",
    }


def test_insufficient_stock_is_409(rpc, make_product, make_service):
    product = make_product(stock_quantity=1)
    service = make_service()

    response = rpc("createServiceItem", {
        "service_id": service.id, "product_id": product.id, "quantity": 5, "unit_price": 10,
    }, method="POST")

    assert response.status_code == 409
    body = response.get_json()
    assert body["error"] == "insufficient_stock"
    assert "Available: 1, Requested: 5" in body["message"]


def test_wrong_method_and_unknown_procedure(rpc):
    assert rpc("createCustomer", {"name": "A"}).status_code == 405
    assert rpc("getCustomers", method="POST").status_code == 405
    assert rpc("launchRocket").status_code == 404


def test_money_and_dates_serialization(rpc, make_product, make_service):
    make_product(purchase_price="80.00", selling_price="120.50")
    service = make_service()

    product = rpc("getProducts").get_json()["result"][0]
    ticket = rpc("getService", {"id": service.id}).get_json()["result"]

    assert product["purchase_price"] == 80.0
    assert product["selling_price"] == 120.5
    assert ticket["received_date"].endswith("T00:00:00Z")
    assert ticket["status"] == "received"


def test_camel_case_lookup_inputs(rpc, make_customer, make_service):
    customer = make_customer()
    make_service(customer_id=customer.id)

    by_alias = rpc("getServicesByCustomer", {"customerId": customer.id})
    by_name = rpc("getServicesByCustomer", {"customer_id": customer.id})

    assert len(by_alias.get_json()["result"]) == 1
    assert by_alias.get_json() == by_name.get_json()


def test_checkout_through_facade(rpc, make_customer, make_product):
    customer = make_customer()
    product = make_product(stock_quantity=3)

    response = rpc("createPosTransaction", {
        "customer_id": customer.id,
        "items": [{"product_id": product.id, "quantity": 2, "unit_price": 12.5}],
        "tax_rate": 0.1,
    }, method="POST")

    assert response.status_code == 200
    summary = response.get_json()["result"]
    assert summary["subtotal"] == 25.0
    assert summary["tax_amount"] == 2.5
    assert summary["total_amount"] == 27.5
    assert summary["transaction"]["type"] == "sale"
    assert summary["customer"]["id"] == customer.id

    stock = rpc("getProduct", {"id": product.id}).get_json()["result"]["stock_quantity"]
    assert stock == 1


def test_daily_summary_query(rpc):
    response = rpc("getDailySummary", {"date": "2024-01-15"})

    assert response.status_code == 200
    assert response.get_json()["result"] == {
        "services_count": 0, "revenue": 0.0, "purchases": 0.0, "sales": 0.0,
    }


def test_dashboard(client, make_customer):
    make_customer()

    response = client.get("/")

    assert response.status_code == 200
    body = response.get_json()
    assert body["app"] == "RepairDesk"
    assert body["stats"]["customers"] == 1
    assert body["stats"]["total_revenue"] == 0.0
