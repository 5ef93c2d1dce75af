from decimal import Decimal


def settle_payload(**overrides):
    payload = {
        "customer": {"name": "Walk-in Customer", "mobile": "9000000000"},
        "items": [{"product_id": 2, "qty": 3}, {"product_id": 3}],
        "shipping": 50,
        "paid": 0,
        "payment_mode": "UPI",
    }
    payload.update(overrides)
    return payload


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_settle_invoice_over_http(seeded_client):
    response = seeded_client.post("/invoices/", json=settle_payload())
    assert response.status_code == 201
    data = response.get_json()
    invoice = data["invoice"]

    assert invoice["invoice_no"] == "AKE-2026-1003"
    assert Decimal(invoice["grand_total"]) == Decimal("4474")
    assert invoice["status"] == "Unpaid"
    assert invoice["payment_mode"] == "UPI"
    assert data["skipped_product_ids"] == []

    assert seeded_client.get("/products/2").get_json()["stock"] == 42
    assert seeded_client.get("/products/3").get_json()["stock"] == 29
    assert seeded_client.get("/settings/").get_json()["current_invoice"] == 1004

    listed = seeded_client.get("/invoices/").get_json()
    assert listed[0]["invoice_no"] == "AKE-2026-1003"


def test_settle_with_known_customer_id(seeded_client):
    response = seeded_client.post("/invoices/", json=settle_payload(customer={"id": 3}))
    assert response.status_code == 201
    assert response.get_json()["invoice"]["customer_name"] == "City Computers"
    assert response.get_json()["invoice"]["customer_gst"] == "27CITYC5678B1Z3"


def test_settle_retry_with_same_draft_id(seeded_client):
    first = seeded_client.post("/invoices/", json=settle_payload(draft_id="draft-1"))
    again = seeded_client.post("/invoices/", json=settle_payload(draft_id="draft-1"))

    assert first.status_code == 201
    assert again.status_code == 200
    assert again.get_json()["replayed"] is True
    assert again.get_json()["invoice"]["id"] == first.get_json()["invoice"]["id"]
    assert seeded_client.get("/settings/").get_json()["current_invoice"] == 1004


def test_settle_validation_errors(seeded_client):
    no_name = seeded_client.post("/invoices/", json=settle_payload(customer={"name": ""}))
    assert no_name.status_code == 400
    assert no_name.get_json()["error"] == "Please enter customer name"

    no_items = seeded_client.post("/invoices/", json=settle_payload(items=[]))
    assert no_items.status_code == 400

    bad_item = seeded_client.post("/invoices/", json=settle_payload(items=[{"qty": 1}]))
    assert bad_item.status_code == 400

    missing_product = seeded_client.post("/invoices/", json=settle_payload(items=[{"product_id": 99}]))
    assert missing_product.status_code == 404

    assert len(seeded_client.get("/invoices/").get_json()) == 2
    assert seeded_client.get("/settings/").get_json()["current_invoice"] == 1003


def test_preview_does_not_persist(seeded_client):
    response = seeded_client.post("/invoices/preview", json=settle_payload(paid=2000))
    assert response.status_code == 200
    data = response.get_json()

    assert Decimal(data["totals"]["round_off"]) == Decimal("0.18")
    assert data["status"] == "Partial"
    assert Decimal(data["balance"]) == Decimal("2474")
    assert seeded_client.get("/settings/").get_json()["current_invoice"] == 1003
    assert seeded_client.get("/products/2").get_json()["stock"] == 45


def test_cancel_and_print(seeded_client):
    cancelled = seeded_client.put("/invoices/2/cancel")
    assert cancelled.status_code == 200
    assert cancelled.get_json()["invoice"]["status"] == "Cancelled"
    assert seeded_client.put("/invoices/2/cancel").status_code == 400

    printed = seeded_client.get("/invoices/2/print")
    assert printed.status_code == 200
    assert "text/html" in printed.headers["Content-Type"]
    assert "AKE-2026-1002" in printed.get_data(as_text=True)

    assert seeded_client.get("/invoices/42/print").status_code == 404


def test_invoice_list_filters(seeded_client):
    assert [i["id"] for i in seeded_client.get("/invoices/?status=Paid").get_json()] == [1]
    assert [i["id"] for i in seeded_client.get("/invoices/?q=suresh").get_json()] == [2]
    assert seeded_client.get("/invoices/?status=Overdue").status_code == 400


def test_product_crud(seeded_client):
    assert seeded_client.post("/products/", json={"name": "Webcam"}).status_code == 400

    created = seeded_client.post("/products/", json={
        "name": "Webcam HD", "code": "CAM-001", "category": "Accessories",
        "purchase_price": 900, "selling_price": 1599, "gst": 18, "stock": 12, "min_stock": 2,
    })
    assert created.status_code == 201
    assert created.get_json()["id"] == 7

    assert [p["id"] for p in seeded_client.get("/products/?q=webcam").get_json()] == [7]
    assert seeded_client.put("/products/7", json={"stock": 1}).get_json()["stock"] == 1
    assert [p["id"] for p in seeded_client.get("/products/low-stock").get_json()] == [5, 7]

    assert seeded_client.delete("/products/7").status_code == 200
    assert seeded_client.delete("/products/7").status_code == 404


def test_customer_crud(seeded_client):
    created = seeded_client.post("/customers/", json={"name": "Priya Traders", "mobile": "9000000001"})
    assert created.status_code == 201
    customer_id = created.get_json()["id"]

    updated = seeded_client.put(f"/customers/{customer_id}", json={"type": "Wholesale"})
    assert updated.get_json()["type"] == "Wholesale"
    assert seeded_client.post("/customers/", json={"name": "No Mobile"}).status_code == 400
    assert seeded_client.delete(f"/customers/{customer_id}").status_code == 200
    assert seeded_client.get(f"/customers/{customer_id}").status_code == 404


def test_settings_update(seeded_client):
    response = seeded_client.put("/settings/", json={"terms": "No returns", "current_invoice": 1001})
    assert response.status_code == 400

    response = seeded_client.put("/settings/", json={"terms": "No returns"})
    assert response.status_code == 200
    assert seeded_client.get("/settings/").get_json()["terms"] == "No returns"


def test_reports(seeded_client):
    sales = seeded_client.get("/reports/sales?date_from=2026-02-01&date_to=2026-02-28").get_json()
    assert Decimal(sales["summary"]["total_sales"]) == Decimal("103594")

    gst = seeded_client.get("/reports/gst?date_from=2026-02-01&date_to=2026-02-28").get_json()
    assert Decimal(gst["summary"]["total_gst"]) == Decimal("15794.82")

    outstanding = seeded_client.get("/reports/outstanding?date_from=2026-02-01&date_to=2026-02-28").get_json()
    assert len(outstanding["rows"]) == 1

    stock = seeded_client.get("/reports/stock").get_json()
    assert stock["summary"]["low_stock_items"] == 1

    dashboard = seeded_client.get("/reports/dashboard?profit_basis=line_gst").get_json()
    assert dashboard["profit_basis"] == "line_gst"
    assert Decimal(dashboard["pending_dues"]) == Decimal("2474")

    assert seeded_client.get("/reports/sales?date_from=02/01/2026").status_code == 400
    assert seeded_client.get("/reports/dashboard?profit_basis=guess").status_code == 400


def test_report_exports(seeded_client):
    csv = seeded_client.get("/reports/sales/export?format=csv&date_from=2026-02-01&date_to=2026-02-28")
    assert csv.status_code == 200
    assert csv.mimetype == "text/csv"
    body = csv.get_data(as_text=True)
    assert "invoice_no" in body.splitlines()[0]
    assert "AKE-2026-1001" in body

    xlsx = seeded_client.get("/reports/stock/export?format=xlsx")
    assert xlsx.status_code == 200
    assert xlsx.get_data()[:2] == b"PK"

    assert seeded_client.get("/reports/dashboard/export").status_code == 400
    assert seeded_client.get("/reports/sales/export?format=pdf").status_code == 400


def test_repeated_product_rows_add_up(seeded_client):
    items = [{"product_id": 2, "qty": 3}, {"product_id": 2, "qty": 2}, {"product_id": 3}, {"product_id": 3}]
    preview = seeded_client.post("/invoices/preview", json=settle_payload(items=items)).get_json()
    assert [(i["product_id"], i["qty"]) for i in preview["items"]] == [(2, 5), (3, 2)]

    response = seeded_client.post("/invoices/", json=settle_payload(items=items))
    assert response.status_code == 201
    assert seeded_client.get("/products/2").get_json()["stock"] == 40
    assert seeded_client.get("/products/3").get_json()["stock"] == 28


def test_non_numeric_amounts_are_not_server_errors(seeded_client):
    preview = seeded_client.post("/invoices/preview", json=settle_payload(items=[{"product_id": 2, "rate": "NaN"}]))
    assert preview.status_code == 200
    assert Decimal(preview.get_json()["totals"]["subtotal"]) == 0

    settled = seeded_client.post("/invoices/", json=settle_payload(paid="Infinity"))
    assert settled.status_code == 201
    assert settled.get_json()["invoice"]["status"] == "Unpaid"

    negative = seeded_client.post("/invoices/", json=settle_payload(items=[{"product_id": 2, "rate": -1000}]))
    assert negative.status_code == 400
    assert seeded_client.get("/settings/").get_json()["current_invoice"] == 1004
