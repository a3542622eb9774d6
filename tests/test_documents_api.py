from decimal import Decimal

from sqlalchemy import select

from invoicedesk.models import ActivityLog, ProductCategory


def _document(supplier, **overrides):
    payload = {
        "file_name": "scan-001.pdf",
        "company_id": supplier.id,
        "invoice_number": "A-100",
        "invoice_date": "2026-03-10",
        "items": [
            {"description": "Flour", "quantity": 2, "unit_price": "1.25", "vat_rate": 9},
            {"description": "Mystery", "quantity": 1, "unit_price": "10", "vat_rate": 21},
        ],
    }
    payload.update(overrides)
    return payload


def _category(db_session, name):
    category = ProductCategory(name=name)
    db_session.add(category)
    db_session.commit()
    return category


def test_upload_aggregates_items(client, user_headers, supplier):
    response = client.post("/api/documents", json=_document(supplier), headers=user_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["uploaded_by"] == "clerk@example.com"
    assert [item["line_number"] for item in body["items"]] == [1, 2]
    assert Decimal(body["amount_no_vat"]) == Decimal("12.50")
    assert Decimal(body["vat_amount"]) == Decimal("2.33")
    assert Decimal(body["total_amount"]) == Decimal("14.83")
    assert body["is_duplicate"] is False


def test_second_upload_is_flagged_duplicate(client, user_headers, supplier):
    client.post("/api/documents", json=_document(supplier), headers=user_headers)
    response = client.post("/api/documents", json=_document(supplier), headers=user_headers)

    assert response.json()["is_duplicate"] is True


def test_item_edit_reaggregates(client, db_session, user_headers, supplier):
    food = _category(db_session, "Food")
    document = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()
    item_id = document["items"][0]["id"]

    response = client.put(
        f"/api/documents/{document['id']}/items/{item_id}",
        json={"quantity": "4", "category_id": food.id},
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["items"][0]["match_type"] == "manual"
    assert Decimal(body["amount_no_vat"]) == Decimal("15.00")
    assert Decimal(body["vat_amount"]) == Decimal("2.55")
    assert Decimal(body["total_amount"]) == Decimal("17.55")


def test_approve_creates_purchase_invoice(client, db_session, user_headers, supplier):
    food = _category(db_session, "Food")
    payload = _document(supplier)
    payload["items"][0]["category_id"] = food.id
    document = client.post("/api/documents", json=payload, headers=user_headers).json()

    response = client.post(
        f"/api/documents/{document['id']}/approve", headers=user_headers
    )

    assert response.status_code == 200
    invoice = response.json()
    assert invoice["kind"] == "purchase"
    assert invoice["source_document_id"] == document["id"]
    assert [line["status"] for line in invoice["lines"]] == [
        "recognized",
        "unrecognized",
    ]
    assert Decimal(invoice["gross_total"]) == Decimal("14.83")

    reviewed = client.get(f"/api/documents/{document['id']}", headers=user_headers).json()
    assert reviewed["status"] == "approved"
    assert reviewed["reviewed_by"] == "clerk@example.com"

    actions = db_session.execute(select(ActivityLog.action)).scalars().all()
    assert "approve" in actions


def test_approve_twice_conflicts(client, user_headers, supplier):
    document = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()
    client.post(f"/api/documents/{document['id']}/approve", headers=user_headers)

    response = client.post(
        f"/api/documents/{document['id']}/approve", headers=user_headers
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Document is already approved."


def test_approve_requires_company(client, user_headers, supplier):
    document = client.post(
        "/api/documents",
        json=_document(supplier, company_id=None),
        headers=user_headers,
    ).json()

    response = client.post(
        f"/api/documents/{document['id']}/approve", headers=user_headers
    )

    assert response.status_code == 400
    assert "Missing essential invoice details" in response.json()["detail"]


def test_reject_locks_document(client, user_headers, supplier):
    document = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()

    rejected = client.post(
        f"/api/documents/{document['id']}/reject", headers=user_headers
    )
    edit = client.put(
        f"/api/documents/{document['id']}/items/{document['items'][0]['id']}",
        json={"quantity": 3},
        headers=user_headers,
    )

    assert rejected.json()["status"] == "rejected"
    assert edit.status_code == 409


def test_list_filters_by_status(client, user_headers, supplier):
    first = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()
    client.post(
        "/api/documents",
        json=_document(supplier, invoice_number="A-101"),
        headers=user_headers,
    )
    client.post(f"/api/documents/{first['id']}/reject", headers=user_headers)

    pending = client.get("/api/documents?status=pending", headers=user_headers).json()

    assert [row["invoice_number"] for row in pending] == ["A-101"]


def test_null_quantity_on_item_edit_reads_as_zero(client, user_headers, supplier):
    document = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()

    response = client.put(
        f"/api/documents/{document['id']}/items/{document['items'][0]['id']}",
        json={"quantity": None, "unit_price": None},
        headers=user_headers,
    )

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert Decimal(item["quantity"]) == Decimal("0")
    assert Decimal(item["net"]) == Decimal("0.00")
    assert Decimal(response.json()["total_amount"]) == Decimal("12.10")


def test_item_edit_rejects_out_of_range_price(client, user_headers, supplier):
    document = client.post(
        "/api/documents", json=_document(supplier), headers=user_headers
    ).json()

    response = client.put(
        f"/api/documents/{document['id']}/items/{document['items'][0]['id']}",
        json={"unit_price": "1e30"},
        headers=user_headers,
    )

    assert response.status_code == 422
