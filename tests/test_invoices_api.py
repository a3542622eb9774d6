from decimal import Decimal

import pytest

from invoicedesk.models import Invoice, InvoiceStatusEnum


def _invoice_payload(supplier, lines):
    return {
        "kind": "purchase",
        "invoice_number": "INV-001",
        "company_id": supplier.id,
        "invoice_date": "2026-02-01",
        "lines": lines,
    }


def _totals(body):
    return (
        Decimal(body["net_total"]),
        Decimal(body["vat_total"]),
        Decimal(body["gross_total"]),
    )


def test_create_invoice_computes_totals(client, admin_headers, supplier):
    response = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Paper", "quantity": 3, "unit_price": "10.555", "vat_rate": 21}],
        ),
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert _totals(body) == (Decimal("31.67"), Decimal("6.65"), Decimal("38.32"))
    line = body["lines"][0]
    assert Decimal(line["net"]) == Decimal("31.67")
    assert line["status"] == "manual"
    assert body["status"] == "uploaded"
    assert body["currency"] == "EUR"


def test_totals_are_sum_of_rounded_lines(client, admin_headers, supplier):
    line = {"description": "Pen", "quantity": 1, "unit_price": "10.005", "vat_rate": 0}
    response = client.post(
        "/api/invoices",
        json=_invoice_payload(supplier, [line, line]),
        headers=admin_headers,
    )

    assert _totals(response.json()) == (
        Decimal("20.02"),
        Decimal("0.00"),
        Decimal("20.02"),
    )


def test_blank_numeric_input_is_zero(client, admin_headers, supplier):
    response = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Unknown", "quantity": 5, "unit_price": "", "vat_rate": 21}],
        ),
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert _totals(response.json()) == (
        Decimal("0.00"),
        Decimal("0.00"),
        Decimal("0.00"),
    )


def test_unknown_vat_rate_is_rejected(client, admin_headers, supplier):
    response = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Odd", "quantity": 1, "unit_price": 10, "vat_rate": 7}],
        ),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "VAT rate" in response.json()["detail"]


def test_line_edits_recompute_totals(client, admin_headers, supplier):
    created = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Paper", "quantity": 2, "unit_price": "5.00", "vat_rate": 21}],
        ),
        headers=admin_headers,
    ).json()
    invoice_id = created["id"]
    line_id = created["lines"][0]["id"]

    edited = client.put(
        f"/api/invoices/{invoice_id}/lines/{line_id}",
        json={"unit_price": "7.50"},
        headers=admin_headers,
    )
    assert edited.status_code == 200
    assert _totals(edited.json()) == (Decimal("15.00"), Decimal("3.15"), Decimal("18.15"))

    added = client.post(
        f"/api/invoices/{invoice_id}/lines",
        json={"description": "Ink", "quantity": 1, "unit_price": "4.00", "vat_rate": 9},
        headers=admin_headers,
    )
    assert added.status_code == 201
    assert _totals(added.json()) == (Decimal("19.00"), Decimal("3.51"), Decimal("22.51"))

    removed = client.delete(
        f"/api/invoices/{invoice_id}/lines/{line_id}", headers=admin_headers
    )
    assert removed.status_code == 200
    assert _totals(removed.json()) == (Decimal("4.00"), Decimal("0.36"), Decimal("4.36"))
    assert len(removed.json()["lines"]) == 1


def test_list_filters_by_kind_and_query(client, admin_headers, supplier):
    client.post("/api/invoices", json=_invoice_payload(supplier, []), headers=admin_headers)
    sales = _invoice_payload(supplier, [])
    sales.update(kind="sales", invoice_number="S-77", company_id=None)
    client.post("/api/invoices", json=sales, headers=admin_headers)

    purchases = client.get("/api/invoices?kind=purchase", headers=admin_headers).json()
    by_company = client.get("/api/invoices?q=acme", headers=admin_headers).json()

    assert [row["invoice_number"] for row in purchases] == ["INV-001"]
    assert [row["invoice_number"] for row in by_company] == ["INV-001"]


def test_exported_invoice_is_locked(client, db_session, admin_headers, supplier):
    created = client.post(
        "/api/invoices", json=_invoice_payload(supplier, []), headers=admin_headers
    ).json()
    invoice = db_session.get(Invoice, created["id"])
    invoice.status = InvoiceStatusEnum.EXPORTED
    db_session.commit()

    response = client.post(
        f"/api/invoices/{created['id']}/lines",
        json={"description": "Late", "quantity": 1, "unit_price": 1, "vat_rate": 21},
        headers=admin_headers,
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Exported invoices are locked."


def test_status_cannot_be_set_to_exported_by_hand(client, admin_headers, supplier):
    created = client.post(
        "/api/invoices", json=_invoice_payload(supplier, []), headers=admin_headers
    ).json()

    response = client.post(
        f"/api/invoices/{created['id']}/status",
        json={"status": "exported"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_missing_invoice_returns_404(client, admin_headers):
    response = client.get("/api/invoices/12345", headers=admin_headers)

    assert response.status_code == 404


def test_unparseable_price_edit_counts_as_zero(client, admin_headers, supplier):
    created = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Paper", "quantity": 2, "unit_price": "5.00", "vat_rate": 21}],
        ),
        headers=admin_headers,
    ).json()

    response = client.put(
        f"/api/invoices/{created['id']}/lines/{created['lines'][0]['id']}",
        json={"unit_price": "abc"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert Decimal(response.json()["lines"][0]["unit_price"]) == Decimal("0")
    assert _totals(response.json()) == (
        Decimal("0.00"),
        Decimal("0.00"),
        Decimal("0.00"),
    )


@pytest.mark.parametrize("field", ["quantity", "unit_price", "vat_rate"])
def test_null_amount_on_line_edit_reads_as_zero(client, admin_headers, supplier, field):
    created = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Paper", "quantity": 2, "unit_price": "5.00", "vat_rate": 21}],
        ),
        headers=admin_headers,
    ).json()

    response = client.put(
        f"/api/invoices/{created['id']}/lines/{created['lines'][0]['id']}",
        json={field: None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    line = response.json()["lines"][0]
    assert Decimal(line[field]) == Decimal("0")
    expected_net = Decimal("10.00") if field == "vat_rate" else Decimal("0.00")
    assert Decimal(line["net"]) == expected_net
    assert Decimal(line["vat"]) == Decimal("0.00")


def test_negative_quantity_is_rejected(client, admin_headers, supplier):
    response = client.post(
        "/api/invoices",
        json=_invoice_payload(
            supplier,
            [{"description": "Refund", "quantity": -1, "unit_price": 10, "vat_rate": 21}],
        ),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Quantity cannot be negative."


@pytest.mark.parametrize(
    "line",
    [
        {"description": "Bulk", "quantity": "1e30", "unit_price": 1, "vat_rate": 21},
        {"description": "Bulk", "quantity": 1, "unit_price": "1e30", "vat_rate": 21},
        {"description": "Bulk", "quantity": "1000000000", "unit_price": 1, "vat_rate": 21},
    ],
)
def test_out_of_range_amount_is_rejected(client, admin_headers, supplier, line):
    created = client.post(
        "/api/invoices", json=_invoice_payload(supplier, []), headers=admin_headers
    ).json()

    response = client.post(
        f"/api/invoices/{created['id']}/lines", json=line, headers=admin_headers
    )

    assert response.status_code == 422
    invoice = client.get(f"/api/invoices/{created['id']}", headers=admin_headers).json()
    assert invoice["lines"] == []


def test_delete_invoice(client, admin_headers, supplier):
    created = client.post(
        "/api/invoices", json=_invoice_payload(supplier, []), headers=admin_headers
    ).json()

    response = client.delete(f"/api/invoices/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/api/invoices/{created['id']}", headers=admin_headers).status_code == 404
