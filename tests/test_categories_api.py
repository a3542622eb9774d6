from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from invoicedesk.models import Invoice, InvoiceKindEnum, InvoiceLine, ProductCategory
from invoicedesk.services.amounts import recompute


def _create(client, headers, name, parent_id=None):
    response = client.post(
        "/api/categories",
        json={"name": name, "parent_id": parent_id},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_non_admin_cannot_create_category(client, db_session, user_headers):
    response = client.post(
        "/api/categories", json={"name": "Goods"}, headers=user_headers
    )

    assert response.status_code == 403
    count = db_session.execute(select(func.count(ProductCategory.id))).scalar()
    assert count == 0


def test_missing_identity_is_rejected(client):
    response = client.get("/api/categories")

    assert response.status_code == 401


def test_tree_endpoint_nests_children(client, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    _create(client, admin_headers, "Food", goods)
    _create(client, admin_headers, "Services")

    response = client.get("/api/categories", headers=admin_headers)

    assert response.status_code == 200
    roots = response.json()
    assert [root["name"] for root in roots] == ["Goods", "Services"]
    assert [child["name"] for child in roots[0]["children"]] == ["Food"]
    assert roots[1]["children"] == []


def test_flat_endpoint_reports_depth(client, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    food = _create(client, admin_headers, "Food", goods)
    _create(client, admin_headers, "Dairy", food)

    response = client.get("/api/categories/flat", headers=admin_headers)

    assert [(row["name"], row["depth"]) for row in response.json()] == [
        ("Goods", 0),
        ("Food", 1),
        ("Dairy", 2),
    ]


def test_create_with_unknown_parent(client, admin_headers):
    response = client.post(
        "/api/categories",
        json={"name": "Orphan", "parent_id": 999},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Parent category does not exist."


def test_blank_name_is_rejected(client, admin_headers):
    response = client.post(
        "/api/categories", json={"name": "   "}, headers=admin_headers
    )

    assert response.status_code == 422


def test_reparent_under_descendant_is_rejected(client, db_session, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    food = _create(client, admin_headers, "Food", goods)

    response = client.put(
        f"/api/categories/{goods}",
        json={"name": "Goods", "parent_id": food},
        headers=admin_headers,
    )

    assert response.status_code == 400
    category = db_session.get(ProductCategory, goods)
    assert category.parent_id is None


def test_parent_options_exclude_subtree(client, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    food = _create(client, admin_headers, "Food", goods)
    _create(client, admin_headers, "Dairy", food)
    _create(client, admin_headers, "Services")

    response = client.get(
        f"/api/categories/{food}/parent-options", headers=admin_headers
    )

    assert [row["name"] for row in response.json()] == ["Goods", "Services"]


def test_delete_cascades_and_unlinks_lines(client, db_session, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    food = _create(client, admin_headers, "Food", goods)
    dairy = _create(client, admin_headers, "Dairy", food)
    services = _create(client, admin_headers, "Services")

    invoice = Invoice(
        kind=InvoiceKindEnum.PURCHASE,
        invoice_number="P-1",
        invoice_date=date(2026, 1, 5),
        net_total=Decimal("0"),
        vat_total=Decimal("0"),
        gross_total=Decimal("0"),
    )
    invoice.lines.append(
        recompute(
            InvoiceLine(
                description="Milk",
                quantity=Decimal("1"),
                unit_price=Decimal("1.20"),
                vat_rate=Decimal("21"),
                category_id=dairy,
            )
        )
    )
    db_session.add(invoice)
    db_session.commit()
    line_id = invoice.lines[0].id

    response = client.delete(f"/api/categories/{goods}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["deleted"] == sorted([goods, food, dairy])
    db_session.expire_all()
    remaining = db_session.execute(select(ProductCategory.id)).scalars().all()
    assert remaining == [services]
    assert db_session.get(InvoiceLine, line_id).category_id is None


def test_tree_page_toggles_expansion(client, admin_headers):
    goods = _create(client, admin_headers, "Goods")
    _create(client, admin_headers, "Groceries", goods)

    collapsed = client.get("/categories/tree", headers=admin_headers)
    expanded = client.get(f"/categories/tree?toggle={goods}", headers=admin_headers)
    collapsed_again = client.get(
        f"/categories/tree?expanded={goods}&toggle={goods}", headers=admin_headers
    )

    assert collapsed.status_code == 200
    assert "Goods" in collapsed.text
    assert "Groceries" not in collapsed.text
    assert "Groceries" in expanded.text
    assert "Groceries" not in collapsed_again.text
