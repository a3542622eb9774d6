def test_create_upper_cases_code(client, admin_headers):
    response = client.post(
        "/api/companies",
        json={"code": " cl9 ", "name": "Client Nine", "type": "client"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["code"] == "CL9"


def test_duplicate_code_is_rejected(client, admin_headers, supplier):
    response = client.post(
        "/api/companies",
        json={"code": "sup1", "name": "Copycat", "type": "supplier"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Company code already exists."


def test_list_filters_by_type_and_query(client, admin_headers, supplier):
    client.post(
        "/api/companies",
        json={"code": "CL1", "name": "Buyer Ltd", "type": "client"},
        headers=admin_headers,
    )

    clients = client.get("/api/companies?type=client", headers=admin_headers).json()
    found = client.get("/api/companies?q=acme", headers=admin_headers).json()

    assert [row["code"] for row in clients] == ["CL1"]
    assert [row["code"] for row in found] == ["SUP1"]


def test_company_in_use_cannot_be_deleted(client, admin_headers, supplier):
    client.post(
        "/api/invoices",
        json={
            "kind": "purchase",
            "invoice_number": "P-9",
            "company_id": supplier.id,
            "invoice_date": "2026-05-01",
        },
        headers=admin_headers,
    )

    response = client.delete(f"/api/companies/{supplier.id}", headers=admin_headers)

    assert response.status_code == 400


def test_non_admin_cannot_write_companies(client, user_headers):
    response = client.post(
        "/api/companies",
        json={"code": "X1", "name": "Nope", "type": "supplier"},
        headers=user_headers,
    )

    assert response.status_code == 403
