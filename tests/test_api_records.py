"""
Representative, company, sales and collection endpoint tests.
"""

import pytest
from sqlalchemy import func, select

from commission_api.models import AuditAction, AuditLog, Sale, UserRole

from conftest import auth_headers


async def _create(client, url, payload, user):
    response = await client.post(url, json=payload, headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def directory(client, users):
    """A representative and a company created through the API."""
    admin = users[UserRole.ADMIN]
    representative = await _create(
        client,
        "/api/representatives",
        {"name": "Ahmed Saleh", "email": "ahmed@example.com", "phone": "+966 50 111 2233"},
        admin,
    )
    company = await _create(client, "/api/companies", {"name": "Gulf Ready Mix"}, admin)
    return representative, company


def _sale_payload(representative_id, company_id, **kwargs):
    payload = {
        "representative_id": representative_id,
        "company_id": company_id,
        "category": "cement",
        "sales": 150000,
        "target": 100000,
        "year": 2024,
        "month": 3,
    }
    payload.update(kwargs)
    return payload


# ── Representatives and companies ────────────────────────


class TestDirectory:
    async def test_representative_crud(self, client, users, directory):
        representative, _ = directory
        headers = auth_headers(users[UserRole.ADMIN])
        url = f"/api/representatives/{representative['id']}"

        assert representative["name"] == "Ahmed Saleh"

        response = await client.put(url, json={"name": "Ahmed S."}, headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Ahmed S."
        assert response.json()["data"]["email"] is None

        response = await client.get("/api/representatives", headers=headers)
        assert [r["name"] for r in response.json()["data"]] == ["Ahmed S."]

        response = await client.delete(url, headers=headers)
        assert response.status_code == 200

        response = await client.get(url, headers=headers)
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "A"},
            {"name": "Valid Name", "email": "not-an-email"},
            {"name": "Valid Name", "phone": "call me"},
        ],
    )
    async def test_representative_validation(self, client, users, payload):
        response = await client.post(
            "/api/representatives", json=payload, headers=auth_headers(users[UserRole.ADMIN])
        )
        assert response.status_code == 400

    async def test_company_rename(self, client, users, directory):
        _, company = directory
        response = await client.put(
            f"/api/companies/{company['id']}",
            json={"name": "Northern Builders"},
            headers=auth_headers(users[UserRole.SUPER_ADMIN]),
        )
        assert response.json()["data"]["name"] == "Northern Builders"

    async def test_data_entry_cannot_edit_directory(self, client, users):
        response = await client.post(
            "/api/companies",
            json={"name": "Acme"},
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 403


# ── Sales ────────────────────────────────────────────────


class TestSales:
    async def test_create_and_get(self, client, users, directory):
        representative, company = directory
        user = users[UserRole.DATA_ENTRY]

        sale = await _create(
            client, "/api/sales", _sale_payload(representative["id"], company["id"]), user
        )

        assert sale["representative_name"] == "Ahmed Saleh"
        assert sale["company_name"] == "Gulf Ready Mix"
        assert sale["sales"] == 150000.0
        assert sale["achievement_percentage"] == 150.0

        response = await client.get(f"/api/sales/{sale['id']}", headers=auth_headers(user))
        assert response.json()["data"]["id"] == sale["id"]

    async def test_create_is_audited(self, client, users, directory, session_factory):
        representative, company = directory
        user = users[UserRole.DATA_ENTRY]
        sale = await _create(
            client, "/api/sales", _sale_payload(representative["id"], company["id"]), user
        )

        async with session_factory() as session:
            result = await session.execute(
                select(AuditLog).where(
                    AuditLog.target_type == "sale",
                    AuditLog.action == AuditAction.CREATE,
                )
            )
            entry = result.scalar_one()

        assert entry.target_id == sale["id"]
        assert entry.user_id == user.id
        assert entry.action_metadata["sales"] == "150000"

    async def test_unknown_representative(self, client, users, directory):
        _, company = directory
        response = await client.post(
            "/api/sales",
            json=_sale_payload(999, company["id"]),
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400
        assert "999" in response.json()["error"]

    @pytest.mark.parametrize(
        "override",
        [
            {"sales": -5},
            {"target": -1},
            {"month": 13},
            {"year": 2019},
            {"year": 2031},
            {"category": ""},
            {"sales": "1000000000000"},
            {"target": "100.005"},
        ],
    )
    async def test_validation(self, client, users, directory, override):
        representative, company = directory
        response = await client.post(
            "/api/sales",
            json=_sale_payload(representative["id"], company["id"], **override),
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400

    async def test_auditor_cannot_create(self, client, users, directory):
        representative, company = directory
        response = await client.post(
            "/api/sales",
            json=_sale_payload(representative["id"], company["id"]),
            headers=auth_headers(users[UserRole.FINANCIAL_AUDITOR]),
        )
        assert response.status_code == 403

    async def test_update_and_delete(self, client, users, directory):
        representative, company = directory
        user = users[UserRole.ADMIN]
        sale = await _create(
            client, "/api/sales", _sale_payload(representative["id"], company["id"]), user
        )
        url = f"/api/sales/{sale['id']}"

        response = await client.put(
            url,
            json=_sale_payload(representative["id"], company["id"], sales=50000),
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        assert response.json()["data"]["sales"] == 50000.0

        response = await client.delete(url, headers=auth_headers(user))
        assert response.status_code == 200

        response = await client.get(url, headers=auth_headers(user))
        assert response.status_code == 404

    async def test_list_filters_and_pagination(self, client, users, directory):
        representative, company = directory
        user = users[UserRole.DATA_ENTRY]
        for month in (1, 2, 3):
            await _create(
                client,
                "/api/sales",
                _sale_payload(representative["id"], company["id"], month=month),
                user,
            )

        response = await client.get(
            "/api/sales", params={"per_page": 2}, headers=auth_headers(user)
        )
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "page": 1,
            "per_page": 2,
            "total": 3,
            "pages": 2,
            "has_more": True,
        }

        response = await client.get(
            "/api/sales", params={"month": 2}, headers=auth_headers(user)
        )
        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["month"] == 2

    @pytest.mark.parametrize("year", [2019, 2031])
    async def test_list_year_out_of_range(self, client, users, year):
        response = await client.get(
            "/api/sales",
            params={"year": year},
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400

    async def test_deleting_representative_removes_sales(self, client, users, directory, session_factory):
        representative, company = directory
        admin = users[UserRole.ADMIN]
        await _create(client, "/api/sales", _sale_payload(representative["id"], company["id"]), admin)

        response = await client.delete(
            f"/api/representatives/{representative['id']}", headers=auth_headers(admin)
        )
        assert response.status_code == 200

        async with session_factory() as session:
            assert await session.scalar(select(func.count(Sale.id))) == 0


# ── Collections ──────────────────────────────────────────


class TestCollections:
    async def test_crud(self, client, users, directory):
        representative, company = directory
        user = users[UserRole.DATA_ENTRY]
        payload = {
            "representative_id": representative["id"],
            "company_id": company["id"],
            "year": 2024,
            "month": 3,
            "amount": 25000.5,
        }

        collection = await _create(client, "/api/collections", payload, user)
        assert collection["amount"] == 25000.5
        assert collection["representative_name"] == "Ahmed Saleh"

        url = f"/api/collections/{collection['id']}"
        response = await client.put(url, json={**payload, "amount": 100}, headers=auth_headers(user))
        assert response.json()["data"]["amount"] == 100.0

        response = await client.get(
            "/api/collections",
            params={"representative_id": representative["id"]},
            headers=auth_headers(user),
        )
        assert response.json()["pagination"]["total"] == 1

        response = await client.delete(url, headers=auth_headers(user))
        assert response.status_code == 200

    async def test_negative_amount_rejected(self, client, users, directory):
        representative, company = directory
        response = await client.post(
            "/api/collections",
            json={
                "representative_id": representative["id"],
                "company_id": company["id"],
                "year": 2024,
                "month": 3,
                "amount": -1,
            },
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("amount", ["10.005", "1000000000000"])
    async def test_amount_beyond_money_precision_rejected(self, client, users, directory, amount):
        representative, company = directory
        user = users[UserRole.DATA_ENTRY]
        response = await client.post(
            "/api/collections",
            json={
                "representative_id": representative["id"],
                "company_id": company["id"],
                "year": 2024,
                "month": 3,
                "amount": amount,
            },
            headers=auth_headers(user),
        )
        assert response.status_code == 400

        response = await client.get("/api/collections", headers=auth_headers(user))
        assert response.json()["pagination"]["total"] == 0

    async def test_list_year_out_of_range(self, client, users):
        response = await client.get(
            "/api/collections",
            params={"year": 2031},
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400

    async def test_unknown_company(self, client, users, directory):
        representative, _ = directory
        response = await client.post(
            "/api/collections",
            json={
                "representative_id": representative["id"],
                "company_id": 999,
                "year": 2024,
                "month": 3,
                "amount": 10,
            },
            headers=auth_headers(users[UserRole.DATA_ENTRY]),
        )
        assert response.status_code == 400
