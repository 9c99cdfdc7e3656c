"""
Report endpoint tests against a seeded database.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from commission_api.api.reports import get_report_service
from commission_api.models import Collection, CommissionRule, Company, Representative, Sale, UserRole
from commission_api.services.reports import ReportService

from conftest import auth_headers


@pytest.fixture
async def seeded(db_session):
    """Two representatives with March figures and one February sale."""
    ahmed = Representative(name="Ahmed")
    omar = Representative(name="Omar")
    company = Company(name="Gulf Ready Mix")
    db_session.add_all([ahmed, omar, company])
    db_session.add(CommissionRule(
        category="cement",
        tier1_from=Decimal("0"), tier1_to=Decimal("70"), tier1_rate=Decimal("0.0025"),
        tier2_from=Decimal("71"), tier2_to=Decimal("99"), tier2_rate=Decimal("0.003"),
        tier3_from=Decimal("100"), tier3_rate=Decimal("0.004"),
    ))
    await db_session.flush()

    def sale(representative, sales, target, month=3):
        return Sale(
            representative_id=representative.id,
            company_id=company.id,
            category="cement",
            sales=Decimal(sales),
            target=Decimal(target),
            year=2024,
            month=month,
        )

    db_session.add_all([
        sale(ahmed, "150000", "100000"),
        sale(omar, "60000", "100000"),
        sale(ahmed, "1000", "1000", month=2),
        Collection(
            representative_id=ahmed.id,
            company_id=company.id,
            year=2024,
            month=3,
            amount=Decimal("80000"),
        ),
    ])
    await db_session.commit()
    return {"ahmed": ahmed.id, "omar": omar.id}


class TestReportsApi:
    async def test_full_report_for_period(self, client, users, seeded):
        response = await client.get(
            "/api/reports",
            params={"year": 2024, "month": 3},
            headers=auth_headers(users[UserRole.FINANCIAL_AUDITOR]),
        )

        assert response.status_code == 200
        report = response.json()["data"]
        assert report["period"] == {"year": 2024, "month": 3}
        assert report["summary"]["total_sales"] == 210000.0
        assert report["summary"]["total_target"] == 200000.0
        assert report["summary"]["total_commission"] == 640.0
        assert report["summary"]["total_collection"] == 80000.0
        assert report["summary"]["representatives_count"] == 2
        assert report["summary"]["achievement_percentage"] == 105.0

        names = [g["representative_name"] for g in report["representatives"]]
        assert names == ["Ahmed", "Omar"]
        assert report["representatives"][0]["sales"][0]["commission"] == {
            "tier1": 175.0,
            "tier2": 90.0,
            "tier3": 200.0,
            "total": 465.0,
        }

    async def test_full_report_all_time(self, client, users, seeded):
        response = await client.get(
            "/api/reports", headers=auth_headers(users[UserRole.ADMIN])
        )

        report = response.json()["data"]
        assert report["period"] == {"year": None, "month": None}
        # February sale adds 1000 * 0.7 * 0.0025 + 1000 * 0.3 * 0.003
        assert report["summary"]["total_commission"] == 642.65

    async def test_representative_report(self, client, users, seeded):
        response = await client.get(
            f"/api/reports/representative/{seeded['ahmed']}",
            params={"month": 3},
            headers=auth_headers(users[UserRole.ADMIN]),
        )

        report = response.json()["data"]
        assert report["representative_name"] == "Ahmed"
        assert report["summary"]["total_commission"] == 465.0
        assert report["summary"]["total_collection"] == 80000.0
        assert len(report["sales_details"]) == 1
        assert report["sales_details"][0]["company_name"] == "Gulf Ready Mix"
        assert len(report["collection_records"]) == 1

    async def test_representative_without_sales(self, client, users, seeded):
        response = await client.get(
            "/api/reports/representative/999",
            headers=auth_headers(users[UserRole.ADMIN]),
        )

        assert response.status_code == 200
        report = response.json()["data"]
        assert report["representative_name"] is None
        assert report["summary"]["total_sales"] == 0.0
        assert report["sales_details"] == []

    async def test_data_entry_cannot_read_reports(self, client, users):
        response = await client.get(
            "/api/reports", headers=auth_headers(users[UserRole.DATA_ENTRY])
        )
        assert response.status_code == 403

    async def test_invalid_month(self, client, users):
        response = await client.get(
            "/api/reports",
            params={"month": 13},
            headers=auth_headers(users[UserRole.ADMIN]),
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("url", ["/api/reports", "/api/reports/representative/1"])
    async def test_year_outside_recorded_range(self, client, users, url):
        response = await client.get(
            url, params={"year": 2031}, headers=auth_headers(users[UserRole.ADMIN])
        )
        assert response.status_code == 400

    async def test_storage_failure_is_500(self, app, client, users):
        class BrokenSource:
            async def fetch_sales_records(self, filters):
                raise OperationalError("SELECT", {}, Exception("connection lost"))

            async def fetch_collection_records(self, filters):
                return []

            async def fetch_all_commission_rules(self):
                return []

        app.dependency_overrides[get_report_service] = lambda: ReportService(BrokenSource())

        response = await client.get(
            "/api/reports", headers=auth_headers(users[UserRole.ADMIN])
        )

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Internal server error"
