"""Tests for the schedule API routes."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def canonical_body() -> dict:
    return {
        "principal": "1000000",
        "rate_pct": "10",
        "rate_per": "month",
        "frequency": "monthly",
        "term_days": 90,
        "start_date": "2024-01-01",
        "method": "reducing_equal_installments",
    }


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestCreateSchedule:
    def test_canonical(self, client, canonical_body):
        resp = client.post("/api/v1/schedules", json=canonical_body)
        assert resp.status_code == 200
        data = resp.json()
        rows = data["installments"]
        assert len(rows) == 3
        assert rows[0]["due_date"] == "2024-01-31"
        assert Decimal(rows[0]["amount"]) == Decimal("402114.80")
        assert rows[0]["status"] == "pending"
        assert Decimal(rows[-1]["balance"]) == 0
        assert Decimal(data["total_payable"]) == Decimal("1206344.41")
        assert data["totals"]["total_payable"] == data["total_payable"]

    def test_flat(self, client, canonical_body):
        canonical_body["method"] = "Flat"
        data = client.post("/api/v1/schedules", json=canonical_body).json()
        assert Decimal(data["total_payable"]) == Decimal("1300000.00")
        assert {Decimal(r["interest"]) for r in data["installments"]} == {Decimal("100000.00")}

    def test_unknown_selectors_fall_back(self, client, canonical_body):
        expected = client.post("/api/v1/schedules", json=canonical_body).json()
        canonical_body.update(method="tbd", frequency="", rate_per=None)
        resp = client.post("/api/v1/schedules", json=canonical_body)
        assert resp.status_code == 200
        assert resp.json() == expected

    def test_malformed_date_rejected(self, client, canonical_body):
        canonical_body["start_date"] = "next tuesday"
        resp = client.post("/api/v1/schedules", json=canonical_body)
        assert resp.status_code == 422


class TestQuote:
    def test_quote_from_duration(self, client):
        resp = client.post("/api/v1/schedules/quote", json={
            "principal": "1000000",
            "rate_pct": "10",
            "duration_value": 3,
            "duration_unit": "months",
            "start_date": "2024-01-01",
            "fees_total": "3000",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["terms"] == {"term_days": 90, "number_of_payments": 3, "days_per_period": 30}
        assert Decimal(data["summary"]["total_payable"]) == Decimal("1209344.41")
        assert Decimal(data["summary"]["total_interest"]) == Decimal("206344.41")
        assert data["summary"]["end_date"] == "2024-03-31"
        assert len(data["schedule"]["installments"]) == 3


class TestTerms:
    def test_terms(self, client):
        resp = client.post("/api/v1/schedules/terms", json={
            "duration_value": 13,
            "duration_unit": "weeks",
            "frequency": "bi-weekly",
        })
        assert resp.status_code == 200
        assert resp.json() == {"term_days": 91, "number_of_payments": 7, "days_per_period": 14}


class TestTotals:
    def test_totals_match_generated(self, client, canonical_body):
        schedule = client.post("/api/v1/schedules", json=canonical_body).json()
        resp = client.post(
            "/api/v1/schedules/totals", json={"installments": schedule["installments"]}
        )
        assert resp.status_code == 200
        assert resp.json() == schedule["totals"]

    def test_unknown_status_rejected(self, client, canonical_body):
        schedule = client.post("/api/v1/schedules", json=canonical_body).json()
        schedule["installments"][0]["status"] = "forgiven"
        resp = client.post(
            "/api/v1/schedules/totals", json={"installments": schedule["installments"]}
        )
        assert resp.status_code == 422
