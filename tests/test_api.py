"""Tests for the HTTP surface.

Covers:
- Health check
- /stats: rounding, regime selection, validation errors
- Deadline status, expense, goal and upcoming-payment reports
- ATECO seed catalogue
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from forfettario.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _snapshot(**overrides) -> dict:
    """Scenario snapshot: 10000 invoiced at 0.67, separata, 5%."""
    body = {
        "view_year": 2024,
        "today": "2025-01-15",
        "ateco_codes": [{"id": "1", "code": "62.01", "description": "Software", "coefficient": "0.67"}],
        "transactions": [
            {
                "id": 1,
                "date": "2024-01-01",
                "type": "income",
                "category": "business",
                "amount": "10000",
                "ateco_code_id": "1",
                "status": "active",
            }
        ],
        "fixed_debts": [],
        "contracts": [],
        "settings": {"tax_rate_type": "5%", "inps_type": "separata"},
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestStatsEndpoint:
    def test_scenario_rounded_to_cents(self, client):
        resp = client.post("/stats", json=_snapshot())
        assert resp.status_code == 200
        data = resp.json()
        assert data["flat_tax"] == "335.00"
        assert data["inps"] == "1757.41"
        assert data["reddito_imponibile"] == "6700.00"
        assert data["tax_rate_applied"] == "0.05"
        assert data["break_even_reachable"] is True
        assert [d["date"] for d in data["deadlines"]] == ["2024-06-30", "2024-11-30"]

    def test_artigiani_three_deadlines(self, client):
        body = _snapshot(settings={"inps_type": "artigiani"})
        data = client.post("/stats", json=body).json()
        assert data["inps"] == "4515.00"
        assert len(data["deadlines"]) == 3

    def test_fixed_debts(self, client):
        body = _snapshot(
            fixed_debts=[{"id": 1, "name": "Ufficio", "installment": "500", "start_month": 1, "start_year": 2024}]
        )
        data = client.post("/stats", json=body).json()
        assert data["total_fixed_debt_estimate"] == "6000.00"
        assert data["net_available_income"] == "1907.59"

    def test_invalid_snapshot(self, client):
        body = _snapshot()
        body["transactions"][0]["amount"] = "-5"
        resp = client.post("/stats", json=body)
        assert resp.status_code == 422

    def test_missing_view_year(self, client):
        body = _snapshot()
        del body["view_year"]
        assert client.post("/stats", json=body).status_code == 422


class TestDeadlineEndpoint:
    def test_statuses(self, client):
        body = _snapshot(
            transactions=_snapshot()["transactions"]
            + [
                {
                    "id": 2,
                    "date": "2024-06-30",
                    "type": "expense",
                    "category": "tax",
                    "amount": "840",
                    "status": "active",
                }
            ]
        )
        states = client.post("/stats/deadlines", json=body).json()
        assert [s["status"] for s in states] == ["paid", "overdue"]


class TestReports:
    def test_expense_report(self, client):
        body = _snapshot(
            transactions=[
                {"id": 1, "date": "2024-03-01", "type": "expense", "category": "personal", "amount": "300", "tags": "spesa"},
                {"id": 2, "date": "2024-03-02", "type": "expense", "category": "business", "amount": "100", "tags": ""},
            ],
            settings={"expense_goals": {"Spesa": "250"}},
        )
        rows = client.post("/reports/expenses", json=body).json()
        assert rows[0]["tag"] == "Spesa"
        assert rows[0]["over_budget"] is True
        assert rows[1]["tag"] == "Non categorizzato"

    def test_goal_report(self, client):
        body = _snapshot(
            transactions=[
                {"id": 1, "date": "2024-03-01", "type": "expense", "category": "personal", "amount": "120", "tags": "casa,bollette"},
                {"id": 2, "date": "2023-03-01", "type": "expense", "category": "personal", "amount": "90", "tags": "bollette"},
                {"id": 3, "date": "2024-04-01", "type": "expense", "category": "personal", "amount": "5", "tags": None},
            ],
            settings={"expense_goals": {"bollette": "100"}},
        )
        resp = client.post("/reports/goals", json=body)
        assert resp.status_code == 200
        rows = {r["tag"]: r for r in resp.json()}
        assert set(rows) == {"bollette", "casa"}
        assert rows["bollette"]["over_budget"] is True
        assert rows["bollette"]["previous"] == "90"
        assert rows["casa"]["budget"] == "0"

    def test_upcoming_report(self, client):
        body = _snapshot(
            today="2024-06-10",
            fixed_debts=[{"id": 7, "name": "CRM", "installment": "49.99", "debit_day": 15, "start_year": 2024}],
        )
        rows = client.post("/reports/upcoming", json=body).json()
        assert rows == [
            {"debt_id": 7, "name": "CRM", "installment": "49.99", "due_date": "2024-06-15", "is_paid": False}
        ]


class TestAtecoSeed:
    def test_catalogue(self, client):
        codes = client.get("/ateco/seed").json()
        assert len(codes) == 128
        assert {"id", "code", "description", "coefficient"} <= set(codes[0])
