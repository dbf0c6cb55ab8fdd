"""
API tests for the projection endpoints.

Run: python -m pytest propcast/tests/test_api_projections.py -v
"""

import pytest
from fastapi.testclient import TestClient

from propcast.api.config import ApiConfig, get_config
from propcast.api.main import app
from propcast.api.routes import projections as projection_routes
from propcast.utils.error_utils import PropcastError


client = TestClient(app)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

LOAN_PAYLOAD = {
    "id": "main",
    "type": "principal_interest",
    "principal_amount": 400000,
    "interest_rate_annual_pct": 6.0,
    "term_years": 30,
    "io_years": 0,
}

PROPERTY_PAYLOAD = {
    "name": "Test Unit",
    "current_value": 550000,
    "total_annual_income": 25000,
    "total_annual_outgoings": 8000,
    "loans": [LOAN_PAYLOAD],
}

ASSUMPTIONS_PAYLOAD = {
    "rent_growth_pct": 3,
    "capital_growth_pct": 5,
    "inflation_rate_pct": 2.5,
    "tax_rate_pct": 30,
    "medicare_levy_pct": 0,
    "vacancy_rate_pct": 0,
    "pm_fee_rate_pct": 0,
    "depreciation_rate_pct": 2.5,
    "discount_rate_pct": 8,
}


def _request(**overrides):
    payload = {
        "property": PROPERTY_PAYLOAD,
        "assumptions": ASSUMPTIONS_PAYLOAD,
        "start_year": 2025,
        "current_year": 2025,
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["service"] == "PropCast API"


def test_projection_health():
    response = client.get("/api/projections/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


class TestRunProjection:

    def test_full_projection(self):
        response = client.post("/api/projections/", json=_request())
        assert response.status_code == 200
        data = response.json()

        assert len(data["projections"]) == 30
        year0 = data["projections"][0]
        assert year0["year"] == 2025
        assert year0["property_value"] == pytest.approx(550000)
        assert year0["taxable_income"] < 0
        assert year0["tax"] == 0
        assert year0["tax_benefit"] > 0

        kpis = data["kpis"]
        assert kpis["dscr"] == pytest.approx(0.59, abs=0.01)
        assert kpis["dscr_display"] == "0.59x"
        assert kpis["lvr"] == pytest.approx(72.73, abs=0.01)
        assert kpis["lvr_display"] == "72.7%"
        assert len(kpis["milestones"]) == 5

        assert data["loan_summary"]["total_principal"] == 400000
        assert data["loan_summary"]["loan_count"] == 1
        assert data["key_metrics"]["monthly_rent"] == pytest.approx(25000 / 12)
        assert data["total_cash_invested"] == 150000
        assert "computed_at" in data

    def test_default_assumptions(self):
        response = client.post("/api/projections/", json={"property": PROPERTY_PAYLOAD, "start_year": 2025})
        assert response.status_code == 200
        year0 = response.json()["projections"][0]
        # 5% vacancy by default
        assert year0["vacancy"] == pytest.approx(1250)

    def test_no_loans(self):
        property_payload = dict(PROPERTY_PAYLOAD, loans=[])
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 200
        data = response.json()
        assert data["kpis"]["dscr"] is None
        assert data["kpis"]["dscr_display"] == "N/A"
        assert data["loan_summary"]["has_loans"] is False

    def test_custom_horizon(self):
        response = client.post("/api/projections/", json=_request(horizon_years=10))
        assert response.status_code == 200
        assert len(response.json()["projections"]) == 10

    def test_combine_loans_flag(self):
        second = dict(LOAN_PAYLOAD, id="second", principal_amount=50000, interest_rate_annual_pct=8.0)
        property_payload = dict(PROPERTY_PAYLOAD, loans=[LOAN_PAYLOAD, second])
        separate = client.post("/api/projections/", json=_request(property=property_payload)).json()
        combined = client.post(
            "/api/projections/", json=_request(property=property_payload, combine_loans=True)
        ).json()
        assert separate["projections"][0]["interest_rate_pct"] > 6.0
        assert combined["projections"][0]["interest_rate_pct"] == pytest.approx(6.0)

    def test_horizon_above_configured_max(self):
        app.dependency_overrides[get_config] = lambda: _config_with_max(20)
        try:
            response = client.post("/api/projections/", json=_request(horizon_years=25))
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 400


def _config_with_max(max_years):
    config = ApiConfig()
    config.max_horizon_years = max_years
    return config


class TestValidation:

    def test_value_out_of_range(self):
        property_payload = dict(PROPERTY_PAYLOAD, current_value=200_000_000)
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 422

    def test_negative_rent(self):
        property_payload = dict(PROPERTY_PAYLOAD, total_annual_income=-1)
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 422

    def test_loan_term_out_of_range(self):
        loan = dict(LOAN_PAYLOAD, term_years=60)
        property_payload = dict(PROPERTY_PAYLOAD, loans=[loan])
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 422

    def test_rate_out_of_range(self):
        assumptions = dict(ASSUMPTIONS_PAYLOAD, tax_rate_pct=120)
        response = client.post("/api/projections/", json=_request(assumptions=assumptions))
        assert response.status_code == 422

    def test_io_period_longer_than_term(self):
        loan = dict(LOAN_PAYLOAD, term_years=10, io_years=10)
        property_payload = dict(PROPERTY_PAYLOAD, loans=[loan])
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 422

    def test_interest_only_loan_accepts_long_io(self):
        loan = dict(LOAN_PAYLOAD, type="interest_only", term_years=10, io_years=10)
        property_payload = dict(PROPERTY_PAYLOAD, loans=[loan])
        response = client.post("/api/projections/", json=_request(property=property_payload))
        assert response.status_code == 200

    def test_missing_property(self):
        response = client.post("/api/projections/", json={"assumptions": ASSUMPTIONS_PAYLOAD})
        assert response.status_code == 422


def test_engine_error_maps_to_422(monkeypatch):
    def failing_projection(*args, **kwargs):
        raise PropcastError("Projection horizon must be positive", {"error_type": "ValueError"})

    monkeypatch.setattr(projection_routes, "project_property_cashflow", failing_projection)
    response = client.post("/api/projections/", json=_request())
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Projection failed"
    assert body["type"] == "ValueError"


# ---------------------------------------------------------------------------
# Chart series and loan summary
# ---------------------------------------------------------------------------


def test_debt_paydown():
    response = client.post("/api/projections/debt-paydown", json=_request(years_to_show=15))
    assert response.status_code == 200
    points = response.json()
    assert len(points) == 15
    assert points[0]["year"] == 2025
    assert points[0]["principal_balance"] < 400000
    assert points[0]["total_debt"] == pytest.approx(points[0]["principal_balance"] + points[0]["interest_balance"])


def test_growth_analysis():
    response = client.post("/api/projections/growth-analysis", json=_request(years_to_show=10))
    assert response.status_code == 200
    points = response.json()
    assert len(points) == 10
    assert points[0]["capital_growth"] == 0
    assert points[1]["capital_growth_pct"] == pytest.approx(5.0)


def test_growth_analysis_without_investment():
    property_payload = dict(PROPERTY_PAYLOAD, total_cash_invested=0)
    response = client.post("/api/projections/growth-analysis", json=_request(property=property_payload))
    assert response.status_code == 200
    assert response.json() == []


def test_loan_summary():
    io_loan = dict(LOAN_PAYLOAD, id="io", type="interest_only", principal_amount=100000, interest_rate_annual_pct=8.0)
    response = client.post("/api/projections/loan-summary", json=dict(PROPERTY_PAYLOAD, loans=[LOAN_PAYLOAD, io_loan]))
    assert response.status_code == 200
    summary = response.json()
    assert summary["total_principal"] == 500000
    assert summary["loan_count"] == 2
    assert summary["total_monthly_payment"] == pytest.approx(2398.20 + 100000 * 0.08 / 12, abs=0.01)
    assert summary["weighted_rate_pct"] == pytest.approx(6.4)
