"""Tests for the API endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.routes import router


@pytest.fixture
def app() -> FastAPI:
    """Create a test app with the router but no lifespan or auth."""
    test_app = FastAPI()
    test_app.include_router(router)
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    """GET /health returns ok status."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_tiers(client: TestClient) -> None:
    response = client.get("/tiers")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 6
    assert data[0] == {
        "level": "Low",
        "min": 0.0,
        "max": 9999.0,
        "rate_basic": 0.05,
        "rate_bundle": 0.08,
    }
    assert data[-1]["max"] is None


def test_calculate(client: TestClient) -> None:
    response = client.post("/calculate", json={
        "annual_premium": 25000,
        "currency": "USD",
        "has_bundle": True,
        "prepayment_years": 1,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["level"] == "Standard"
    assert data["rebate_amount"] == 3250.0
    assert data["prepayment_interest"] == pytest.approx(1075.0)
    assert data["voucher_value"] == 2500.0
    assert data["total_first_year_benefit"] == pytest.approx(6825.0)
    assert data["gap_to_next_tier"] == 5000.0


def test_calculate_defaults(client: TestClient) -> None:
    """Currency defaults to USD, bundle on, 1-year prepayment."""
    response = client.post("/calculate", json={"annual_premium": 0})
    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "USD"
    assert data["prepayment_years"] == 1
    assert data["next_tier"]["level"] == "Standard"


@pytest.mark.parametrize(
    "body",
    [
        {"annual_premium": -1},
        {"annual_premium": 1000, "prepayment_years": 2},
        {"annual_premium": 1000, "currency": "EUR"},
        {},
    ],
)
def test_calculate_rejects_bad_input(client: TestClient, body: dict) -> None:  # type: ignore[type-arg]
    response = client.post("/calculate", json=body)
    assert response.status_code == 422


def test_calculate_huge_premium(client: TestClient) -> None:
    """Very large but finite premiums are answered, not a 500."""
    response = client.post("/calculate", json={"annual_premium": 1e32, "currency": "HKD"})
    assert response.status_code == 200
    data = response.json()
    assert data["level"] == "VVIP"
    assert data["voucher_value"] == 22500.0
    assert data["next_tier"] is None


def test_schedule(client: TestClient) -> None:
    response = client.post("/schedule", json={
        "annual_premium": 400000,
        "currency": "HKD",
        "has_bundle": False,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["current_premium_usd"] == 50000.0
    assert data["current_level"] == "High"
    assert len(data["points"]) == 7


def test_pitch(app: FastAPI, client: TestClient) -> None:
    """POST /pitch calculates and delegates to the advisor."""
    mock_advisor = AsyncMock()
    mock_advisor.generate.return_value = "快啲升級啦！"
    app.state.advisor = mock_advisor

    response = client.post("/pitch", json={"annual_premium": 25000})

    assert response.status_code == 200
    data = response.json()
    assert data["pitch"] == "快啲升級啦！"
    assert data["result"]["level"] == "Standard"
    result_arg, bundle_arg = mock_advisor.generate.call_args.args
    assert result_arg.gap_to_next_tier == 5000
    assert bundle_arg is True
