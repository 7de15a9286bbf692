"""
Testes de integração para endpoints de pricing.

Para executar:
    pytest crossborder_pricing/tests/test_endpoints.py -v
"""
import pytest
from fastapi.testclient import TestClient
from app import app

client = TestClient(app)


def test_pricing_quote_success():
    """Testa endpoint POST /pricing/quote com dados válidos"""
    response = client.post(
        "/pricing/quote",
        json={
            "country": "TH",
            "category": "other",
            "purchase_cost": 20.0,
            "logistics_cost": 5.5,
            "target_profit_rate": 0.30,
            "duty_rate": 0.30,
        }
    )

    assert response.status_code == 200
    data = response.json()

    assert data["country"] == "TH"
    assert data["currency"] == "THB"
    assert "schedule" in data
    assert "result" in data
    assert "breakdown" in data
    assert abs(data["result"]["net_revenue"] - 33.15) < 0.01
    assert data["schedule"]["growth_service_cap"] == 199
    assert isinstance(data["breakdown"]["steps"], list)


def test_pricing_quote_converts_cny_costs():
    """Custos em CNY são convertidos pela taxa de câmbio do país"""
    payload = {
        "country": "TH",
        "purchase_cost": 20.0,
        "logistics_cost": 5.5,
        "target_profit_rate": 0.30,
        "cost_currency": "CNY",
    }
    response = client.post("/pricing/quote", json=payload)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["costs"]["purchase_cost"] == pytest.approx(100.0)
    assert result["costs"]["total_cost"] == pytest.approx(127.5)


def test_pricing_quote_with_seller_profile():
    response = client.post(
        "/pricing/quote",
        json={
            "country": "MY",
            "purchase_cost": 50.0,
            "target_profit_rate": 0.20,
            "seller": {"tier": "non_bxp"},
            "method": "iterative",
        }
    )

    assert response.status_code == 200
    data = response.json()
    assert data["schedule"]["commission_rate"] == pytest.approx(0.1188)
    assert data["result"]["method"] == "iterative"


def test_pricing_quote_invalid_country():
    """Testa endpoint com país inválido"""
    response = client.post(
        "/pricing/quote",
        json={"country": "XX", "purchase_cost": 10.0, "target_profit_rate": 0.3}
    )

    assert response.status_code == 422
    data = response.json()
    assert "supported_countries" in data["detail"]


def test_pricing_quote_invalid_category():
    response = client.post(
        "/pricing/quote",
        json={"country": "TH", "category": "toys", "purchase_cost": 10.0, "target_profit_rate": 0.3}
    )

    assert response.status_code == 422


def test_pricing_evaluate_given_price():
    """Testa endpoint POST /pricing/evaluate com preço informado"""
    response = client.post(
        "/pricing/evaluate",
        json={
            "country": "TH",
            "purchase_cost": 20.0,
            "logistics_cost": 5.5,
            "retail_price": 100.0,
            "duty_rate": 0.30,
        }
    )

    assert response.status_code == 200
    data = response.json()
    assert data["retail_price"] == 100.0
    assert data["taxes"]["sales_vat"] == pytest.approx(100.0 / 1.07 * 0.07)
    assert data["net_profit"] > 0


def test_pricing_policies():
    """Testa endpoint GET /pricing/policies"""
    response = client.get("/pricing/policies")

    assert response.status_code == 200
    data = response.json()

    assert data["supported_countries"] == ["TH", "VN", "PH", "MY", "SG"]
    assert "piecewise" in data["supported_methods"]
    assert data["policies"]["MY"]["seller_tiers"] == ["bxp", "non_bxp"]
    assert data["policies"]["SG"]["vat_name"] == "GST"


def test_pricing_validate_success():
    response = client.post(
        "/pricing/validate",
        json={"country": "PH", "purchase_cost": 100.0}
    )

    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_pricing_validate_invalid():
    """Testa endpoint POST /pricing/validate com dados inválidos"""
    response = client.post(
        "/pricing/validate",
        json={"country": "BR", "category": "toys", "purchase_cost": -5.0, "method": "bisection"}
    )

    assert response.status_code == 422
    data = response.json()
    assert "errors" in data["detail"]
    assert len(data["detail"]["errors"]) >= 4
