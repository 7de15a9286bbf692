import pytest
from pydantic import ValidationError

from crossborder_pricing.config import Settings


def test_default_cost_currency_accepts_local_and_cny():
    assert Settings(default_cost_currency="local").default_cost_currency == "local"
    assert Settings(default_cost_currency="CNY").default_cost_currency == "CNY"


def test_default_cost_currency_rejects_unknown_currency(monkeypatch):
    """Moeda fora de local/CNY vinda do ambiente é rejeitada"""
    monkeypatch.setenv("DEFAULT_COST_CURRENCY", "usd")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_only_expose_pricing_fields():
    fields = set(Settings.model_fields)

    assert "app_slug" not in fields
    assert {"solver_method", "max_iterations", "convergence_tolerance", "default_cost_currency"} <= fields
