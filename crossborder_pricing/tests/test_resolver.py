import pytest
from crossborder_pricing import (
    Category,
    SellerProfile,
    FeeScheduleResolver,
    UnknownCountryError,
    InvalidCategoryError,
    resolve_schedule,
)
from crossborder_pricing.countries import CountryProfile, CommissionTable


def test_category_specific_commission():
    """Tailândia tem comissão própria para eletrônicos"""
    electronics = resolve_schedule("TH", "electronics")
    other = resolve_schedule("TH", "other")

    assert electronics.commission_rate == pytest.approx(0.0535)
    assert other.commission_rate == pytest.approx(0.0642)
    assert electronics.category == Category.ELECTRONICS


def test_category_falls_back_to_other_rate():
    """Vietnã só define a taxa 'other'"""
    schedule = resolve_schedule("VN", Category.ELECTRONICS)

    assert schedule.commission_rate == pytest.approx(0.05)


def test_commission_range_uses_midpoint():
    """Filipinas cobra por subcategoria: usa o ponto médio da faixa"""
    schedule = resolve_schedule("PH", "electronics")

    assert schedule.commission_rate == pytest.approx((0.05 + 0.091) / 2)


def test_default_tier_uses_base_commission():
    """Malásia: tier padrão (BXP) usa a faixa base"""
    default = resolve_schedule("MY", "other")
    explicit_bxp = resolve_schedule("MY", "other", SellerProfile(tier="bxp"))

    assert default.commission_rate == pytest.approx((0.054 + 0.1026) / 2)
    assert explicit_bxp.commission_rate == pytest.approx(default.commission_rate)
    assert default.seller_tier == "bxp"


def test_non_default_tier_uses_tier_commission():
    """Malásia: vendedor fora do BXP paga a faixa do tier"""
    schedule = resolve_schedule("MY", "other", SellerProfile(tier="non_bxp"))

    assert schedule.commission_rate == pytest.approx((0.0918 + 0.1458) / 2)
    assert schedule.seller_tier == "non_bxp"


def test_unknown_tier_falls_back_to_base_commission():
    schedule = resolve_schedule("TH", "other", SellerProfile(tier="mall"))

    assert schedule.commission_rate == pytest.approx(0.0642)


def test_tier_commission_flat_rate_by_category():
    """Tier com taxas por categoria (sem faixa) também respeita o fallback"""
    profile = CountryProfile(
        code="XX",
        name="Test",
        name_cn="测试",
        currency="XXX",
        currency_symbol="X",
        exchange_rate_to_cny=1.0,
        commission=CommissionTable(other=0.05),
        tier_commission={"mall": CommissionTable(electronics=0.08, other=0.10)},
        transaction_fee_rate=0.02,
        vat_rate=0.10,
    )
    resolver = FeeScheduleResolver({"XX": profile})

    assert resolver.resolve("XX", "electronics", SellerProfile(tier="mall")).commission_rate == pytest.approx(0.08)
    assert resolver.resolve("XX", "other", SellerProfile(tier="mall")).commission_rate == pytest.approx(0.10)
    assert resolver.resolve("XX", "electronics").commission_rate == pytest.approx(0.05)


def test_growth_service_fee_and_cap():
    th = resolve_schedule("TH", "electronics")
    sg = resolve_schedule("SG", "other")

    assert th.growth_service_rate == pytest.approx(0.0535)
    assert th.growth_service_cap == 199
    assert sg.growth_service_rate == 0.0
    assert sg.growth_service_cap is None
    assert sg.growth_cap == float("inf")


def test_fixed_fees():
    th = resolve_schedule("TH", "other")

    assert th.infrastructure_fee == pytest.approx(1.07)
    assert th.fixed_fees == pytest.approx(1.07)


@pytest.mark.parametrize("orders, expected_fee", [(0, 0.0), (50, 0.0), (51, 3.0), (500, 3.0)])
def test_order_processing_waiver_boundary(orders, expected_fee):
    """Filipinas: 50 pedidos grátis por mês; o 51º paga a taxa cheia"""
    schedule = resolve_schedule("PH", "other", SellerProfile(monthly_order_count=orders))

    assert schedule.waiver.existing_seller_free_orders == 50
    assert schedule.effective_order_processing_fee == expected_fee
    assert schedule.order_processing_fee == 3.0


def test_new_seller_waiver():
    """Vendedor novo fica isento independente do volume"""
    flag = resolve_schedule("PH", "other", SellerProfile(is_new_seller=True, monthly_order_count=300))
    within_window = resolve_schedule("PH", "other", SellerProfile(days_on_platform=30, monthly_order_count=300))
    after_window = resolve_schedule("PH", "other", SellerProfile(days_on_platform=120, monthly_order_count=300))

    assert flag.waiver.new_seller_waived is True
    assert flag.effective_order_processing_fee == 0.0
    assert within_window.effective_order_processing_fee == 0.0
    assert after_window.waiver.new_seller_waived is False
    assert after_window.effective_order_processing_fee == 3.0


def test_country_without_processing_fee():
    schedule = resolve_schedule("TH", "other", SellerProfile(monthly_order_count=1000))

    assert schedule.effective_order_processing_fee == 0.0
    assert schedule.waiver.applies is False


def test_duty_rate_defaults_to_top_of_range():
    assert resolve_schedule("SG", "other").duty_rate == pytest.approx(0.05)
    assert resolve_schedule("TH", "other").duty_rate == pytest.approx(0.30)


def test_duty_rate_outside_range_is_accepted():
    schedule = resolve_schedule("SG", "other", duty_rate=0.20)

    assert schedule.duty_rate == pytest.approx(0.20)
    assert schedule.duty_rate_range == (0.0, 0.05)


def test_country_code_is_case_insensitive():
    schedule = resolve_schedule(" th ", "OTHER")

    assert schedule.country_code == "TH"
    assert schedule.category == Category.OTHER


def test_unknown_country_raises():
    with pytest.raises(UnknownCountryError) as exc_info:
        resolve_schedule("BR", "other")

    assert "não suportado" in str(exc_info.value)
    assert "TH" in exc_info.value.supported


def test_invalid_category_raises():
    with pytest.raises(InvalidCategoryError):
        resolve_schedule("TH", "toys")


def test_each_resolve_returns_a_fresh_schedule():
    first = resolve_schedule("PH", "other", SellerProfile(monthly_order_count=10))
    second = resolve_schedule("PH", "other", SellerProfile(monthly_order_count=100))

    assert first is not second
    assert first.effective_order_processing_fee == 0.0
    assert second.effective_order_processing_fee == 3.0
