import logging
from typing import Mapping, Optional, Union

from crossborder_pricing.countries import (
    COUNTRIES,
    CommissionTable,
    CountryProfile,
    normalize_country_code,
)
from crossborder_pricing.errors import InvalidCategoryError, UnknownCountryError
from crossborder_pricing.interface import Category, FeeSchedule, FeeWaiver, SellerProfile

logger = logging.getLogger(__name__)


def parse_category(category: Union[Category, str]) -> Category:
    """Converte string (case-insensitive) em Category"""
    if isinstance(category, Category):
        return category
    try:
        return Category(str(category).strip().lower())
    except ValueError:
        valid = ", ".join(c.value for c in Category)
        raise InvalidCategoryError(
            f"Categoria '{category}' inválida. Categorias disponíveis: {valid}"
        )


class FeeScheduleResolver:
    """
    Resolve a tabela de taxas concreta para país, categoria e vendedor.

    Toda a política específica de cada país fica nos dados (CountryProfile);
    aqui só existem as regras de seleção.
    """

    def __init__(self, countries: Optional[Mapping[str, CountryProfile]] = None):
        self.countries = COUNTRIES if countries is None else countries

    def get_country(self, country_code: str) -> CountryProfile:
        code = normalize_country_code(country_code)
        profile = self.countries.get(code)
        if profile is None:
            raise UnknownCountryError(country_code, list(self.countries.keys()))
        return profile

    def resolve(
            self,
            country_code: str,
            category: Union[Category, str],
            seller: Optional[SellerProfile] = None,
            duty_rate: Optional[float] = None,
    ) -> FeeSchedule:
        """
        Monta o FeeSchedule de uma cotação.

        Args:
            country_code: Código ISO do país (case-insensitive)
            category: electronics | other
            seller: Atributos do vendedor (tier, novo vendedor, pedidos no mês)
            duty_rate: Alíquota de importação escolhida; padrão = teto da faixa do país

        Returns:
            FeeSchedule novo (nunca compartilhado)

        Raises:
            UnknownCountryError: País sem tabela
            InvalidCategoryError: Categoria fora de {electronics, other}
        """
        profile = self.get_country(country_code)
        cat = parse_category(category)
        seller = seller or SellerProfile()
        tier = seller.tier or profile.default_seller_tier

        commission_rate = self.commission_rate(profile, cat, tier)
        growth_rate, growth_cap = self.growth_service(profile, cat)

        low, high = profile.duty_rate_range
        if duty_rate is None:
            duty_rate = high
        elif not low <= duty_rate <= high:
            logger.warning(
                f"[{profile.code}] Alíquota de importação {duty_rate:.4f} fora da faixa "
                f"{low:.2f}-{high:.2f}; usando valor informado"
            )

        schedule = FeeSchedule(
            country_code=profile.code,
            category=cat,
            seller_tier=tier,
            commission_rate=commission_rate,
            growth_service_rate=growth_rate,
            growth_service_cap=growth_cap,
            transaction_fee_rate=profile.transaction_fee_rate,
            vat_rate=profile.vat_rate,
            duty_rate=duty_rate,
            duty_rate_range=profile.duty_rate_range,
            infrastructure_fee=profile.infrastructure_fee,
            order_processing_fee=profile.order_processing_fee,
            waiver=self.resolve_waiver(profile, seller),
        )
        logger.debug(
            f"[{profile.code}] Schedule resolvido: categoria={cat.value}, tier={tier}, "
            f"comissão={commission_rate:.4f}, crescimento={growth_rate:.4f} (teto={growth_cap}), "
            f"isento={schedule.waiver.applies}"
        )
        return schedule

    def commission_rate(self, profile: CountryProfile, category: Category, tier: str) -> float:
        table = profile.commission
        if tier != profile.default_seller_tier and tier in profile.tier_commission:
            table = profile.tier_commission[tier]
        return self._rate_from_table(table, category)

    @staticmethod
    def _rate_from_table(table: CommissionTable, category: Category) -> float:
        # Faixa por subcategoria: usa o ponto médio como aproximação
        if table.rate_range is not None:
            low, high = table.rate_range
            return (low + high) / 2

        rate = getattr(table, category.value)
        if rate is None:
            rate = table.other
        return rate if rate is not None else 0.0

    @staticmethod
    def growth_service(profile: CountryProfile, category: Category):
        growth = profile.growth_service
        if growth is None:
            return 0.0, None

        rate = getattr(growth, category.value)
        if rate is None:
            rate = growth.other
        return (rate if rate is not None else 0.0), growth.cap

    @staticmethod
    def resolve_waiver(profile: CountryProfile, seller: SellerProfile) -> FeeWaiver:
        policy = profile.processing_fee_waiver
        if policy is None:
            return FeeWaiver()

        new_seller_waived = policy.new_seller and seller.is_new_within(policy.new_seller_days)
        free_orders = policy.existing_seller_free_orders if policy.existing_seller else 0

        return FeeWaiver(
            new_seller_waived=new_seller_waived,
            existing_seller_free_orders=free_orders,
            orders_this_period=seller.monthly_order_count,
        )


_default_resolver = FeeScheduleResolver()


def resolve_schedule(
        country_code: str,
        category: Union[Category, str],
        seller: Optional[SellerProfile] = None,
        duty_rate: Optional[float] = None,
) -> FeeSchedule:
    """Resolve o FeeSchedule usando a tabela de países embutida"""
    return _default_resolver.resolve(country_code, category, seller, duty_rate)
