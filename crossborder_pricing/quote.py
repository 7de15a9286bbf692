import logging
from typing import Optional, Union

from pydantic import BaseModel

from crossborder_pricing.factory import PriceSolverFactory
from crossborder_pricing.interface import (
    Category,
    FeeSchedule,
    PricingRequest,
    PricingResult,
    PriceBreakdown,
    SellerProfile,
)
from crossborder_pricing.resolver import FeeScheduleResolver

logger = logging.getLogger(__name__)


class Quote(BaseModel):
    """Cotação completa: schedule usado, resultado e breakdown"""
    country_code: str
    currency: str
    exchange_rate_to_cny: float
    schedule: FeeSchedule
    result: PricingResult
    breakdown: PriceBreakdown


def solve_price(schedule: FeeSchedule, request: PricingRequest, method: Optional[str] = None) -> PricingResult:
    """
    Resolve o preço de venda para um schedule já resolvido.

    Raises:
        DegenerateScheduleError: Soma das taxas proporcionais >= 1
        UnsupportedMethodError: Método desconhecido
    """
    solver = PriceSolverFactory.get(method)
    return solver.solve(schedule, request)


def quote_price(
        country_code: str,
        category: Union[Category, str],
        request: PricingRequest,
        seller: Optional[SellerProfile] = None,
        duty_rate: Optional[float] = None,
        method: Optional[str] = None,
        resolver: Optional[FeeScheduleResolver] = None,
) -> Quote:
    """Resolve o schedule do país e calcula o preço, com breakdown para exibição"""
    resolver = resolver or FeeScheduleResolver()
    profile = resolver.get_country(country_code)
    schedule = resolver.resolve(country_code, category, seller, duty_rate)

    solver = PriceSolverFactory.get(method)
    result = solver.solve(schedule, request)
    breakdown = solver.get_breakdown(result, notes=profile.disclosure_notes())

    logger.info(
        f"[{profile.code}] Cotação {solver.method}: custo={request.cost_base:.2f} "
        f"alvo={request.target_profit_rate:.2%} -> P={result.retail_price:.2f} {profile.currency}"
    )

    return Quote(
        country_code=profile.code,
        currency=profile.currency,
        exchange_rate_to_cny=profile.exchange_rate_to_cny,
        schedule=schedule,
        result=result,
        breakdown=breakdown,
    )
