import logging

from crossborder_pricing.interface import FeeSchedule, PricingRequest, PricingResult
from .base import BasePriceSolver

logger = logging.getLogger(__name__)


class PiecewisePriceSolver(BasePriceSolver):
    """
    Solver analítico por regimes.

    A receita líquida é linear em P, exceto no ponto em que a taxa de
    crescimento atinge o teto. Resolve os dois regimes (sem teto / com teto)
    diretamente e fica com a raiz que satisfaz a condição do seu regime.
    """

    def __init__(self):
        super().__init__(method="piecewise")

    def _constant_terms(self, schedule: FeeSchedule, request: PricingRequest) -> float:
        # Termos que não dependem de P, do lado da receita alvo
        return (
            request.target_revenue
            + schedule.fixed_fees
            + self.import_tax(schedule, request)
            - request.seller_discount * schedule.commission_rate
            - (request.seller_discount + request.platform_subsidy) * schedule.transaction_fee_rate
        )

    def uncapped_root(self, schedule: FeeSchedule, request: PricingRequest) -> float:
        numerator = (
            self._constant_terms(schedule, request)
            - request.seller_discount * schedule.growth_service_rate
        )
        return numerator / schedule.linear_denominator

    def capped_root(self, schedule: FeeSchedule, request: PricingRequest) -> float:
        slope = schedule.linear_denominator + schedule.growth_service_rate
        return (self._constant_terms(schedule, request) + schedule.growth_cap) / slope

    def solve(self, schedule: FeeSchedule, request: PricingRequest) -> PricingResult:
        self.check_schedule(schedule)

        price = self.uncapped_root(schedule, request)
        discounted = price - request.seller_discount

        if schedule.growth_service_rate > 0 and discounted * schedule.growth_service_rate > schedule.growth_cap:
            capped = self.capped_root(schedule, request)
            if (capped - request.seller_discount) * schedule.growth_service_rate >= schedule.growth_cap:
                logger.debug(
                    f"[{schedule.country_code}] Teto da taxa de crescimento atingido: "
                    f"P={capped:.4f} (sem teto seria {price:.4f})"
                )
                price = capped

        return self.evaluate(schedule, request, price)
