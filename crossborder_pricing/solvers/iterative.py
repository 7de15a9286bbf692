import logging
from typing import Optional

from crossborder_pricing.interface import FeeSchedule, PricingRequest, PricingResult
from .base import BasePriceSolver

logger = logging.getLogger(__name__)


class IterativePriceSolver(BasePriceSolver):
    """
    Solver por iteração de ponto fixo (Newton com inclinação linear).

    Características:
    - Semente: solução fechada do sistema linear sem teto
    - Ajuste: P += (receita_alvo - receita_real) / denominador_linear
    - Para quando |receita_real - receita_alvo| < tolerância
    - No máximo max_iterations ajustes (limite de segurança)
    """

    def __init__(self, max_iterations: Optional[int] = None, tolerance: Optional[float] = None):
        super().__init__(method="iterative", max_iterations=max_iterations, tolerance=tolerance)

    def seed_price(self, schedule: FeeSchedule, request: PricingRequest) -> float:
        """Preço inicial: exato quando o teto não atua e não há desconto/subsídio"""
        rate_on_discount = schedule.commission_rate + schedule.growth_service_rate
        numerator = (
            request.target_revenue
            + schedule.fixed_fees
            + self.import_tax(schedule, request)
            + request.seller_discount * rate_on_discount
        )
        return numerator / schedule.linear_denominator

    def solve(self, schedule: FeeSchedule, request: PricingRequest) -> PricingResult:
        self.check_schedule(schedule)

        denominator = schedule.linear_denominator
        target = request.target_revenue
        price = self.seed_price(schedule, request)

        iterations = 0
        converged = False
        for _ in range(self.max_iterations):
            revenue = self.net_revenue_at(schedule, request, price)
            residual = target - revenue
            if abs(residual) < self.tolerance:
                converged = True
                break
            price += residual / denominator
            iterations += 1
            logger.debug(f"Iteração {iterations}: P={price:.4f}, resíduo={residual:.4f}")
        else:
            converged = abs(target - self.net_revenue_at(schedule, request, price)) < self.tolerance

        if not converged:
            logger.warning(
                f"[{schedule.country_code}] Sem convergência após {iterations} iterações "
                f"(P={price:.4f})"
            )

        return self.evaluate(schedule, request, price, iterations=iterations, converged=converged)
