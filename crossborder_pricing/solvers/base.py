import logging
from typing import List, Optional

from crossborder_pricing.config import settings
from crossborder_pricing.errors import DegenerateScheduleError
from crossborder_pricing.interface import (
    IPriceSolver,
    FeeSchedule,
    PricingRequest,
    PricingResult,
    PriceBreakdown,
    CostBreakdown,
    TaxBreakdown,
    PlatformFeeBreakdown,
    DiscountBreakdown,
)

logger = logging.getLogger(__name__)

# Margem para erro de arredondamento quando a soma das taxas é exatamente 1
DEGENERATE_EPSILON = 1e-9


class BasePriceSolver(IPriceSolver):
    """
    Classe base com a avaliação de taxas comum a todos os solvers.

    Convenções de base de cálculo:
    - comissão e taxa de crescimento incidem sobre (P - desconto do vendedor)
    - taxa de transação incide sobre (P - desconto do vendedor - subsídio da plataforma)
    - VAT de venda é "por dentro": P / (1 + vat) * vat
    """

    def __init__(self, method: str, max_iterations: Optional[int] = None,
                 tolerance: Optional[float] = None):
        super().__init__(method=method)
        self.max_iterations = settings.max_iterations if max_iterations is None else max_iterations
        self.tolerance = settings.convergence_tolerance if tolerance is None else tolerance

    def check_schedule(self, schedule: FeeSchedule) -> None:
        """Rejeita schedules cuja soma de taxas proporcionais torna o preço ilimitado"""
        if schedule.linear_denominator <= DEGENERATE_EPSILON:
            total = 1 - schedule.linear_denominator
            raise DegenerateScheduleError(
                f"Soma das taxas proporcionais ({total * 100:.2f}%) >= 100%: "
                f"não existe preço que atinja a receita alvo"
            )

    @staticmethod
    def import_tax(schedule: FeeSchedule, request: PricingRequest) -> float:
        return request.purchase_cost * schedule.import_tax_rate

    @staticmethod
    def growth_fee_at(schedule: FeeSchedule, discounted_price: float) -> float:
        return min(discounted_price * schedule.growth_service_rate, schedule.growth_cap)

    def net_revenue_at(self, schedule: FeeSchedule, request: PricingRequest, price: float) -> float:
        """Receita líquida do vendedor para um preço P"""
        discounted = price - request.seller_discount
        commission = discounted * schedule.commission_rate
        growth = self.growth_fee_at(schedule, discounted)
        transaction = (discounted - request.platform_subsidy) * schedule.transaction_fee_rate
        sales_vat = price * schedule.vat_share

        return (
            price
            - commission
            - growth
            - transaction
            - schedule.fixed_fees
            - sales_vat
            - self.import_tax(schedule, request)
        )

    def evaluate(self, schedule: FeeSchedule, request: PricingRequest, price: float,
                 iterations: int = 0, converged: bool = True) -> PricingResult:
        discount = request.seller_discount
        subsidy = request.platform_subsidy
        cost_base = request.cost_base

        discounted = price - discount
        pre_tax_price = price / (1 + schedule.vat_rate)

        commission = discounted * schedule.commission_rate
        growth = self.growth_fee_at(schedule, discounted)
        transaction = (discounted - subsidy) * schedule.transaction_fee_rate
        infrastructure = schedule.infrastructure_fee
        order_processing = schedule.effective_order_processing_fee
        total_fees = commission + growth + transaction + infrastructure + order_processing

        import_duty = request.purchase_cost * schedule.duty_rate
        import_vat = request.purchase_cost * (1 + schedule.duty_rate) * schedule.vat_rate
        sales_vat = price * schedule.vat_share
        total_tax = import_duty + import_vat + sales_vat

        net_revenue = price - total_fees - total_tax
        net_profit = net_revenue - cost_base
        profit_rate = net_profit / cost_base if cost_base != 0 else 0.0

        return_cost = net_revenue * request.return_rate
        adjusted_profit = net_profit - return_cost
        adjusted_profit_rate = adjusted_profit / cost_base if cost_base != 0 else 0.0

        if price < discount:
            logger.warning(
                f"Preço {price:.2f} menor que o desconto do vendedor {discount:.2f}: "
                f"verifique os dados de entrada"
            )

        return PricingResult(
            retail_price=price,
            pre_tax_price=pre_tax_price,
            discounted_price=discounted,
            consumer_price=price - subsidy,
            costs=CostBreakdown(
                purchase_cost=request.purchase_cost,
                logistics_cost=request.logistics_cost,
                total_cost=cost_base,
            ),
            taxes=TaxBreakdown(
                import_duty=import_duty,
                import_vat=import_vat,
                sales_vat=sales_vat,
                total_tax=total_tax,
            ),
            platform_fees=PlatformFeeBreakdown(
                commission=commission,
                growth_service=growth,
                transaction=transaction,
                infrastructure=infrastructure,
                order_processing=order_processing,
                total_fees=total_fees,
            ),
            discounts=DiscountBreakdown(
                seller_discount=discount,
                platform_subsidy=subsidy,
            ),
            net_revenue=net_revenue,
            net_profit=net_profit,
            profit_rate=profit_rate,
            return_cost=return_cost,
            adjusted_profit=adjusted_profit,
            adjusted_profit_rate=adjusted_profit_rate,
            growth_cap_reached=(
                schedule.growth_service_rate > 0
                and discounted * schedule.growth_service_rate >= schedule.growth_cap
            ),
            method=self.method,
            iterations=iterations,
            converged=converged,
        )

    def get_breakdown(self, result: PricingResult, notes: Optional[List[str]] = None) -> PriceBreakdown:
        fees = result.platform_fees
        taxes = result.taxes

        steps = [
            {"label": "💰 Custo de compra", "value": result.costs.purchase_cost},
            {"label": "📦 Custo logístico", "value": result.costs.logistics_cost},
            {"label": "➕ Custo total", "value": result.costs.total_cost},
            {"label": "─────────────────────", "value": 0},
            {"label": "🛃 Imposto de importação", "value": taxes.import_duty},
            {"label": "🛃 VAT de importação", "value": taxes.import_vat},
            {"label": "🧾 VAT sobre a venda", "value": taxes.sales_vat},
            {"label": "─────────────────────", "value": 0},
            {"label": "🏪 Comissão da plataforma", "value": fees.commission},
            {"label": "📈 Serviço de crescimento", "value": fees.growth_service},
            {"label": "💳 Taxa de transação", "value": fees.transaction},
            {"label": "🏗️ Taxa de infraestrutura", "value": fees.infrastructure},
            {"label": "📋 Taxa de processamento do pedido", "value": fees.order_processing},
            {"label": "─────────────────────", "value": 0},
            {"label": "🎟️ Desconto do vendedor", "value": result.discounts.seller_discount},
            {"label": "🎁 Subsídio da plataforma", "value": result.discounts.platform_subsidy},
            {"label": "💵 Receita líquida", "value": result.net_revenue},
            {"label": "📊 Lucro líquido", "value": result.net_profit},
            {"label": "↩️ Perda com devoluções", "value": result.return_cost},
            {"label": "📊 Lucro ajustado", "value": result.adjusted_profit},
            {"label": "─────────────────────", "value": 0},
            {"label": "🏷️ PREÇO FINAL", "value": result.retail_price},
        ]

        summary = [
            f"Método: {self.method}",
            f"Margem sobre o custo: {result.profit_rate * 100:.2f}%",
            f"Margem ajustada por devoluções: {result.adjusted_profit_rate * 100:.2f}%",
        ]
        if result.growth_cap_reached:
            summary.append("Taxa de crescimento limitada pelo teto por unidade")
        if not result.converged:
            summary.append(f"Sem convergência após {result.iterations} iterações")

        return PriceBreakdown(steps=steps, notes=summary + list(notes or []))
