import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Category(str, Enum):
    """Categorias com taxa própria nas tabelas de comissão"""
    ELECTRONICS = "electronics"
    OTHER = "other"


class FeeWaiver(BaseModel):
    """Decisão de isenção da taxa de processamento de pedido, já avaliada para o vendedor"""
    model_config = ConfigDict(frozen=True)

    new_seller_waived: bool = False
    existing_seller_free_orders: int = 0
    orders_this_period: int = 0

    @property
    def applies(self) -> bool:
        if self.new_seller_waived:
            return True
        return (
            self.existing_seller_free_orders > 0
            and self.orders_this_period <= self.existing_seller_free_orders
        )


class FeeSchedule(BaseModel):
    """
    Tabela de taxas resolvida para um par país/categoria/vendedor.

    Todas as taxas são frações (0.0642 = 6,42%). Um schedule é criado a cada
    cotação e nunca é compartilhado entre requisições.
    """
    model_config = ConfigDict(frozen=True)

    country_code: str = ""
    category: Category = Category.OTHER
    seller_tier: Optional[str] = None

    commission_rate: float
    growth_service_rate: float = 0.0
    growth_service_cap: Optional[float] = None  # None = sem teto
    transaction_fee_rate: float
    vat_rate: float
    duty_rate: float = 0.0
    duty_rate_range: Tuple[float, float] = (0.0, 0.0)
    infrastructure_fee: float = 0.0
    order_processing_fee: float = 0.0
    waiver: FeeWaiver = FeeWaiver()

    @property
    def growth_cap(self) -> float:
        return math.inf if self.growth_service_cap is None else self.growth_service_cap

    @property
    def effective_order_processing_fee(self) -> float:
        return 0.0 if self.waiver.applies else self.order_processing_fee

    @property
    def fixed_fees(self) -> float:
        return self.infrastructure_fee + self.effective_order_processing_fee

    @property
    def vat_share(self) -> float:
        """Parcela de VAT contida num preço com VAT incluso"""
        return self.vat_rate / (1 + self.vat_rate)

    @property
    def import_tax_rate(self) -> float:
        """Imposto de importação + VAT de importação sobre o custo de compra"""
        return self.duty_rate + (1 + self.duty_rate) * self.vat_rate

    @property
    def linear_denominator(self) -> float:
        """Inclinação da receita líquida em relação ao preço (regime sem teto)"""
        return (
            1
            - self.commission_rate
            - self.growth_service_rate
            - self.transaction_fee_rate
            - self.vat_share
        )


class SellerProfile(BaseModel):
    """Atributos do vendedor usados na resolução de comissão e isenções"""
    tier: Optional[str] = None  # None = tier padrão do país
    is_new_seller: bool = False
    days_on_platform: Optional[int] = None
    monthly_order_count: int = 0

    def is_new_within(self, grace_days: int) -> bool:
        """Se days_on_platform for informado, ele decide; senão vale is_new_seller"""
        if self.days_on_platform is not None:
            return self.days_on_platform < grace_days
        return self.is_new_seller


class PricingRequest(BaseModel):
    """Custos e metas de uma cotação, em moeda local"""
    purchase_cost: float
    logistics_cost: float = 0.0
    target_profit_rate: float
    platform_subsidy: float = 0.0
    seller_discount: float = 0.0
    return_rate: float = 0.0

    @property
    def cost_base(self) -> float:
        return self.purchase_cost + self.logistics_cost

    @property
    def target_revenue(self) -> float:
        return self.cost_base * (1 + self.target_profit_rate)


class CostBreakdown(BaseModel):
    purchase_cost: float
    logistics_cost: float
    total_cost: float


class TaxBreakdown(BaseModel):
    import_duty: float
    import_vat: float
    sales_vat: float
    total_tax: float


class PlatformFeeBreakdown(BaseModel):
    commission: float
    growth_service: float
    transaction: float
    infrastructure: float
    order_processing: float
    total_fees: float


class DiscountBreakdown(BaseModel):
    seller_discount: float
    platform_subsidy: float


class PricingResult(BaseModel):
    """Preço resolvido com todos os componentes de custo, taxa e lucro"""
    retail_price: float
    pre_tax_price: float
    discounted_price: float
    consumer_price: float  # preço pago pelo comprador (retail - subsídio)
    costs: CostBreakdown
    taxes: TaxBreakdown
    platform_fees: PlatformFeeBreakdown
    discounts: DiscountBreakdown
    net_revenue: float
    net_profit: float
    profit_rate: float
    return_cost: float
    adjusted_profit: float
    adjusted_profit_rate: float
    growth_cap_reached: bool = False
    method: str = ""
    iterations: int = 0
    converged: bool = True


class PriceBreakdown(BaseModel):
    """Breakdown detalhado do cálculo de preço"""
    steps: List[Dict[str, Any]]
    notes: Optional[List[str]] = None


class IPriceSolver(ABC):
    """
    Interface para os métodos de resolução do preço de venda.

    Dado um FeeSchedule e um PricingRequest, encontra o preço P cuja receita
    líquida (após comissões, taxas e impostos) é igual a
    custo_base * (1 + lucro_alvo).
    """

    def __init__(self, method: str):
        self.method = method

    @abstractmethod
    def solve(self, schedule: FeeSchedule, request: PricingRequest) -> PricingResult:
        """
        Resolve o preço de venda.

        Args:
            schedule: Tabela de taxas resolvida
            request: Custos, lucro alvo, descontos e subsídios

        Returns:
            PricingResult com o preço e todos os componentes

        Raises:
            DegenerateScheduleError: Se a soma das taxas proporcionais for >= 1
        """
        pass

    @abstractmethod
    def evaluate(self, schedule: FeeSchedule, request: PricingRequest, price: float,
                 iterations: int = 0, converged: bool = True) -> PricingResult:
        """
        Calcula todos os componentes para um preço já conhecido.

        Args:
            schedule: Tabela de taxas resolvida
            request: Custos e descontos
            price: Preço de venda (com VAT incluso)

        Returns:
            PricingResult avaliado nesse preço
        """
        pass

    @abstractmethod
    def get_breakdown(self, result: PricingResult, notes: Optional[List[str]] = None) -> PriceBreakdown:
        """
        Retorna breakdown detalhado de um resultado para exibição.

        Args:
            result: Resultado de solve/evaluate
            notes: Notas extras (ex: observações do país)

        Returns:
            PriceBreakdown com steps e notes
        """
        pass
