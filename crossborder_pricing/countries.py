"""
Tabelas de taxas da TikTok Shop no Sudeste Asiático.

Fonte: central oficial do vendedor TikTok Shop (jan/2026).
Valores monetários na moeda local de cada país.
"""
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class CommissionTable(BaseModel):
    """Comissão por categoria, ou faixa única quando cobrada por subcategoria"""
    electronics: Optional[float] = None
    other: Optional[float] = None
    rate_range: Optional[Tuple[float, float]] = None


class GrowthServiceTable(BaseModel):
    """Taxa de serviço de crescimento (commerce growth) com teto por unidade"""
    electronics: Optional[float] = None
    other: Optional[float] = None
    cap: Optional[float] = None


class ProcessingFeeWaiverPolicy(BaseModel):
    new_seller: bool = False
    new_seller_days: int = 0
    existing_seller: bool = False
    existing_seller_free_orders: int = 0


class CountryProfile(BaseModel):
    code: str
    name: str
    name_cn: str
    currency: str
    currency_symbol: str
    exchange_rate_to_cny: float  # 1 unidade local = X CNY

    commission: CommissionTable
    # Comissões por tier de vendedor, usadas quando o tier difere do padrão
    tier_commission: Dict[str, CommissionTable] = Field(default_factory=dict)
    default_seller_tier: str = "standard"

    transaction_fee_rate: float
    growth_service: Optional[GrowthServiceTable] = None

    infrastructure_fee: float = 0.0
    order_processing_fee: float = 0.0
    processing_fee_waiver: Optional[ProcessingFeeWaiverPolicy] = None

    vat_rate: float
    vat_name: str = "VAT"
    duty_rate_range: Tuple[float, float] = (0.0, 0.30)

    new_seller_benefit: Optional[str] = None
    special_features: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    def to_local(self, amount_cny: float) -> float:
        """Converte um valor em CNY para a moeda local"""
        return amount_cny / self.exchange_rate_to_cny

    def to_cny(self, amount: float) -> float:
        """Converte um valor em moeda local para CNY"""
        return amount * self.exchange_rate_to_cny

    def disclosure_notes(self) -> List[str]:
        notes = []
        if self.new_seller_benefit:
            notes.append(self.new_seller_benefit)
        notes.extend(self.special_features)
        notes.extend(self.notes)
        return notes


COUNTRIES: Dict[str, CountryProfile] = {
    "TH": CountryProfile(
        code="TH",
        name="Thailand",
        name_cn="泰国",
        currency="THB",
        currency_symbol="฿",
        exchange_rate_to_cny=0.20,
        commission=CommissionTable(electronics=0.0535, other=0.0642),
        transaction_fee_rate=0.0321,
        growth_service=GrowthServiceTable(electronics=0.0535, other=0.0642, cap=199),
        infrastructure_fee=1.07,
        vat_rate=0.07,
        vat_name="VAT",
        duty_rate_range=(0.0, 0.30),
        new_seller_benefit="前30天电商增长服务费免收(上限5000泰铢)",
        special_features=[
            "电商增长服务费单件上限199泰铢",
            "平台基础设施费按订单固定收取",
        ],
        notes=[
            "2024年4月起交易手续费调整为3.21%",
            "电商增长服务费和平台佣金分开计算",
        ],
    ),
    "VN": CountryProfile(
        code="VN",
        name="Vietnam",
        name_cn="越南",
        currency="VND",
        currency_symbol="₫",
        exchange_rate_to_cny=0.00029,
        commission=CommissionTable(other=0.05),
        transaction_fee_rate=0.0321,
        vat_rate=0.10,
        vat_name="VAT",
        duty_rate_range=(0.0, 0.30),
        new_seller_benefit="入驻后30天内完成任务可获最长90天免佣",
        notes=[
            "2025年7月15日起固定佣金5%",
            "2025年2月18日起VAT调整为10%",
            "2025年2月23日起代扣高价值商品关税",
            "存在订单处理手续费但金额未明确",
        ],
    ),
    "PH": CountryProfile(
        code="PH",
        name="Philippines",
        name_cn="菲律宾",
        currency="PHP",
        currency_symbol="₱",
        exchange_rate_to_cny=0.13,
        commission=CommissionTable(rate_range=(0.05, 0.091)),
        transaction_fee_rate=0.0224,
        order_processing_fee=3,  # preço promocional para vendedor local (cheio: 5)
        processing_fee_waiver=ProcessingFeeWaiverPolicy(
            new_seller=True,
            new_seller_days=90,
            existing_seller=True,
            existing_seller_free_orders=50,
        ),
        vat_rate=0.12,
        vat_name="VAT",
        duty_rate_range=(0.0, 0.30),
        new_seller_benefit="新卖家(90天内)订单处理费全免，老卖家每月前50单免收",
        special_features=[
            "订单处理费₱3/订单(本地卖家优惠价)",
            "订单处理费不论订单金额和商品数量",
            "即使订单退款，订单处理费也不退还(除非未成功配送)",
        ],
        notes=[
            "2025年1月15日起按子类目收取5%-9.1%佣金",
            "2025年12月1日起收取订单处理费",
            "Mall商家和Marketplace商家佣金不同",
        ],
    ),
    "MY": CountryProfile(
        code="MY",
        name="Malaysia",
        name_cn="马来西亚",
        currency="MYR",
        currency_symbol="RM",
        exchange_rate_to_cny=1.60,
        commission=CommissionTable(rate_range=(0.054, 0.1026)),
        tier_commission={
            # Vendedores fora do programa BXP pagam ~4 p.p. a mais
            "non_bxp": CommissionTable(rate_range=(0.0918, 0.1458)),
        },
        default_seller_tier="bxp",
        transaction_fee_rate=0.0378,
        vat_rate=0.08,
        vat_name="SST",
        duty_rate_range=(0.0, 0.30),
        new_seller_benefit="入驻起90天直接免佣，无需完成任务",
        special_features=[
            "区分BXP和非BXP卖家，费率差异4%",
            "BXP卖家享受更低佣金+平台额外支持",
            "SST税已包含在佣金和交易手续费中",
        ],
        notes=[
            "2025年9月13日起非BXP商家佣金+4%",
            "按子类目收取佣金",
            "BXP卖家可获叠加折扣券、返现、平台曝光",
            "交易手续费2024年9月5日从2.16%涨至3.78%",
        ],
    ),
    "SG": CountryProfile(
        code="SG",
        name="Singapore",
        name_cn="新加坡",
        currency="SGD",
        currency_symbol="S$",
        exchange_rate_to_cny=5.30,
        commission=CommissionTable(other=0.0327),
        transaction_fee_rate=0.0218,
        vat_rate=0.09,
        vat_name="GST",
        duty_rate_range=(0.0, 0.05),  # maioria dos produtos isenta
        new_seller_benefit="入驻后30天内完成任务可获最长90天免佣",
        special_features=[
            "大部分商品免关税",
            "总费率最低的东南亚市场",
        ],
        notes=[
            "2025年7月15日起固定佣金3.27%",
            "2024年1月1日起征收低价值商品税",
            "GST税率9%",
        ],
    ),
}


def normalize_country_code(code: str) -> str:
    return (code or "").strip().upper()


def get_country(code: str) -> Optional[CountryProfile]:
    """Retorna o perfil do país (case-insensitive) ou None"""
    return COUNTRIES.get(normalize_country_code(code))


def list_countries() -> List[str]:
    """Retorna lista de códigos de países suportados"""
    return list(COUNTRIES.keys())
