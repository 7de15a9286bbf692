# -*- coding: utf-8 -*-
import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from crossborder_pricing import (
    Category,
    FeeScheduleResolver,
    PriceSolverFactory,
    PricingError,
    PricingRequest,
    SellerProfile,
    UnknownCountryError,
    get_country,
    list_countries,
    quote_price,
)
from crossborder_pricing.config import settings

# Configuração de logging estruturado
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Cross-border Pricing API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

resolver = FeeScheduleResolver()


# ============================================================================
# PRICING ENDPOINTS
# ============================================================================

class PriceQuoteRequest(BaseModel):
    """Request para cotação de preços"""
    country: str = Field(..., description="Código ISO do país (TH, VN, PH, MY, SG)")
    category: str = Field("other", description="Categoria (electronics | other)")
    purchase_cost: float = Field(..., description="Custo de compra por unidade")
    logistics_cost: float = Field(0.0, description="Custo logístico por unidade")
    target_profit_rate: float = Field(..., description="Lucro alvo sobre o custo (0.30 = 30%, pode ser negativo)")
    platform_subsidy: float = Field(0.0, description="Subsídio da plataforma (moeda local)")
    seller_discount: float = Field(0.0, description="Desconto do vendedor (moeda local)")
    return_rate: float = Field(0.0, description="Fração de pedidos devolvidos")
    duty_rate: Optional[float] = Field(None, description="Alíquota de importação; padrão = teto da faixa do país")
    seller: Optional[SellerProfile] = None
    method: Optional[str] = Field(None, description="piecewise | iterative")
    cost_currency: Literal["local", "CNY"] = Field(
        settings.default_cost_currency, description="Moeda dos custos de compra e logística"
    )


class PriceQuoteResponse(BaseModel):
    """Resposta da cotação com schedule, resultado e breakdown"""
    country: str
    currency: str
    exchange_rate_to_cny: float
    schedule: Dict[str, Any]
    result: Dict[str, Any]
    breakdown: Dict[str, Any]


class PriceEvaluateRequest(PriceQuoteRequest):
    """Request para avaliar um preço já definido"""
    retail_price: float = Field(..., description="Preço de venda com VAT incluso")
    target_profit_rate: float = 0.0


class PriceValidateRequest(BaseModel):
    """Request para validação de entrada"""
    country: str
    category: str = "other"
    purchase_cost: float
    logistics_cost: float = 0.0
    seller_discount: float = 0.0
    platform_subsidy: float = 0.0
    return_rate: float = 0.0
    method: Optional[str] = None


def _build_request(request: PriceQuoteRequest) -> PricingRequest:
    """Converte custos em CNY para moeda local quando necessário"""
    purchase_cost = request.purchase_cost
    logistics_cost = request.logistics_cost

    if request.cost_currency == "CNY":
        profile = get_country(request.country)
        if profile is None:
            raise UnknownCountryError(request.country, list_countries())
        purchase_cost = profile.to_local(purchase_cost)
        logistics_cost = profile.to_local(logistics_cost)

    return PricingRequest(
        purchase_cost=purchase_cost,
        logistics_cost=logistics_cost,
        target_profit_rate=request.target_profit_rate,
        platform_subsidy=request.platform_subsidy,
        seller_discount=request.seller_discount,
        return_rate=request.return_rate,
    )


def _pricing_error(e: PricingError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "supported_countries": list_countries(),
            "supported_methods": PriceSolverFactory.get_supported_methods(),
        }
    )


@app.post("/pricing/quote", response_model=PriceQuoteResponse)
async def pricing_quote(request: PriceQuoteRequest):
    """
    Calcula o preço de venda que atinge o lucro alvo no país informado.

    Args:
        request: PriceQuoteRequest com país, categoria, custos e lucro alvo

    Returns:
        PriceQuoteResponse com schedule, resultado e breakdown

    Raises:
        422: País/categoria/método inválido ou schedule degenerado
    """
    try:
        pricing_request = _build_request(request)
        quote = quote_price(
            request.country,
            request.category,
            pricing_request,
            seller=request.seller,
            duty_rate=request.duty_rate,
            method=request.method,
            resolver=resolver,
        )

        return PriceQuoteResponse(
            country=quote.country_code,
            currency=quote.currency,
            exchange_rate_to_cny=quote.exchange_rate_to_cny,
            schedule=quote.schedule.model_dump(mode="json"),
            result=quote.result.model_dump(mode="json"),
            breakdown=quote.breakdown.model_dump(mode="json"),
        )

    except PricingError as e:
        raise _pricing_error(e)
    except Exception as e:
        logger.exception("Erro inesperado na cotação")
        raise HTTPException(
            status_code=500,
            detail={"message": f"Erro ao calcular preços: {str(e)}"}
        )


@app.post("/pricing/evaluate")
async def pricing_evaluate(request: PriceEvaluateRequest):
    """
    Calcula taxas, impostos e lucro para um PREÇO informado,
    usando o schedule do país e os custos da requisição.
    """
    try:
        pricing_request = _build_request(request)
        schedule = resolver.resolve(request.country, request.category, request.seller, request.duty_rate)
        solver = PriceSolverFactory.get(request.method)
        result = solver.evaluate(schedule, pricing_request, request.retail_price)
        return result.model_dump(mode="json")

    except PricingError as e:
        raise _pricing_error(e)
    except Exception as e:
        logger.exception("Erro inesperado na avaliação de preço")
        raise HTTPException(status_code=500, detail={"message": f"Erro ao calcular métricas: {str(e)}"})


@app.get("/pricing/policies")
async def pricing_policies():
    """
    Lista países suportados e suas políticas de taxas.

    Retorna:
        Dict com países, métodos de cálculo e resumo das taxas por país
    """
    policies = {}
    for code in list_countries():
        profile = get_country(code)
        policies[code] = {
            "name": profile.name,
            "currency": profile.currency,
            "currency_symbol": profile.currency_symbol,
            "exchange_rate_to_cny": profile.exchange_rate_to_cny,
            "transaction_fee_rate": profile.transaction_fee_rate,
            "vat_rate": profile.vat_rate,
            "vat_name": profile.vat_name,
            "duty_rate_range": list(profile.duty_rate_range),
            "default_seller_tier": profile.default_seller_tier,
            "seller_tiers": [profile.default_seller_tier] + list(profile.tier_commission.keys()),
            "notes": profile.disclosure_notes(),
        }

    return {
        "supported_countries": list_countries(),
        "supported_categories": [c.value for c in Category],
        "supported_methods": PriceSolverFactory.get_supported_methods(),
        "policies": policies,
    }


@app.post("/pricing/validate")
async def pricing_validate(request: PriceValidateRequest):
    """
    Valida entradas de precificação.

    Returns:
        200: Válido
        422: Inválido (com lista de erros)
    """
    errors: List[str] = []

    if get_country(request.country) is None:
        errors.append(
            f"País '{request.country}' não suportado. "
            f"Países disponíveis: {', '.join(list_countries())}"
        )

    if request.category.strip().lower() not in [c.value for c in Category]:
        errors.append(f"Categoria '{request.category}' inválida")

    if request.purchase_cost < 0:
        errors.append("purchase_cost não pode ser negativo")

    if request.logistics_cost < 0:
        errors.append("logistics_cost não pode ser negativo")

    if request.seller_discount < 0 or request.platform_subsidy < 0:
        errors.append("Descontos e subsídios não podem ser negativos")

    if not 0 <= request.return_rate < 1:
        errors.append("return_rate deve estar entre 0 e 1")

    if request.method and not PriceSolverFactory.is_supported(request.method):
        errors.append(
            f"Método '{request.method}' não suportado. "
            f"Métodos disponíveis: {', '.join(PriceSolverFactory.get_supported_methods())}"
        )

    if errors:
        raise HTTPException(
            status_code=422,
            detail={"errors": errors}
        )

    return {"valid": True, "message": "Entrada válida"}


# ========= MAIN PARA RODAR DEBUGANDO =========


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host=settings.host, port=settings.port, reload=settings.dev_mode)
