from .interface import (
    IPriceSolver,
    Category,
    FeeSchedule,
    FeeWaiver,
    SellerProfile,
    PricingRequest,
    PricingResult,
    PriceBreakdown,
)
from .errors import (
    PricingError,
    UnknownCountryError,
    InvalidCategoryError,
    DegenerateScheduleError,
    UnsupportedMethodError,
)
from .countries import COUNTRIES, CountryProfile, get_country, list_countries
from .resolver import FeeScheduleResolver, resolve_schedule
from .factory import PriceSolverFactory
from .quote import Quote, solve_price, quote_price

__all__ = [
    "IPriceSolver",
    "Category",
    "FeeSchedule",
    "FeeWaiver",
    "SellerProfile",
    "PricingRequest",
    "PricingResult",
    "PriceBreakdown",
    "PricingError",
    "UnknownCountryError",
    "InvalidCategoryError",
    "DegenerateScheduleError",
    "UnsupportedMethodError",
    "COUNTRIES",
    "CountryProfile",
    "get_country",
    "list_countries",
    "FeeScheduleResolver",
    "resolve_schedule",
    "PriceSolverFactory",
    "Quote",
    "solve_price",
    "quote_price",
]
