class PricingError(ValueError):
    """Base exception para erros de precificação"""
    pass


class UnknownCountryError(PricingError):
    """País sem tabela de taxas cadastrada"""

    def __init__(self, country_code: str, supported: list):
        self.country_code = country_code
        self.supported = supported
        super().__init__(
            f"País '{country_code}' não suportado. "
            f"Países disponíveis: {', '.join(supported)}"
        )


class InvalidCategoryError(PricingError):
    """Categoria fora do conjunto {electronics, other}"""
    pass


class DegenerateScheduleError(PricingError):
    """Soma das taxas proporcionais >= 1: o preço não tem limite"""
    pass


class UnsupportedMethodError(PricingError):
    """Método de cálculo não registrado na factory"""
    pass
