from typing import Dict, Optional

from crossborder_pricing.config import settings
from crossborder_pricing.errors import UnsupportedMethodError
from crossborder_pricing.interface import IPriceSolver
from crossborder_pricing.solvers import IterativePriceSolver, PiecewisePriceSolver


class PriceSolverFactory:
    """
    Factory para instanciar solvers de preço por método.

    Usa mapeamento centralizado method -> classe para garantir
    consistência e facilitar manutenção.
    """

    # Mapeamento canônico: method -> Solver class
    _SOLVERS: Dict[str, type] = {
        "piecewise": PiecewisePriceSolver,
        "iterative": IterativePriceSolver,
    }

    @classmethod
    def get(cls, method: Optional[str] = None) -> IPriceSolver:
        """
        Retorna o solver apropriado para o método especificado.

        Args:
            method: Nome do método (case-insensitive); padrão = settings.solver_method

        Returns:
            Instância de IPriceSolver

        Raises:
            UnsupportedMethodError: Se o método não for suportado
        """
        name = (method or settings.solver_method).lower().strip()

        solver_class = cls._SOLVERS.get(name)

        if not solver_class:
            supported = ", ".join(cls._SOLVERS.keys())
            raise UnsupportedMethodError(
                f"Método '{name}' não suportado. "
                f"Métodos disponíveis: {supported}"
            )

        return solver_class()

    @classmethod
    def get_supported_methods(cls) -> list:
        """Retorna lista de métodos suportados"""
        return list(cls._SOLVERS.keys())

    @classmethod
    def is_supported(cls, method: str) -> bool:
        """Verifica se um método é suportado"""
        return method.lower().strip() in cls._SOLVERS
