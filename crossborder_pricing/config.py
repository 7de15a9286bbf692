# config.py
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    dev_mode: bool = False

    # Solver
    solver_method: str = "piecewise"  # piecewise | iterative
    max_iterations: int = 10
    convergence_tolerance: float = 0.01  # unidades da moeda local

    # Entrada de custos: "local" ou "CNY"
    default_cost_currency: Literal["local", "CNY"] = "local"

    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 5002

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
