"""Application use cases."""
from .analyze_and_balance import AnalyzeAndBalanceUseCase, BalanceResult

__all__ = [
    'AnalyzeAndBalanceUseCase',
    'BalanceResult',
]
