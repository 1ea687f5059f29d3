"""Application layer - Services and use cases."""
from .services import PlayerAnalyzer, TeamBalancer
from .use_cases import AnalyzeAndBalanceUseCase, BalanceResult

__all__ = [
    'PlayerAnalyzer',
    'TeamBalancer',
    'AnalyzeAndBalanceUseCase',
    'BalanceResult',
]
