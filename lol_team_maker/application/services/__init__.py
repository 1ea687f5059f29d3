"""Application services root exports."""
from .player_analyzer import PlayerAnalyzer, MatchAggregate
from .team_balancer import TeamBalancer, balance_label, snake_order
from .progress import CallbackSink, QueueSink, PrefixedSink, notify
from . import scoring

__all__ = [
    "PlayerAnalyzer",
    "MatchAggregate",
    "TeamBalancer",
    "balance_label",
    "snake_order",
    "CallbackSink",
    "QueueSink",
    "PrefixedSink",
    "notify",
    "scoring",
]
