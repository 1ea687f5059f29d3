"""Presentation CLI exports."""
from .teams_command import TeamsCommand, read_riot_ids
from .player_command import PlayerCommand, PlayersCommand

__all__ = [
    "TeamsCommand",
    "PlayerCommand",
    "PlayersCommand",
    "read_riot_ids",
]
