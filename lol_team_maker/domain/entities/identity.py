"""Player identity and account reference."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """A Riot ID (``gameName#tagLine``). Case-sensitive."""

    game_name: str
    tag_line: str

    @classmethod
    def parse(cls, riot_id: str) -> 'Identity':
        """Parse ``"Hide on bush#KR1"``. The split is on the last ``#``."""
        name, sep, tag = riot_id.strip().rpartition('#')
        if not sep or not name.strip() or not tag.strip():
            raise ValueError(f"Riot ID must look like 'name#tag', got {riot_id!r}")
        return cls(game_name=name.strip(), tag_line=tag.strip())

    def __str__(self) -> str:
        return f"{self.game_name}#{self.tag_line}"


@dataclass(frozen=True)
class AccountRef:
    """Resolved account. ``puuid`` is the stable global key."""

    puuid: str
    game_name: str = ""
    tag_line: str = ""
