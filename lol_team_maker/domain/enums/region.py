"""Platform servers and their API routing hosts."""
from enum import Enum


class Region(Enum):
    """A League of Legends platform.

    League endpoints live on the platform host (``kr.api.riotgames.com``);
    account and match endpoints live on the regional cluster that serves it
    (``asia.api.riotgames.com``).
    """

    NA1 = ("na1", "americas")
    BR1 = ("br1", "americas")
    LA1 = ("la1", "americas")
    LA2 = ("la2", "americas")

    EUW1 = ("euw1", "europe")
    EUN1 = ("eun1", "europe")
    TR1 = ("tr1", "europe")
    RU = ("ru", "europe")
    ME1 = ("me1", "europe")

    KR = ("kr", "asia")
    JP1 = ("jp1", "asia")

    OC1 = ("oc1", "sea")
    SG2 = ("sg2", "sea")
    TW2 = ("tw2", "sea")
    VN2 = ("vn2", "sea")

    def __init__(self, platform: str, cluster: str):
        self._platform = platform
        self._cluster = cluster

    @property
    def code(self) -> str:
        return self._platform

    @property
    def platform_route(self) -> str:
        return self._platform

    @property
    def regional_route(self) -> str:
        return self._cluster

    @property
    def account_route(self) -> str:
        """account-v1 is only served from americas, asia and europe."""
        return "asia" if self._cluster == "sea" else self._cluster

    @classmethod
    def from_string(cls, code: str) -> 'Region':
        """Look up a platform code such as ``kr`` or ``EUW1``."""
        wanted = code.strip().lower()
        for region in cls:
            if region.code == wanted:
                return region
        raise ValueError(f"Unknown region: {code!r}")
