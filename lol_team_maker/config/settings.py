"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """
    ─── RIOT PERSONAL KEY BUDGET ──────────────────────────────────────────
    Hard limits: 20 requests / 1 s and 100 requests / 120 s.

    The 2-minute window is the one that bites: 100 calls per 120 s is one
    call every 1.2 s on average, so dispatches are spaced at that pace and
    the reservoir refills in full once per window.

    A 20-player lobby costs roughly 20 × (account + rank + ids + 20 matches)
    ≈ 460 calls before the match cache kicks in; shared matches between
    players in the same lobby are only fetched once.
    ──────────────────────────────────────────────────────────────────────
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')
    REGION:       str = os.getenv('REGION', 'kr')

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: float = _float_env('REQUEST_TIMEOUT', 30.0)

    # ── Rate budget (process-global, shared by every caller) ──────────────
    RATE_LIMIT_RESERVOIR:         int   = _int_env('RATE_LIMIT_RESERVOIR', 100)
    RATE_LIMIT_REFRESH_AMOUNT:    int   = _int_env('RATE_LIMIT_REFRESH_AMOUNT', 100)
    RATE_LIMIT_REFRESH_INTERVAL:  float = _float_env('RATE_LIMIT_REFRESH_INTERVAL', 120.0)
    RATE_LIMIT_MIN_INTERVAL:      float = _float_env('RATE_LIMIT_MIN_INTERVAL', 1.2)
    MAX_CONCURRENT_REQUESTS:      int   = _int_env('MAX_CONCURRENT_REQUESTS', 1)

    # Used when a 429 arrives without a Retry-After header
    DEFAULT_RETRY_AFTER: float = _float_env('DEFAULT_RETRY_AFTER', 10.0)

    # ── Analysis ───────────────────────────────────────────────────────────
    MATCHES_PER_PLAYER: int = _int_env('MATCHES_PER_PLAYER', 20)

    # ── Team making ────────────────────────────────────────────────────────
    TEAM_SIZE:            int = 5
    MIN_PLAYERS:          int = 10
    MIN_RESOLVED_PLAYERS: int = _int_env('MIN_RESOLVED_PLAYERS', 10)

    # Whole-batch timeout in seconds; 0 disables it
    BATCH_TIMEOUT: Optional[float] = _float_env('BATCH_TIMEOUT', 0.0) or None

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(BASE_DIR.parent / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ValueError("RIOT_API_KEY must be set in the environment or config/.env")


settings = Settings()
