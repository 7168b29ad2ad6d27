"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Literal


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class EstimationConfig:
    """Outcome estimation tuning."""

    alpha: float = field(default_factory=lambda: float(os.getenv("ESTIMATION_ALPHA", "1.0")))
    empirical_weight: float = field(
        default_factory=lambda: float(os.getenv("ESTIMATION_EMPIRICAL_WEIGHT", "0.7"))
    )
    prior_weight: float = field(
        default_factory=lambda: float(os.getenv("ESTIMATION_PRIOR_WEIGHT", "0.3"))
    )
    confidence_scale: float = field(
        default_factory=lambda: float(os.getenv("ESTIMATION_CONFIDENCE_SCALE", "12"))
    )


@dataclass(frozen=True)
class SimulationConfig:
    """Default and maximum Monte Carlo settings."""

    hands_per_shoe: int = 80
    runs: int = 200
    bet_unit: float = 10.0
    starting_bankroll: float = 1000.0
    system: Literal["flat", "martingale"] = "flat"
    max_runs: int = field(default_factory=lambda: int(os.getenv("SIM_MAX_RUNS", "10000")))
    max_hands: int = field(default_factory=lambda: int(os.getenv("SIM_MAX_HANDS", "1000")))
    workers: int = field(default_factory=lambda: int(os.getenv("SIM_WORKERS", "1")))


@dataclass(frozen=True)
class HistoryConfig:
    """Outcome history limits."""

    max_outcomes: int = field(
        default_factory=lambda: int(os.getenv("HISTORY_MAX_OUTCOMES", "10000"))
    )


@dataclass(frozen=True)
class ScoreboardConfig:
    """Scoreboard grid dimensions."""

    rows: int = 6
    cols: int = 30


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    redis: RedisConfig = field(default_factory=RedisConfig)
    estimation: EstimationConfig = field(default_factory=EstimationConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    scoreboard: ScoreboardConfig = field(default_factory=ScoreboardConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
