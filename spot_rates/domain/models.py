from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class CurrencyPair:
    base: str
    counter: str

    @classmethod
    def from_symbol(cls, symbol: str) -> "CurrencyPair":
        """Build a pair from a unified 'BASE/COUNTER' symbol, ignoring any ':SETTLE' suffix"""
        base, _, counter = symbol.split(":", 1)[0].partition("/")
        if not base or not counter:
            raise ValueError(f"Not a currency pair symbol: {symbol!r}")
        return cls(base=base.upper(), counter=counter.upper())

    def __str__(self) -> str:
        return f"{self.base}/{self.counter}"


@dataclass(frozen=True)
class Ticker:
    """Point-in-time quote for one pair as reported by a venue"""
    pair: CurrencyPair
    last: Decimal | None
    timestamp: int | None = None  # epoch millis


@dataclass(frozen=True)
class ExchangeRate:
    base_currency: str
    counter_currency: str
    price: Decimal
    timestamp: int  # epoch millis, 0 means unknown and never stale
    provider_name: str


@dataclass(frozen=True)
class SupportedUniverse:
    fiat: frozenset[str]
    crypto: frozenset[str]


class TickerStatus(Enum):
    OK = "ok"
    UNSUPPORTED = "unsupported"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class TickerResult:
    """Outcome of a bulk ticker request"""
    status: TickerStatus
    tickers: list[Ticker] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def ok(cls, tickers: list[Ticker]) -> "TickerResult":
        return cls(status=TickerStatus.OK, tickers=tickers)

    @classmethod
    def unsupported(cls, reason: str | None = None) -> "TickerResult":
        return cls(status=TickerStatus.UNSUPPORTED, reason=reason)

    @classmethod
    def empty(cls) -> "TickerResult":
        return cls(status=TickerStatus.EMPTY)

    @classmethod
    def failed(cls, reason: str) -> "TickerResult":
        return cls(status=TickerStatus.FAILED, reason=reason)


@dataclass(frozen=True)
class ProviderConfig:
    """Per-venue settings fed into the shared rate pipeline"""
    name: str
    prefix: str
    exchange_id: str
    refresh_interval: timedelta = timedelta(minutes=1)
    call_delay: float = 0.0  # seconds slept before each single-ticker call
    requires_explicit_filter: bool = False
    reports_timestamps: bool = True
