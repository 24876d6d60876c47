"""
Pool providers.

Only a sample provider ships: it returns a fixed snapshot of two freshly
created Raydium pools, timestamped relative to the clock it is given.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Dict, Optional

from .models import LiquidityPool, PoolToken


SOL = PoolToken("SOL", "So11111111111111111111111111111111111111112", 9)
BONK = PoolToken("BONK", "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263", 5)
SAMO = PoolToken("SAMO", "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", 9)
USDC = PoolToken("USDC", "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", 6)


class PoolProvider(ABC):
    """Base class for pool listing sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def list_pools(self) -> List[LiquidityPool]:
        pass

    def get_pool(self, pool_id: str) -> Optional[LiquidityPool]:
        for pool in self.list_pools():
            if pool.id == pool_id:
                return pool
        return None


def _iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class SamplePoolProvider(PoolProvider):
    """Fixed pool snapshot; no network access."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        return "sample"

    def list_pools(self) -> List[LiquidityPool]:
        now = self.clock()
        return [
            LiquidityPool(
                id="58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2",
                token_a=SOL,
                token_b=BONK,
                tvl=2847392.45,
                apy=42.8,
                volume_24h=1234567.89,
                created_at=_iso(now - timedelta(minutes=5)),
                price=0.0000171,
                is_new=True,
                liquidity={"tokenA": 15234.56, "tokenB": 892345678.12},
            ),
            LiquidityPool(
                id="7XawhbbxtsRcQA8KTkHT9f9nc6d69UwqCDh6U5EEbEmX",
                token_a=SAMO,
                token_b=USDC,
                tvl=1456789.23,
                apy=28.5,
                volume_24h=567890.12,
                created_at=_iso(now - timedelta(minutes=12)),
                price=0.163,
                is_new=True,
                liquidity={"tokenA": 8934567.89, "tokenB": 1456789.23},
            ),
        ]


_pool_providers: Dict[str, PoolProvider] = {}


def register_pool_provider(provider: PoolProvider):
    _pool_providers[provider.name] = provider


def get_pool_provider(name: str) -> Optional[PoolProvider]:
    return _pool_providers.get(name.lower())


register_pool_provider(SamplePoolProvider())
