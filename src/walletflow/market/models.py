"""Data models for liquidity pools."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class PoolToken:
    symbol: str
    mint: str
    decimals: int

    def to_dict(self) -> Dict[str, Any]:
        return {"symbol": self.symbol, "mint": self.mint, "decimals": self.decimals}


@dataclass
class LiquidityPool:
    """An AMM pool as listed by a PoolProvider."""
    id: str
    token_a: PoolToken
    token_b: PoolToken
    tvl: float
    apy: float
    volume_24h: float
    created_at: str
    price: float
    is_new: bool = False
    # Reserves of each side, in token units
    liquidity: Dict[str, float] = field(default_factory=dict)
    risk: Optional[str] = None

    @property
    def pair(self) -> str:
        return f"{self.token_a.symbol}/{self.token_b.symbol}"

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "tokenA": self.token_a.to_dict(),
            "tokenB": self.token_b.to_dict(),
            "tvl": self.tvl,
            "apy": self.apy,
            "volume24h": self.volume_24h,
            "createdAt": self.created_at,
            "isNew": self.is_new,
            "liquidity": dict(self.liquidity),
            "price": self.price,
        }
        if self.risk is not None:
            out["risk"] = self.risk
        return out

    def summary(self) -> str:
        return f"{self.pair}: TVL ${self.tvl:,.0f}, APY {self.apy:.1f}%, 24h volume ${self.volume_24h:,.0f}"
