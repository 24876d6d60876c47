"""Liquidity pool listings fed to pool analysis."""

from .models import LiquidityPool, PoolToken
from .pools import (
    PoolProvider,
    SamplePoolProvider,
    register_pool_provider,
    get_pool_provider,
)
