"""Minimal Solana JSON-RPC reads used by the wallet tools."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import rpc_url_for

logger = logging.getLogger(__name__)


LAMPORTS_PER_SOL = 1_000_000_000


class RpcError(RuntimeError):
    """The RPC node answered with a JSON-RPC error object."""


def rpc_call(
    rpc_url: str,
    method: str,
    params: Optional[List[Any]] = None,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> Any:
    """POST a single JSON-RPC request and return its ``result``."""
    payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params or []}

    owns_client = client is None
    client = client or httpx.Client(timeout=timeout)
    try:
        response = client.post(rpc_url, json=payload)
        response.raise_for_status()
        body: Dict[str, Any] = response.json()
    finally:
        if owns_client:
            client.close()

    if "error" in body:
        error = body["error"]
        raise RpcError(f"{method} failed: {error.get('message', error)}")
    return body.get("result")


def fetch_sol_balance(
    public_key: str,
    network: str = "devnet",
    client: Optional[httpx.Client] = None,
) -> float:
    """Fetch a wallet's SOL balance."""
    rpc_url = rpc_url_for(network)
    logger.debug("getBalance %s via %s", public_key, rpc_url)
    result = rpc_call(rpc_url, "getBalance", [public_key], client=client)
    lamports = (result or {}).get("value", 0)
    return lamports / LAMPORTS_PER_SOL
