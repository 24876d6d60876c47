"""
Wallet generation and the mock faucet.

Keys are real solders keypairs, but nothing here signs or submits anything:
airdrops return a mock signature.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from solders.keypair import Keypair
from solders.signature import Signature

from ..errors import FaucetError
from ..flow.models import Network, utc_now_iso
from ..state.wallets import WalletRecord

logger = logging.getLogger(__name__)


# SOL granted per airdrop request
AIRDROP_AMOUNTS: Dict[str, float] = {
    Network.DEVNET.value: 2.0,
    Network.TESTNET.value: 1.0,
}


def _network_value(network: Any) -> str:
    parsed = Network.parse(network)
    if parsed is None:
        raise ValueError(f"Unknown network: {network}")
    return parsed.value


def generate_wallet(network: Any = Network.DEVNET, label: Optional[str] = None) -> WalletRecord:
    """Generate a new wallet with a fresh keypair."""
    keypair = Keypair()
    return WalletRecord(
        public_key=str(keypair.pubkey()),
        private_key=str(keypair),
        network=_network_value(network),
        balance=0.0,
        label=label,
    )


@dataclass
class AirdropResult:
    """Result of a faucet request."""
    signature: str
    amount: float
    network: str
    public_key: str
    requested_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "signature": self.signature,
            "amount": self.amount,
            "network": self.network,
            "publicKey": self.public_key,
        }


def request_airdrop(public_key: str, network: Any = Network.DEVNET) -> AirdropResult:
    """
    Request test SOL for a wallet.

    Raises:
        FaucetError: on mainnet, where no faucet exists
    """
    network = _network_value(network)
    if network == Network.MAINNET.value:
        raise FaucetError("Faucet not available on mainnet")
    if not public_key:
        raise FaucetError("Missing public key")

    amount = AIRDROP_AMOUNTS[network]
    logger.info("Airdrop of %s SOL to %s on %s", amount, public_key, network)
    return AirdropResult(
        signature=str(Signature.new_unique()),
        amount=amount,
        network=network,
        public_key=public_key,
    )
