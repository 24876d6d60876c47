"""Local persistence for wallet records."""

from .wallets import WalletRecord, WalletStore
