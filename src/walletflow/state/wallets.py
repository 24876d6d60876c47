"""Wallet records and their local key-value store."""

import json
import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..flow.models import utc_now_iso

logger = logging.getLogger(__name__)


@dataclass
class WalletRecord:
    public_key: str
    private_key: str
    network: str
    balance: float = 0.0
    created: str = field(default_factory=utc_now_iso)
    label: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "publicKey": self.public_key,
            "privateKey": self.private_key,
            "network": self.network,
            "balance": self.balance,
            "created": self.created,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, raw: Dict) -> "WalletRecord":
        return cls(
            public_key=raw["publicKey"],
            private_key=raw.get("privateKey", ""),
            network=raw.get("network", "devnet"),
            balance=float(raw.get("balance", 0)),
            created=raw.get("created") or utc_now_iso(),
            label=raw.get("label"),
        )

    def public_view(self) -> Dict:
        """Record without key material, for display."""
        data = self.to_dict()
        data.pop("privateKey")
        return data


_NAMESPACE_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class WalletStore:
    """
    Wallet records persisted as a JSON list in ``{root}/{namespace}.json``.

    The namespace plays the role of the browser storage key; separate
    namespaces never see each other's records.
    """

    def __init__(self, root: Union[str, Path], namespace: str = "solana-wallets"):
        if not _NAMESPACE_RE.match(namespace):
            raise ValueError(f"Invalid store namespace: {namespace!r}")
        self.root = Path(root)
        self.namespace = namespace

    @property
    def path(self) -> Path:
        return self.root / f"{self.namespace}.json"

    def _read(self) -> List[WalletRecord]:
        if not self.path.exists():
            return []
        with open(self.path, "r") as f:
            raw = json.load(f)
        return [WalletRecord.from_dict(item) for item in raw]

    def _write(self, records: List[WalletRecord]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{self.namespace}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump([r.to_dict() for r in records], f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def list(self, network: Optional[str] = None) -> List[WalletRecord]:
        records = self._read()
        if network:
            records = [r for r in records if r.network == network]
        return records

    def get(self, public_key: str) -> Optional[WalletRecord]:
        for record in self._read():
            if record.public_key == public_key:
                return record
        return None

    def save(self, record: WalletRecord) -> WalletRecord:
        """Insert or replace a record keyed by public key."""
        records = [r for r in self._read() if r.public_key != record.public_key]
        records.append(record)
        self._write(records)
        logger.debug("Saved wallet %s to %s", record.public_key, self.path)
        return record

    def remove(self, public_key: str) -> bool:
        records = self._read()
        kept = [r for r in records if r.public_key != public_key]
        if len(kept) == len(records):
            return False
        self._write(kept)
        return True

    def update_balance(self, public_key: str, balance: float) -> Optional[WalletRecord]:
        record = self.get(public_key)
        if record is None:
            return None
        record.balance = balance
        return self.save(record)
