"""Runtime settings read from the environment and an optional .env file."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


# RPC endpoints
RPC_ENDPOINTS: Dict[str, str] = {
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet": "https://api.mainnet-beta.solana.com",
}

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "llama-3.1-70b-versatile"


def load_env(start: Optional[Path] = None) -> Optional[Path]:
    """Load .env file from parent directories. Existing variables win."""
    current = start or Path.cwd()
    for _ in range(5):  # Check up to 5 parent dirs
        env_file = current / ".env"
        if env_file.exists():
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ.setdefault(key.strip(), value.strip())
            return env_file
        current = current.parent
    return None


def rpc_url_for(network: str) -> str:
    """RPC endpoint for a network; unknown names fall back to devnet."""
    return RPC_ENDPOINTS.get(network, RPC_ENDPOINTS["devnet"])


@dataclass
class Settings:
    """Configuration for the CLI, server and service clients."""
    network: str = "devnet"
    groq_api_key: Optional[str] = None
    groq_base_url: str = GROQ_BASE_URL
    groq_model: str = GROQ_MODEL
    home: Path = field(default_factory=lambda: Path.home() / ".walletflow")
    log_level: str = "WARNING"
    failure_rate: float = 0.1
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def wallet_dir(self) -> Path:
        return self.home / "wallets"

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()
        home = env.get("WALLETFLOW_HOME")
        return cls(
            network=env.get("WALLETFLOW_NETWORK", defaults.network),
            groq_api_key=env.get("GROQ_API_KEY") or None,
            groq_base_url=env.get("GROQ_BASE_URL", defaults.groq_base_url),
            groq_model=env.get("GROQ_MODEL", defaults.groq_model),
            home=Path(home).expanduser() if home else defaults.home,
            log_level=env.get("WALLETFLOW_LOG_LEVEL", defaults.log_level).upper(),
            failure_rate=float(env.get("WALLETFLOW_FAILURE_RATE", defaults.failure_rate)),
            cors_origins=[o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()],
        )
