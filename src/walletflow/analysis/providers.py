"""Analysis providers: the AI service and its offline stand-in."""

import json
import os
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Any, Optional

from openai import OpenAI

from ..config import GROQ_BASE_URL, GROQ_MODEL
from ..errors import AnalysisError
from ..contract.generator import CONTRACT_TYPE, CONTRACT_VERSION
from .models import (
    ContractDraft,
    ContractRequest,
    FlowAnalysis,
    PoolAnalysis,
    PoolAssessment,
    TradingOpportunity,
    TradingStrategy,
)


SYSTEM_PROMPT = (
    "You are a professional Solana blockchain developer and DeFi trading expert. "
    "Always respond with valid JSON only."
)

ANALYSIS_PROMPT = """Analyze the following wallet flow configuration and provide detailed insights.

Flow Configuration:
{flow}

Network: {network}
Analysis Type: {analysis_type}
Depth: {depth}

Please analyze this flow and provide:
1. Flow complexity assessment (Low/Medium/High)
2. Risk assessment (Low/Moderate/High)
3. Estimated profitability range for 24h period
4. 3-4 specific optimization suggestions
5. 3-4 current market insights relevant to this flow
6. 1-2 trading opportunities based on the flow type

Respond in JSON format matching this structure:
{{
  "flowComplexity": "Low|Medium|High",
  "riskAssessment": "Low|Moderate|High",
  "estimatedProfitability": "X% - Y% (24h)",
  "suggestions": ["suggestion1", "suggestion2"],
  "marketInsights": ["insight1", "insight2"],
  "tradingOpportunities": [
    {{"type": "Arbitrage|Momentum|etc", "route": "optional", "asset": "optional",
      "direction": "optional", "estimatedProfit": "X%", "risk": "Low|Medium|High",
      "timeWindow": "time estimate"}}
  ]
}}
"""

POOL_SYSTEM_PROMPT = "You are a professional DeFi analyst. Always respond with valid JSON only."

POOL_PROMPT = """You are a professional DeFi analyst specializing in Solana liquidity pools. Analyze the following Raydium pool data and provide trading insights.

Pool Data:
{pool}

Network: {network}

Please analyze this pool and provide:
1. Risk assessment (Low/Medium/High)
2. Profit potential analysis
3. Optimal entry/exit strategy
4. Key risk factors
5. Trading recommendations

Respond in JSON format:
{{
  "poolAnalysis": {{
    "riskLevel": "Low|Medium|High",
    "profitPotential": "Low|Medium|High",
    "timeHorizon": "time estimate",
    "confidence": "percentage"
  }},
  "recommendations": ["rec1", "rec2"],
  "tradingStrategy": {{
    "entry": "entry strategy",
    "exit": "exit strategy",
    "stopLoss": "stop loss level",
    "timeframe": "recommended timeframe"
  }},
  "riskFactors": ["risk1", "risk2"]
}}
"""

CONTRACT_SYSTEM_PROMPT = "You are a Solana smart contract developer. Always respond with valid JSON only."

CONTRACT_PROMPT = """You are a Solana smart contract developer. {verb} a JSON contract based on this request:

Description: {description}
{current}
{focus}

Generate a complete JSON contract configuration that follows Solana best practices. Include proper error handling, gas optimization, and security considerations.

Respond in JSON format:
{{
  "code": "complete JSON contract code",
  "explanation": "brief explanation of the generated/optimized code"
}}
"""


@dataclass
class AnalysisOptions:
    analysis_type: str = "trading"  # trading, arbitrage, general
    depth: str = "detailed"  # basic, detailed, comprehensive

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "AnalysisOptions":
        raw = raw or {}
        return cls(
            analysis_type=raw.get("analysisType", "trading"),
            depth=raw.get("depth", "detailed"),
        )


class AnalysisProvider(ABC):
    """
    Base class for anything that can analyze a flow.

    Pool analysis and contract drafting are optional; providers that do not
    offer them raise AnalysisError so an analyzer can fall back.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def analyze(self, flow: Dict[str, Any], network: str, options: AnalysisOptions) -> FlowAnalysis:
        pass

    def analyze_pool(self, pool: Dict[str, Any], network: str) -> PoolAnalysis:
        raise AnalysisError(f"{self.name} does not analyze pools")

    def generate_contract_code(self, request: ContractRequest) -> ContractDraft:
        raise AnalysisError(f"{self.name} does not generate contracts")


_providers: Dict[str, AnalysisProvider] = {}


def register_provider(provider: AnalysisProvider):
    _providers[provider.name] = provider


def get_provider(name: str) -> Optional[AnalysisProvider]:
    return _providers.get(name.lower())


class GroqAnalysisProvider(AnalysisProvider):
    """Flow analysis through Groq's OpenAI-compatible chat completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = GROQ_BASE_URL,
        model: str = GROQ_MODEL,
        client: Optional[Any] = None,
    ):
        self.model = model
        if client is not None:
            self.client = client
            return
        self.api_key = api_key or os.environ.get("GROQ_API_KEY")
        if not self.api_key:
            raise ValueError("GROQ_API_KEY not set")
        self.client = OpenAI(api_key=self.api_key, base_url=base_url)

    @property
    def name(self) -> str:
        return "groq"

    def _complete(self, system: str, prompt: str, temperature: float, max_tokens: int) -> Any:
        """Run one chat completion and decode its JSON body."""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise AnalysisError("No response from analysis service")
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise AnalysisError(f"Analysis response is not valid JSON: {e}") from e

    def analyze(self, flow: Dict[str, Any], network: str, options: AnalysisOptions) -> FlowAnalysis:
        prompt = ANALYSIS_PROMPT.format(
            flow=json.dumps(flow, indent=2),
            network=network,
            analysis_type=options.analysis_type,
            depth=options.depth,
        )
        raw = self._complete(SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=2048)
        return FlowAnalysis.from_dict(raw, provider=self.name)

    def analyze_pool(self, pool: Dict[str, Any], network: str) -> PoolAnalysis:
        prompt = POOL_PROMPT.format(pool=json.dumps(pool, indent=2), network=network)
        raw = self._complete(POOL_SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=1024)
        return PoolAnalysis.from_dict(raw, provider=self.name)

    def generate_contract_code(self, request: ContractRequest) -> ContractDraft:
        prompt = CONTRACT_PROMPT.format(
            verb="Optimize" if request.optimization else "Generate",
            description=request.description,
            current=f"Current Code: {request.current_code}" if request.current_code else "",
            focus=f"Optimization Focus: {request.optimization}" if request.optimization else "",
        )
        raw = self._complete(CONTRACT_SYSTEM_PROMPT, prompt, temperature=0.2, max_tokens=2048)
        return ContractDraft.from_dict(raw, provider=self.name)


def _symbol(token: Any) -> str:
    # Listings carry token objects, hand-written pools often plain symbols
    if isinstance(token, dict):
        return str(token.get("symbol") or "?")
    return str(token) if token else "?"


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class HeuristicAnalysisProvider(AnalysisProvider):
    """
    Offline analysis derived from flow size.

    Used when the AI service is unavailable. The profitability range and the
    pool confidence are drawn from the injected random source.
    """

    SUGGESTIONS = [
        "Consider adding a stop-loss condition to limit downside risk",
        "The arbitrage path could be optimized by routing through Jupiter aggregator",
        "Current memecoin volatility suggests increasing slippage tolerance to 2.5%",
        "Add a time-based condition to execute trades during higher liquidity periods",
    ]

    MARKET_INSIGHTS = [
        "BONK/SOL pair showing 18% price inefficiency across exchanges",
        "Raydium liquidity pools for SAMO have increased 32% in last 6 hours",
        "Memecoin trading volume has increased 3x in the past 24 hours",
        "SOL price correlation with BTC has decreased to 0.72 in the last week",
    ]

    OPPORTUNITIES = [
        TradingOpportunity(
            type="Arbitrage",
            route="BONK → SOL → SAMO → BONK",
            estimated_profit="3.2%",
            risk="Low",
            time_window="1-2 hours",
        ),
        TradingOpportunity(
            type="Momentum",
            asset="MEME",
            direction="Long",
            estimated_profit="15-20%",
            risk="High",
            time_window="24-48 hours",
        ),
    ]

    POOL_STRATEGY = TradingStrategy(
        entry="Current levels favorable for entry",
        exit="Take profits at 20-30% gain",
        stop_loss="Set stop-loss at 10% below entry",
        timeframe="Hold for 4-8 hours maximum",
    )

    POOL_RISK_FACTORS = [
        "New pool with limited price history",
        "Potential for high volatility",
        "Impermanent loss risk for LP positions",
    ]

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @property
    def name(self) -> str:
        return "heuristic"

    @staticmethod
    def complexity_label(node_count: int, edge_count: int) -> str:
        score = node_count + edge_count * 0.5
        if score > 15:
            return "High"
        if score > 5:
            return "Medium"
        return "Low"

    @staticmethod
    def risk_label(node_count: int) -> str:
        if node_count > 10:
            return "High"
        if node_count > 5:
            return "Moderate"
        return "Low"

    def analyze(self, flow: Dict[str, Any], network: str, options: AnalysisOptions) -> FlowAnalysis:
        nodes = flow.get("nodes") or []
        edges = flow.get("edges") or []
        low = self.rng.random() * 10 + 5
        high = self.rng.random() * 10 + 10

        return FlowAnalysis(
            flow_complexity=self.complexity_label(len(nodes), len(edges)),
            risk_assessment=self.risk_label(len(nodes)),
            estimated_profitability=f"{low:.1f}% - {high:.1f}% (24h)",
            suggestions=list(self.SUGGESTIONS),
            market_insights=list(self.MARKET_INSIGHTS),
            trading_opportunities=list(self.OPPORTUNITIES),
            provider=self.name,
        )

    def analyze_pool(self, pool: Dict[str, Any], network: str) -> PoolAnalysis:
        apy = _number(pool.get("apy"))
        pair = f"{_symbol(pool.get('tokenA'))}/{_symbol(pool.get('tokenB'))}"
        return PoolAnalysis(
            assessment=PoolAssessment(
                risk_level=str(pool.get("risk") or "Medium"),
                profit_potential="High" if apy > 40 else "Medium",
                time_horizon="2-6 hours",
                confidence=self.rng.randint(70, 99),
            ),
            recommendations=[
                f"{pair} pool shows strong momentum with {pool.get('apy', 0)}% APY",
                "Consider entering with 5-10% of portfolio allocation",
                "High volume indicates strong market interest",
                "Monitor for price volatility due to new pool status",
            ],
            trading_strategy=self.POOL_STRATEGY,
            risk_factors=list(self.POOL_RISK_FACTORS),
            provider=self.name,
        )

    def generate_contract_code(self, request: ContractRequest) -> ContractDraft:
        contract = {
            "version": CONTRACT_VERSION,
            "contract_type": CONTRACT_TYPE,
            "description": request.description,
            "functions": [
                {
                    "id": "generated_function",
                    "name": "auto_generated",
                    "type": "wallet",
                    "parameters": {},
                    "execution_order": 0,
                }
            ],
        }
        return ContractDraft(
            code=json.dumps(contract, indent=2),
            explanation=(
                "Generated a basic contract structure. "
                "Please configure the specific functions for your use case."
            ),
            provider=self.name,
        )


register_provider(HeuristicAnalysisProvider())


def default_providers(api_key: Optional[str] = None, **kwargs) -> List[AnalysisProvider]:
    """Groq first when a key is configured, then the heuristic fallback."""
    providers: List[AnalysisProvider] = []
    key = api_key or os.environ.get("GROQ_API_KEY")
    if key:
        providers.append(GroqAnalysisProvider(api_key=key, **kwargs))
    providers.append(get_provider("heuristic"))
    return providers
