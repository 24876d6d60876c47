"""
Data models for AI flow, pool and contract analysis.

These mirror the JSON document the analysis service is asked to return.
Nothing in the compiler reads them; they are shown next to a compiled program.
"""

import json
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any

from ..errors import AnalysisError


REQUIRED_KEYS = ("flowComplexity", "riskAssessment", "estimatedProfitability")


@dataclass
class TradingOpportunity:
    type: str
    estimated_profit: str
    risk: str
    time_window: str
    route: Optional[str] = None
    asset: Optional[str] = None
    direction: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TradingOpportunity":
        return cls(
            type=str(raw.get("type", "Unknown")),
            estimated_profit=str(raw.get("estimatedProfit", "")),
            risk=str(raw.get("risk", "")),
            time_window=str(raw.get("timeWindow", "")),
            route=raw.get("route"),
            asset=raw.get("asset"),
            direction=raw.get("direction"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "type": self.type,
            "estimatedProfit": self.estimated_profit,
            "risk": self.risk,
            "timeWindow": self.time_window,
        }
        for key, value in (("route", self.route), ("asset", self.asset), ("direction", self.direction)):
            if value is not None:
                out[key] = value
        return out


@dataclass
class FlowAnalysis:
    """Analysis of a flow, as produced by an AnalysisProvider."""
    flow_complexity: str  # Low, Medium, High
    risk_assessment: str  # Low, Moderate, High
    estimated_profitability: str
    suggestions: List[str] = field(default_factory=list)
    market_insights: List[str] = field(default_factory=list)
    trading_opportunities: List[TradingOpportunity] = field(default_factory=list)

    # Which provider produced this analysis
    provider: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, provider: Optional[str] = None) -> "FlowAnalysis":
        """
        Build an analysis from a provider response.

        Raises:
            AnalysisError: if the response lacks the required summary fields
        """
        if not isinstance(raw, dict):
            raise AnalysisError("Analysis response is not a JSON object")
        missing = [k for k in REQUIRED_KEYS if not raw.get(k)]
        if missing:
            raise AnalysisError(f"Invalid response structure, missing: {', '.join(missing)}")

        return cls(
            flow_complexity=str(raw["flowComplexity"]),
            risk_assessment=str(raw["riskAssessment"]),
            estimated_profitability=str(raw["estimatedProfitability"]),
            suggestions=[str(s) for s in raw.get("suggestions") or []],
            market_insights=[str(s) for s in raw.get("marketInsights") or []],
            trading_opportunities=[
                TradingOpportunity.from_dict(o)
                for o in raw.get("tradingOpportunities") or []
                if isinstance(o, dict)
            ],
            provider=provider,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flowComplexity": self.flow_complexity,
            "riskAssessment": self.risk_assessment,
            "estimatedProfitability": self.estimated_profitability,
            "suggestions": list(self.suggestions),
            "marketInsights": list(self.market_insights),
            "tradingOpportunities": [o.to_dict() for o in self.trading_opportunities],
        }


@dataclass
class PoolAssessment:
    risk_level: str  # Low, Medium, High
    profit_potential: str  # Low, Medium, High
    time_horizon: str
    confidence: Any  # percentage; services answer with a number or a "85%" string

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskLevel": self.risk_level,
            "profitPotential": self.profit_potential,
            "timeHorizon": self.time_horizon,
            "confidence": self.confidence,
        }


@dataclass
class TradingStrategy:
    entry: str
    exit: str
    stop_loss: str
    timeframe: str

    @classmethod
    def from_dict(cls, raw: Any) -> "TradingStrategy":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            entry=str(raw.get("entry", "")),
            exit=str(raw.get("exit", "")),
            stop_loss=str(raw.get("stopLoss", "")),
            timeframe=str(raw.get("timeframe", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry": self.entry,
            "exit": self.exit,
            "stopLoss": self.stop_loss,
            "timeframe": self.timeframe,
        }


@dataclass
class PoolAnalysis:
    """Trading view of a single liquidity pool."""
    assessment: PoolAssessment
    recommendations: List[str] = field(default_factory=list)
    trading_strategy: Optional[TradingStrategy] = None
    risk_factors: List[str] = field(default_factory=list)
    provider: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, provider: Optional[str] = None) -> "PoolAnalysis":
        """
        Build a pool analysis from a provider response.

        Raises:
            AnalysisError: if the response has no poolAnalysis block
        """
        if not isinstance(raw, dict):
            raise AnalysisError("Pool analysis response is not a JSON object")
        block = raw.get("poolAnalysis")
        if not isinstance(block, dict) or not block.get("riskLevel"):
            raise AnalysisError("Invalid response structure, missing: poolAnalysis")

        strategy = raw.get("tradingStrategy")
        return cls(
            assessment=PoolAssessment(
                risk_level=str(block["riskLevel"]),
                profit_potential=str(block.get("profitPotential", "")),
                time_horizon=str(block.get("timeHorizon", "")),
                confidence=block.get("confidence"),
            ),
            recommendations=[str(s) for s in raw.get("recommendations") or []],
            trading_strategy=TradingStrategy.from_dict(strategy) if strategy else None,
            risk_factors=[str(s) for s in raw.get("riskFactors") or []],
            provider=provider,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "poolAnalysis": self.assessment.to_dict(),
            "recommendations": list(self.recommendations),
            "riskFactors": list(self.risk_factors),
        }
        if self.trading_strategy is not None:
            out["tradingStrategy"] = self.trading_strategy.to_dict()
        return out


@dataclass
class ContractRequest:
    description: str
    current_code: Optional[str] = None
    optimization: Optional[str] = None  # focus area; set means "optimize" rather than "generate"


@dataclass
class ContractDraft:
    """JSON contract source proposed for a description."""
    code: str
    explanation: str = ""
    provider: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any, provider: Optional[str] = None) -> "ContractDraft":
        if not isinstance(raw, dict) or not raw.get("code"):
            raise AnalysisError("Invalid response structure, missing: code")
        code = raw["code"]
        if not isinstance(code, str):
            # Some models answer with the contract object instead of its text
            code = json.dumps(code, indent=2)
        return cls(code=code, explanation=str(raw.get("explanation", "")), provider=provider)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "explanation": self.explanation}
