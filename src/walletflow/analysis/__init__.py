"""AI-assisted flow, pool and contract analysis with an offline fallback."""

from .models import (
    ContractDraft,
    ContractRequest,
    FlowAnalysis,
    PoolAnalysis,
    PoolAssessment,
    TradingOpportunity,
    TradingStrategy,
)
from .providers import (
    AnalysisOptions,
    AnalysisProvider,
    GroqAnalysisProvider,
    HeuristicAnalysisProvider,
    register_provider,
    get_provider,
    default_providers,
)
from .analyzer import FlowAnalyzer
