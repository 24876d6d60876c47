"""Flow analysis with provider fallback."""

import logging
from typing import Dict, Any, Optional, Union

from ..errors import AnalysisError
from ..flow.models import Flow
from .models import ContractDraft, ContractRequest, FlowAnalysis, PoolAnalysis
from .providers import AnalysisOptions, AnalysisProvider, get_provider

logger = logging.getLogger(__name__)


class FlowAnalyzer:
    """
    Runs flows, pools and contract requests through an analysis provider.

    If the primary provider fails for any reason the fallback is used
    instead, so callers always get an answer unless both fail.
    """

    def __init__(
        self,
        primary: Optional[AnalysisProvider] = None,
        fallback: Optional[AnalysisProvider] = None,
    ):
        self.primary = primary
        self.fallback = fallback or get_provider("heuristic")

    def _run(self, method: str, *args):
        if self.primary is not None:
            try:
                return getattr(self.primary, method)(*args)
            except Exception as e:
                logger.warning(
                    "Analysis provider %s failed, using %s: %s",
                    self.primary.name, self.fallback.name, e,
                )
        return getattr(self.fallback, method)(*args)

    def analyze(
        self,
        flow: Union[Flow, Dict[str, Any]],
        network: str = "devnet",
        options: Optional[Union[AnalysisOptions, Dict[str, Any]]] = None,
    ) -> FlowAnalysis:
        if isinstance(flow, Flow):
            flow = flow.to_dict()
        if not isinstance(flow, dict) or not isinstance(flow.get("nodes"), list):
            raise AnalysisError("Invalid flow structure")
        if not isinstance(options, AnalysisOptions):
            options = AnalysisOptions.from_dict(options)
        return self._run("analyze", flow, network, options)

    def analyze_pool(self, pool: Dict[str, Any], network: str = "devnet") -> PoolAnalysis:
        if not isinstance(pool, dict) or not pool:
            raise AnalysisError("Pool data is required")
        return self._run("analyze_pool", pool, network or "devnet")

    def generate_contract_code(
        self,
        description: str,
        current_code: Optional[str] = None,
        optimization: Optional[str] = None,
    ) -> ContractDraft:
        if not isinstance(description, str) or not description.strip():
            raise AnalysisError("Description is required")
        request = ContractRequest(description, current_code=current_code, optimization=optimization)
        return self._run("generate_contract_code", request)
