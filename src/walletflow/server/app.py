"""FastAPI application exposing compilation, simulation, analysis, pool and wallet tools."""

import logging
import random
from typing import Any, Dict, Optional

from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..analysis import FlowAnalyzer, default_providers
from ..compiler import compile_flow, validate_flow, node_catalog, INVALID_STRUCTURE
from ..config import Settings, load_env
from ..contract import generate_contract, validate_contract
from ..core import FlowSimulator, generate_wallet, request_airdrop
from ..errors import AnalysisError, FaucetError
from ..flow.models import Network, utc_now_iso
from ..market import PoolProvider, get_pool_provider

logger = logging.getLogger(__name__)


class CompileRequest(BaseModel):
    program: Any = None
    network: Optional[str] = None
    strict: bool = False


class ValidateRequest(BaseModel):
    program: Any = None
    strict: bool = False


class SimulateRequest(BaseModel):
    program: Any = None
    network: Optional[str] = None
    seed: Optional[int] = None


class AnalyzeRequest(BaseModel):
    flow: Any = None
    network: str = "devnet"
    options: Optional[Dict[str, Any]] = None


class ContractValidateRequest(BaseModel):
    contract: Any = None


class ContractGenerateRequest(BaseModel):
    flow: Any = None
    network: Optional[str] = None


class PoolAnalyzeRequest(BaseModel):
    pool: Any = None  # pool object, or the id of a listed pool
    network: str = "devnet"


class ContractDraftRequest(BaseModel):
    description: Any = None
    current_code: Optional[str] = Field(default=None, alias="currentCode")
    optimization: Optional[str] = None


class WalletRequest(BaseModel):
    network: str = "devnet"


class FaucetRequest(BaseModel):
    public_key: str = Field(default="", alias="publicKey")
    network: str = "devnet"


def _failure(status: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "error": error, **extra})


def build_router(settings: Settings, analyzer: FlowAnalyzer, pools: PoolProvider) -> APIRouter:
    router = APIRouter()

    @router.post("/compile")
    def compile_program(req: CompileRequest):
        try:
            result = compile_flow(req.program, network=req.network, strict=req.strict)
        except Exception:
            logger.exception("Compilation failed")
            return _failure(500, "Compilation failed")
        if not result.success:
            return _failure(400, result.error or INVALID_STRUCTURE, errors=result.errors)
        return result.to_dict()

    @router.post("/validate")
    def validate_program(req: ValidateRequest):
        result = validate_flow(req.program, strict=req.strict)
        return {"success": True, "valid": result.ok, "errors": result.errors}

    @router.post("/simulate")
    async def simulate_program(req: SimulateRequest):
        simulator = FlowSimulator(rng=random.Random(req.seed), failure_rate=settings.failure_rate)
        program = req.program
        if isinstance(program, dict) and req.network:
            program = {**program, "network": req.network}
        result = await simulator.run(program)
        return {"success": True, "simulation": result.to_dict()}

    @router.post("/analyze")
    def analyze_flow(req: AnalyzeRequest):
        if not isinstance(req.flow, dict) or not isinstance(req.flow.get("nodes"), list):
            return _failure(400, "Invalid flow structure")
        try:
            analysis = analyzer.analyze(req.flow, req.network, req.options)
        except AnalysisError:
            logger.exception("Analysis failed")
            return _failure(500, "Analysis failed")
        return {"success": True, "analysis": analysis.to_dict(), "provider": analysis.provider}

    @router.post("/analyze-pool")
    def analyze_pool(req: PoolAnalyzeRequest):
        pool = req.pool
        if isinstance(pool, str):
            listed = pools.get_pool(pool)
            pool = listed.to_dict() if listed is not None else None
        if not isinstance(pool, dict) or not pool:
            return _failure(400, "Pool data is required")
        try:
            analysis = analyzer.analyze_pool(pool, req.network)
        except AnalysisError as e:
            logger.exception("Pool analysis failed")
            return _failure(500, "Pool analysis failed", details=str(e))
        return {"success": True, "analysis": analysis.to_dict(), "provider": analysis.provider}

    @router.get("/pools")
    def list_pools():
        return {
            "success": True,
            "pools": [p.to_dict() for p in pools.list_pools()],
            "timestamp": utc_now_iso(),
        }

    @router.post("/contract/validate")
    def contract_validate(req: ContractValidateRequest):
        return {"success": True, "validation": validate_contract(req.contract).to_dict()}

    @router.post("/contract/generate")
    def contract_generate(req: ContractGenerateRequest):
        if not isinstance(req.flow, dict) or not isinstance(req.flow.get("nodes"), list):
            return _failure(400, "Invalid flow structure")
        return {"success": True, "contract": generate_contract(req.flow, req.network)}

    @router.post("/contract/ai-generate")
    def contract_ai_generate(req: ContractDraftRequest):
        if not isinstance(req.description, str) or not req.description.strip():
            return _failure(400, "Description is required")
        try:
            draft = analyzer.generate_contract_code(req.description, req.current_code, req.optimization)
        except AnalysisError as e:
            logger.exception("Contract generation failed")
            return _failure(500, "Failed to generate contract", details=str(e))
        return {"success": True, "result": draft.to_dict(), "provider": draft.provider}

    @router.post("/wallet/generate")
    def wallet_generate(req: WalletRequest):
        if Network.parse(req.network) is None:
            return _failure(400, f"Invalid network: {req.network}")
        wallet = generate_wallet(req.network)
        return {"success": True, "wallet": wallet.to_dict()}

    @router.post("/faucet")
    def faucet(req: FaucetRequest):
        if Network.parse(req.network) is None:
            return _failure(400, f"Invalid network: {req.network}")
        try:
            airdrop = request_airdrop(req.public_key, req.network)
        except FaucetError as e:
            return _failure(400, str(e))
        return airdrop.to_dict()

    @router.get("/nodes")
    def list_nodes(network: Optional[str] = None):
        return {"nodes": node_catalog(network or settings.network)}

    return router


def create_app(
    settings: Optional[Settings] = None,
    analyzer: Optional[FlowAnalyzer] = None,
    pools: Optional[PoolProvider] = None,
) -> FastAPI:
    """Build the application; tests pass their own settings, analyzer and pool source."""
    if settings is None:
        load_env()
        settings = Settings.from_env()
    if analyzer is None:
        providers = default_providers(
            settings.groq_api_key,
            base_url=settings.groq_base_url,
            model=settings.groq_model,
        )
        analyzer = FlowAnalyzer(primary=providers[0] if len(providers) > 1 else None, fallback=providers[-1])
    if pools is None:
        pools = get_pool_provider("sample")

    app = FastAPI(
        title="Walletflow API",
        description="Compile, simulate and analyze Solana wallet automation flows",
        version=__version__,
    )
    app.state.settings = settings
    app.state.analyzer = analyzer
    app.state.pools = pools

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return _failure(500, "Internal server error")

    app.include_router(build_router(settings, analyzer, pools), prefix="/api")

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__, "network": settings.network}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("walletflow.server.app:create_app", factory=True, host="0.0.0.0", port=8000)
