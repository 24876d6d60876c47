"""Simulation, wallet and RPC helpers around compiled flows."""

from .simulator import FlowSimulator, SimulationResult, SimulationStep, StepStatus, simulate_flow
from .wallet import AirdropResult, generate_wallet, request_airdrop
from .rpc import RpcError, fetch_sol_balance, LAMPORTS_PER_SOL
