"""
Flow Simulator.

Walks a flow node by node the way the builder's "simulate" tab does: each
recognized node becomes a timed step with a mock gas figure, and any step may
fail at random. All randomness comes from an injected random.Random, so the
compiler stays deterministic and tests can seed the simulator.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from ..compiler.validator import RawFlow, parse_raw_flow
from ..flow.models import Flow, FlowNode, NodeType, utc_now_iso
from ..flow.node_data import node_data_view

logger = logging.getLogger(__name__)


# Mock fee in SOL per unit of gas
FEE_PER_GAS = 0.000005


class StepStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class SimulationStep:
    """A single step in a simulation run."""
    id: str
    name: str
    duration_ms: int
    details: str
    gas_used: Optional[int] = None
    status: StepStatus = StepStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "duration": self.duration_ms,
            "details": self.details,
            "gasUsed": self.gas_used,
        }


@dataclass
class SimulationResult:
    """Result of a simulation run."""
    success: bool
    network: str = "devnet"
    steps: List[SimulationStep] = field(default_factory=list)
    total_gas_used: int = 0
    execution_time_ms: int = 0
    steps_completed: int = 0
    total_steps: int = 0
    network_fee: Optional[float] = None
    timestamp: str = field(default_factory=utc_now_iso)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "success": self.success,
            "network": self.network,
            "totalGasUsed": self.total_gas_used,
            "executionTime": self.execution_time_ms,
            "stepsCompleted": self.steps_completed,
            "totalSteps": self.total_steps,
            "timestamp": self.timestamp,
            "steps": [s.to_dict() for s in self.steps],
        }
        if self.network_fee is not None:
            out["networkFee"] = self.network_fee
        if self.error:
            out["error"] = self.error
        return out

    def summary(self) -> str:
        """Human-readable summary."""
        status = "✓ SUCCESS" if self.success else "✗ FAILED"
        lines = [
            f"{status}: {self.steps_completed}/{self.total_steps} steps",
            f"  Gas used: {self.total_gas_used:,}",
            f"  Time: {self.execution_time_ms}ms",
        ]
        if self.network_fee is not None:
            lines.append(f"  Network fee: {self.network_fee:.6f} SOL")
        if self.error:
            lines.append(f"  Error: {self.error}")
        return "\n".join(lines)


class FlowSimulator:
    """
    Mock step-by-step execution of a flow.

    Steps are framed by an "Initialize" and a "Finalize" step which never fail.
    """

    INIT_STEP_ID = "init"
    FINAL_STEP_ID = "finalize"

    # node type -> (step id prefix, name, duration ms, gas range)
    STEP_TABLE: Dict[str, Tuple[str, str, int, Optional[Tuple[int, int]]]] = {
        NodeType.WALLET.value: ("wallet", "Connect Wallet", 1000, None),
        NodeType.TRANSACTION.value: ("tx", "Create Transaction", 1500, (2000, 6999)),
        NodeType.TOKEN.value: ("token", "Token Transfer", 2000, (1500, 4499)),
        NodeType.CONDITIONAL.value: ("condition", "Evaluate Condition", 800, (500, 1499)),
    }

    def __init__(self, rng: Optional[random.Random] = None, failure_rate: float = 0.1):
        """
        Initialize simulator.

        Args:
            rng: Random source for gas figures and failures
            failure_rate: Probability that any node step fails
        """
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self.rng = rng or random.Random()
        self.failure_rate = failure_rate

    def _details(self, node: FlowNode) -> str:
        view = node_data_view(node)
        if node.type == NodeType.WALLET.value:
            return f"Connecting to wallet: {view.address or 'Generated'}"
        if node.type == NodeType.TRANSACTION.value:
            return f"{view.type or 'transfer'} transaction"
        if node.type == NodeType.TOKEN.value:
            return f"Transfer {view.amount or 0} tokens"
        return f"Check: {view.condition or 'condition'}"

    def build_steps(self, flow: Flow) -> List[SimulationStep]:
        """Turn a flow into pending steps. Unrecognized node types add no step."""
        steps = [SimulationStep(
            id=self.INIT_STEP_ID,
            name="Initialize Simulation",
            duration_ms=500,
            details="Setting up simulation environment",
        )]

        for index, node in enumerate(flow.nodes):
            entry = self.STEP_TABLE.get(node.type)
            if not entry:
                continue
            prefix, name, duration, gas_range = entry
            gas = self.rng.randint(*gas_range) if gas_range else 0
            steps.append(SimulationStep(
                id=f"{prefix}-{index}",
                name=name,
                duration_ms=duration,
                details=self._details(node),
                gas_used=gas,
            ))

        steps.append(SimulationStep(
            id=self.FINAL_STEP_ID,
            name="Finalize Simulation",
            duration_ms=1000,
            details="Completing simulation and generating results",
        ))
        return steps

    async def run(self, flow: RawFlow, realtime: bool = False) -> SimulationResult:
        """
        Run a simulation.

        Args:
            flow: A Flow, its wire mapping, or JSON text
            realtime: Sleep for each step's duration

        Returns:
            SimulationResult; a failed step ends the run
        """
        if not isinstance(flow, Flow):
            raw, _ = parse_raw_flow(flow)
            if raw is None or not isinstance(raw.get("nodes"), list):
                return SimulationResult(success=False, error="No program loaded")
            flow = Flow.from_dict(raw)

        steps = self.build_steps(flow)
        total_gas = 0
        completed = 0
        execution_time = sum(s.duration_ms for s in steps)

        for step in steps:
            step.status = StepStatus.RUNNING
            if realtime:
                await asyncio.sleep(step.duration_ms / 1000)

            framing = step.id in (self.INIT_STEP_ID, self.FINAL_STEP_ID)
            if not framing and self.rng.random() < self.failure_rate:
                step.status = StepStatus.FAILED
                logger.info("Simulation step failed: %s", step.name)
                return SimulationResult(
                    success=False,
                    network=flow.network,
                    steps=steps,
                    total_gas_used=total_gas,
                    execution_time_ms=execution_time,
                    steps_completed=completed,
                    total_steps=len(steps),
                    error=f"Step failed: {step.name}",
                )

            step.status = StepStatus.COMPLETED
            total_gas += step.gas_used or 0
            completed += 1

        return SimulationResult(
            success=True,
            network=flow.network,
            steps=steps,
            total_gas_used=total_gas,
            execution_time_ms=execution_time,
            steps_completed=completed,
            total_steps=len(steps),
            network_fee=total_gas * FEE_PER_GAS,
        )


# Convenience function
async def simulate_flow(
    flow: RawFlow,
    seed: Optional[int] = None,
    failure_rate: float = 0.1,
) -> SimulationResult:
    """Run a simulation with an optionally seeded random source."""
    sim = FlowSimulator(rng=random.Random(seed), failure_rate=failure_rate)
    return await sim.run(flow)
