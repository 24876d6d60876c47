"""
CLI entry point for walletflow.

Usage:
    walletflow compile flow.json --network devnet -o program.json
    walletflow simulate flow.json --seed 42
    walletflow wallet generate --network devnet
    walletflow analyze-pool 58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2 --offline
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .config import Settings, load_env

console = Console()

NETWORK_CHOICES = ["devnet", "testnet", "mainnet"]


def setup_logging(level: str = "WARNING") -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _read_text(path: str) -> str:
    return Path(path).read_text()


def _write_json(path: str, data: Any) -> None:
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    console.print(f"\n[dim]Written to: {path}[/dim]")


def _print_errors(errors: List[str]) -> None:
    for error in errors:
        console.print(f"  [red]• {error}[/red]")


def run_compile(args: argparse.Namespace, settings: Settings) -> int:
    """Compile a flow file into a program."""
    from walletflow.compiler import compile_flow

    try:
        source = _read_text(args.file)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    result = compile_flow(source, network=args.network, strict=args.strict)
    if not result.success:
        console.print(f"[red]✗ {result.error}[/red]")
        _print_errors(result.errors)
        return 1

    program = result.program
    console.print()
    console.print(Panel(program.summary(), title="[bold]Compiled Program[/bold]"))

    table = Table(title="Instructions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Operation")
    table.add_column("Gas", justify="right")
    for ins in program.instructions:
        table.add_row(str(ins.index), ins.type, ins.operation, f"{ins.gas_estimate:,}")
    console.print(table)

    console.print(f"[dim]Bytecode: {program.bytecode}[/dim]")

    if args.output:
        _write_json(args.output, program.to_dict())
    return 0


def run_validate(args: argparse.Namespace, settings: Settings) -> int:
    """Validate a flow file without compiling it."""
    from walletflow.compiler import validate_flow

    try:
        source = _read_text(args.file)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    result = validate_flow(source, strict=args.strict)
    if result.ok:
        mode = "strict" if args.strict else "basic"
        console.print(f"[green]✓ Valid flow ({mode} checks)[/green]")
        return 0

    console.print("[red]✗ Invalid flow[/red]")
    _print_errors(result.errors)
    return 1


def run_simulate(args: argparse.Namespace, settings: Settings) -> int:
    """Run a mock execution of a flow file."""
    import random
    from walletflow.core import FlowSimulator

    try:
        source = _read_text(args.file)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    failure_rate = settings.failure_rate if args.failure_rate is None else args.failure_rate
    try:
        sim = FlowSimulator(rng=random.Random(args.seed), failure_rate=failure_rate)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Simulating...", total=None)
        result = asyncio.run(sim.run(source, realtime=args.realtime))
        progress.update(task, description="Simulation complete!")

    table = Table(title="Simulation Steps")
    table.add_column("Step", style="cyan")
    table.add_column("Details")
    table.add_column("Gas", justify="right")
    table.add_column("Status")
    for step in result.steps:
        style = {"completed": "green", "failed": "red"}.get(step.status.value, "dim")
        table.add_row(
            step.name,
            step.details,
            f"{step.gas_used:,}" if step.gas_used else "-",
            f"[{style}]{step.status.value}[/{style}]",
        )
    if result.steps:
        console.print(table)

    if not result.success:
        console.print(f"[red]✗ {result.error}[/red]")
        return 1

    console.print(f"[green]✓ {result.summary()}[/green]")
    if args.output:
        _write_json(args.output, result.to_dict())
    return 0


def _build_analyzer(args: argparse.Namespace, settings: Settings):
    from walletflow.analysis import FlowAnalyzer, GroqAnalysisProvider, get_provider

    primary = None
    if not args.offline:
        if settings.groq_api_key:
            primary = GroqAnalysisProvider(
                api_key=settings.groq_api_key,
                base_url=settings.groq_base_url,
                model=settings.groq_model,
            )
        else:
            console.print("[yellow]GROQ_API_KEY not set, using offline analysis[/yellow]")
    return FlowAnalyzer(primary=primary, fallback=get_provider("heuristic"))


def run_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Analyze a flow with the AI service, or offline."""
    from walletflow.errors import AnalysisError

    try:
        flow = json.loads(_read_text(args.file))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    analyzer = _build_analyzer(args, settings)
    network = args.network or settings.network
    try:
        analysis = analyzer.analyze(flow, network, {"analysisType": args.type, "depth": args.depth})
    except AnalysisError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print()
    console.print(Panel(
        f"Complexity: [bold]{analysis.flow_complexity}[/bold]\n"
        f"Risk: [bold]{analysis.risk_assessment}[/bold]\n"
        f"Profitability: [bold]{analysis.estimated_profitability}[/bold]",
        title=f"[bold]Flow Analysis[/bold] [dim]({analysis.provider})[/dim]",
    ))

    if analysis.suggestions:
        console.print("\n[bold]Suggestions:[/bold]")
        for suggestion in analysis.suggestions:
            console.print(f"  → {suggestion}")
    if analysis.market_insights:
        console.print("\n[bold]Market insights:[/bold]")
        for insight in analysis.market_insights:
            console.print(f"  • {insight}")
    if analysis.trading_opportunities:
        table = Table(title="Trading Opportunities")
        table.add_column("Type", style="cyan")
        table.add_column("Route / Asset")
        table.add_column("Profit", justify="right")
        table.add_column("Risk")
        table.add_column("Window")
        for opp in analysis.trading_opportunities:
            table.add_row(opp.type, opp.route or opp.asset or "-", opp.estimated_profit, opp.risk, opp.time_window)
        console.print()
        console.print(table)

    if args.output:
        _write_json(args.output, analysis.to_dict())
    return 0


def run_pools(args: argparse.Namespace, settings: Settings) -> int:
    """List liquidity pools."""
    from walletflow.market import get_pool_provider

    pools = get_pool_provider("sample").list_pools()

    console.print()
    table = Table(title="Liquidity Pools")
    table.add_column("ID", style="dim")
    table.add_column("Pair", style="cyan")
    table.add_column("TVL", justify="right")
    table.add_column("APY", justify="right")
    table.add_column("24h Volume", justify="right")
    table.add_column("New")
    for pool in pools:
        table.add_row(
            pool.id,
            pool.pair,
            f"${pool.tvl:,.0f}",
            f"{pool.apy:.1f}%",
            f"${pool.volume_24h:,.0f}",
            "[green]yes[/green]" if pool.is_new else "no",
        )
    console.print(table)
    return 0


def _load_pool(ref: str) -> Optional[Dict[str, Any]]:
    """A pool from a JSON file, or from the listing by id."""
    from walletflow.market import get_pool_provider

    path = Path(ref)
    if path.is_file():
        return json.loads(path.read_text())
    listed = get_pool_provider("sample").get_pool(ref)
    return listed.to_dict() if listed is not None else None


def run_analyze_pool(args: argparse.Namespace, settings: Settings) -> int:
    """Analyze a liquidity pool with the AI service, or offline."""
    from walletflow.errors import AnalysisError

    try:
        pool = _load_pool(args.pool)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    if pool is None:
        console.print(f"[red]Unknown pool: {args.pool}[/red]")
        return 1

    analyzer = _build_analyzer(args, settings)
    try:
        analysis = analyzer.analyze_pool(pool, args.network or settings.network)
    except AnalysisError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    assessment = analysis.assessment
    console.print()
    console.print(Panel(
        f"Risk: [bold]{assessment.risk_level}[/bold]\n"
        f"Profit potential: [bold]{assessment.profit_potential}[/bold]\n"
        f"Time horizon: {assessment.time_horizon}\n"
        f"Confidence: {assessment.confidence}",
        title=f"[bold]Pool Analysis[/bold] [dim]({analysis.provider})[/dim]",
    ))
    if analysis.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in analysis.recommendations:
            console.print(f"  → {rec}")
    if analysis.trading_strategy is not None:
        strategy = analysis.trading_strategy
        console.print("\n[bold]Strategy:[/bold]")
        console.print(f"  Entry: {strategy.entry}")
        console.print(f"  Exit: {strategy.exit}")
        console.print(f"  Stop-loss: {strategy.stop_loss}")
        console.print(f"  Timeframe: {strategy.timeframe}")
    if analysis.risk_factors:
        console.print("\n[bold]Risk factors:[/bold]")
        for factor in analysis.risk_factors:
            console.print(f"  [yellow]! {factor}[/yellow]")

    if args.output:
        _write_json(args.output, analysis.to_dict())
    return 0


def run_generate_contract(args: argparse.Namespace, settings: Settings) -> int:
    """Draft a JSON contract from a description, optionally optimizing existing code."""
    from walletflow.errors import AnalysisError

    current_code = None
    if args.current:
        try:
            current_code = _read_text(args.current)
        except OSError as e:
            console.print(f"[red]Error: {e}[/red]")
            return 1

    analyzer = _build_analyzer(args, settings)
    try:
        draft = analyzer.generate_contract_code(args.description, current_code, args.optimize)
    except AnalysisError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"\n[dim]{draft.explanation}[/dim] [dim]({draft.provider})[/dim]")
    if args.output:
        Path(args.output).write_text(draft.code)
        console.print(f"\n[dim]Written to: {args.output}[/dim]")
    else:
        console.print(draft.code)
    return 0


def list_nodes(args: argparse.Namespace, settings: Settings) -> int:
    """List node types and how they compile."""
    from walletflow.compiler import node_catalog

    console.print()
    table = Table(title="Node Types")
    table.add_column("Type", style="cyan")
    table.add_column("Operation")
    table.add_column("Opcodes", style="dim")
    table.add_column("Gas", justify="right")

    for entry in node_catalog(settings.network):
        table.add_row(
            entry["type"],
            entry["operation"],
            " ".join(entry["opcodes"]) or "-",
            f"{entry['gas']:,}",
        )

    console.print(table)
    return 0


def show_defaults(args: argparse.Namespace, settings: Settings) -> int:
    """Print the default data a new node of TYPE starts with."""
    from walletflow.flow import default_data

    data = default_data(args.type, args.network or settings.network)
    console.print_json(data=data)
    return 0


def run_samples(args: argparse.Namespace, settings: Settings) -> int:
    """List sample flows, or export one."""
    from walletflow.flow import get_sample_flow, list_sample_flows

    if args.export:
        flow = get_sample_flow(args.export)
        if flow is None:
            console.print(f"[red]Unknown sample: {args.export}[/red]")
            return 1
        if args.output:
            _write_json(args.output, flow.to_dict())
        else:
            console.print_json(data=flow.to_dict())
        return 0

    console.print()
    table = Table(title="Sample Flows")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Difficulty")
    table.add_column("Profit", justify="right")
    table.add_column("Timeframe", style="dim")
    for sample in list_sample_flows():
        table.add_row(sample.id, sample.name, sample.difficulty, sample.estimated_profit, sample.timeframe)
    console.print(table)
    return 0


def run_contract(args: argparse.Namespace, settings: Settings) -> int:
    """Validate a JSON contract, or generate one from a flow with --from-flow."""
    from walletflow.contract import generate_contract, validate_contract

    try:
        source = _read_text(args.file)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if args.from_flow:
        try:
            flow = json.loads(source)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error: {e}[/red]")
            return 1
        contract = generate_contract(flow, args.network or settings.network)
        if args.output:
            _write_json(args.output, contract)
        else:
            console.print_json(data=contract)
        return 0

    result = validate_contract(source)
    if result.valid:
        console.print("[green]✓ Contract is valid[/green]")
    else:
        console.print(f"[red]✗ Found {len(result.errors)} error(s)[/red]")
        _print_errors(result.errors)
    for warning in result.warnings:
        console.print(f"  [yellow]! {warning}[/yellow]")
    console.print(f"[dim]Complexity: {result.complexity} | Gas: {result.gas_estimate:,}[/dim]")
    return 0 if result.valid else 1


def run_wallet(args: argparse.Namespace, settings: Settings) -> int:
    """Generate, fund, inspect and list local wallets."""
    import httpx
    from walletflow.core import fetch_sol_balance, generate_wallet, request_airdrop, RpcError
    from walletflow.errors import FaucetError
    from walletflow.state import WalletStore

    store = WalletStore(settings.wallet_dir)
    network = args.network or settings.network

    if args.action == "generate":
        wallet = store.save(generate_wallet(network, label=args.label))
        console.print("[green]✓ Wallet generated[/green]")
        console.print(f"  Public key: [cyan]{wallet.public_key}[/cyan]")
        console.print(f"  Network: {wallet.network}")
        console.print(f"[dim]Saved to {store.path}[/dim]")
        return 0

    if args.action == "list":
        records = store.list(network=args.network)
        if not records:
            console.print("[dim]No wallets saved[/dim]")
            return 0
        table = Table(title="Wallets")
        table.add_column("Public key", style="cyan")
        table.add_column("Network")
        table.add_column("Balance", justify="right")
        table.add_column("Label")
        table.add_column("Created", style="dim")
        for record in records:
            table.add_row(record.public_key, record.network, f"{record.balance:.4f}", record.label or "", record.created)
        console.print(table)
        return 0

    if not args.public_key:
        console.print("[red]Error: a public key is required[/red]")
        return 1

    if args.action == "airdrop":
        try:
            airdrop = request_airdrop(args.public_key, network)
        except FaucetError as e:
            console.print(f"[red]Error: {e}[/red]")
            return 1
        console.print(f"[green]✓ Airdropped {airdrop.amount} SOL on {airdrop.network}[/green]")
        console.print(f"[dim]Signature: {airdrop.signature}[/dim]")
        record = store.get(args.public_key)
        if record is not None:
            store.update_balance(record.public_key, record.balance + airdrop.amount)
        return 0

    # balance
    try:
        balance = fetch_sol_balance(args.public_key, network)
    except (RpcError, httpx.HTTPError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    console.print(f"[cyan]SOL:[/cyan] {balance:.6f} ({network})")
    store.update_balance(args.public_key, balance)
    return 0


def run_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Start the HTTP API."""
    import uvicorn
    from walletflow.server.app import create_app

    console.print(f"[bold]walletflow API[/bold] on http://{args.host}:{args.port}")
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="walletflow",
        description="Compile and simulate Solana wallet automation flows",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compile command
    compile_parser = subparsers.add_parser("compile", help="Compile a flow file")
    compile_parser.add_argument("file", type=str, help="Path to flow JSON file")
    compile_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None, help="Target network")
    compile_parser.add_argument("--output", "-o", type=str, help="Export compiled program to JSON file")
    compile_parser.add_argument("--strict", action="store_true", help="Run strict structural checks")

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a flow file")
    validate_parser.add_argument("file", type=str, help="Path to flow JSON file")
    validate_parser.add_argument("--strict", action="store_true", help="Run strict structural checks")

    # simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Simulate a flow file")
    simulate_parser.add_argument("file", type=str, help="Path to flow JSON file")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--failure-rate", type=float, default=None, help="Per-step failure probability")
    simulate_parser.add_argument("--realtime", action="store_true", help="Wait out each step's duration")
    simulate_parser.add_argument("--output", "-o", type=str, help="Export results to JSON file")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a flow with AI")
    analyze_parser.add_argument("file", type=str, help="Path to flow JSON file")
    analyze_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None, help="Network")
    analyze_parser.add_argument("--type", default="trading", choices=["trading", "arbitrage", "general"])
    analyze_parser.add_argument("--depth", default="detailed", choices=["basic", "detailed", "comprehensive"])
    analyze_parser.add_argument("--offline", action="store_true", help="Skip the AI service")
    analyze_parser.add_argument("--output", "-o", type=str, help="Export analysis to JSON file")

    # pools command
    subparsers.add_parser("pools", help="List liquidity pools")

    # analyze-pool command
    pool_parser = subparsers.add_parser("analyze-pool", help="Analyze a liquidity pool with AI")
    pool_parser.add_argument("pool", type=str, help="Pool id from `walletflow pools`, or a pool JSON file")
    pool_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None, help="Network")
    pool_parser.add_argument("--offline", action="store_true", help="Skip the AI service")
    pool_parser.add_argument("--output", "-o", type=str, help="Export analysis to JSON file")

    # generate-contract command
    draft_parser = subparsers.add_parser("generate-contract", help="Draft a JSON contract with AI")
    draft_parser.add_argument("description", type=str, help="What the contract should do")
    draft_parser.add_argument("--current", type=str, default=None, help="Existing contract file to start from")
    draft_parser.add_argument("--optimize", type=str, default=None, metavar="FOCUS", help="Optimization focus")
    draft_parser.add_argument("--offline", action="store_true", help="Skip the AI service")
    draft_parser.add_argument("--output", "-o", type=str, help="Write the contract to a file")

    # nodes command
    subparsers.add_parser("nodes", help="List node types")

    # defaults command
    defaults_parser = subparsers.add_parser("defaults", help="Show default data for a node type")
    defaults_parser.add_argument("type", type=str, help="Node type, e.g. wallet")
    defaults_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None)

    # samples command
    samples_parser = subparsers.add_parser("samples", help="List or export sample flows")
    samples_parser.add_argument("--export", type=str, metavar="ID", help="Sample id to export")
    samples_parser.add_argument("--output", "-o", type=str, help="Output file for --export")

    # contract command
    contract_parser = subparsers.add_parser("contract", help="Validate or generate a JSON contract")
    contract_parser.add_argument("file", type=str, help="Contract JSON file (or flow file with --from-flow)")
    contract_parser.add_argument("--from-flow", action="store_true", help="Generate a contract from a flow file")
    contract_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None)
    contract_parser.add_argument("--output", "-o", type=str, help="Output file for the generated contract")

    # wallet command
    wallet_parser = subparsers.add_parser("wallet", help="Manage local wallets")
    wallet_parser.add_argument("action", choices=["generate", "airdrop", "balance", "list"])
    wallet_parser.add_argument("public_key", nargs="?", default=None, help="Wallet public key")
    wallet_parser.add_argument("--network", "-n", choices=NETWORK_CHOICES, default=None)
    wallet_parser.add_argument("--label", type=str, default=None, help="Label for a generated wallet")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


COMMANDS = {
    "compile": run_compile,
    "validate": run_validate,
    "simulate": run_simulate,
    "analyze": run_analyze,
    "pools": run_pools,
    "analyze-pool": run_analyze_pool,
    "generate-contract": run_generate_contract,
    "nodes": list_nodes,
    "defaults": show_defaults,
    "samples": run_samples,
    "contract": run_contract,
    "wallet": run_wallet,
    "serve": run_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    load_env()
    settings = Settings.from_env()
    setup_logging(args.log_level or settings.log_level)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
