# src/main.py - v2
"""CLI entry point.

Usage:
    procflow init [--force]
    procflow status
    procflow phase advance <phase> [--decision TEXT --reasoning TEXT]
    procflow phase check <phase>
    procflow pass list|run <name>|run-all|run-phase <prefix> [--branch B]
    procflow ai show|test [--branch B]

Every command works on the project in the current directory unless
-C/--project is given.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from procflow.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("%s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procflow",
        description=f"procflow v{__version__} - phase-gated workflow engine",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-C", "--project", type=Path, default=Path("."),
        help="Project root (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- init ---
    p_init = subparsers.add_parser("init", help="Create .process/ in the project")
    p_init.add_argument("--force", action="store_true", help="Overwrite existing templates")
    p_init.set_defaults(func=_cmd_init)

    # --- status ---
    p_status = subparsers.add_parser("status", help="Show phase and artifacts")
    p_status.set_defaults(func=_cmd_status)

    # --- phase ---
    p_phase = subparsers.add_parser("phase", help="Query or advance the phase")
    phase_sub = p_phase.add_subparsers(dest="phase_command")

    p_advance = phase_sub.add_parser("advance", help="Advance to a later phase")
    p_advance.add_argument("target", help="Phase name or ordinal (e.g. Diverge or 1)")
    p_advance.add_argument("--decision", default=None, help="Record a decision for this transition")
    p_advance.add_argument("--reasoning", default="", help="Reasoning behind the decision")
    p_advance.add_argument(
        "--confidence", choices=["high", "medium", "low"], default="medium",
    )
    p_advance.add_argument("--revisit-trigger", default="N/A")
    p_advance.set_defaults(func=_cmd_phase_advance)

    p_check = phase_sub.add_parser("check", help="Exit non-zero unless the phase is reached")
    p_check.add_argument("required")
    p_check.set_defaults(func=_cmd_phase_check)

    # --- pass ---
    p_pass = subparsers.add_parser("pass", help="List or run passes")
    pass_sub = p_pass.add_subparsers(dest="pass_command")

    p_list = pass_sub.add_parser("list", help="List registered passes")
    p_list.set_defaults(func=_cmd_pass_list)

    p_run = pass_sub.add_parser("run", help="Run one pass")
    p_run.add_argument("name")
    p_run.add_argument(
        "--skip-phase-check", action="store_true",
        help="Run even if the project has not reached the pass's phase",
    )
    p_run.set_defaults(func=_cmd_pass_run)

    p_all = pass_sub.add_parser("run-all", help="Run every pass in dependency order")
    p_all.set_defaults(func=_cmd_pass_run_all)

    p_prefix = pass_sub.add_parser("run-phase", help="Run passes whose name starts with a prefix")
    p_prefix.add_argument("prefix")
    p_prefix.set_defaults(func=_cmd_pass_run_phase)

    for sub in (p_list, p_run, p_all, p_prefix):
        sub.add_argument(
            "--branch", action="append", default=[],
            help="Register the review pass for a workflow branch (repeatable)",
        )

    # --- ai ---
    p_ai = subparsers.add_parser("ai", help="Inspect completion providers")
    ai_sub = p_ai.add_subparsers(dest="ai_command")

    p_show = ai_sub.add_parser("show", help="Show configuration and provider availability")
    p_show.set_defaults(func=_cmd_ai_show)

    p_test = ai_sub.add_parser("test", help="Send a short prompt to the resolved provider")
    p_test.set_defaults(func=_cmd_ai_test)

    for sub in (p_show, p_test):
        sub.add_argument("--branch", default=None, help="Use a branch's configuration")

    return parser


# === COMMANDS ===


async def _cmd_init(args: argparse.Namespace) -> int:
    from procflow.core.state import init_project

    if not init_project(args.project, force=args.force):
        print("Project already initialized (use --force to overwrite templates).")
        return 0
    print(f"Initialized {args.project / '.process'}")
    print("Next: fill in .process/seed.yaml, then run 'procflow pass run seed.validate'.")
    return 0


async def _cmd_status(args: argparse.Namespace) -> int:
    from procflow.core.manifest import load_manifest
    from procflow.core.state import load_state

    state = load_state(args.project)
    manifest = load_manifest(args.project)

    print(f"Phase:    {state.current_phase.label} ({state.progress_percent}%)")
    print(f"Updated:  {state.last_updated.isoformat()}")
    if not manifest.artifacts:
        print("Artifacts: none recorded")
        return 0
    print("Artifacts:")
    for name, record in sorted(manifest.artifacts.items()):
        print(f"  {name:<28} {record.produced_by:<24} {record.last_updated}  {record.content_hash}")
    return 0


async def _cmd_phase_advance(args: argparse.Namespace) -> int:
    from procflow.core.decision_log import DecisionEntry, append_decision
    from procflow.core.phase import Phase
    from procflow.core.state import load_state, save_state

    state = load_state(args.project)
    previous = state.current_phase
    target = Phase.parse(args.target)

    if not state.advance(target):
        print(f"Already at {previous.label}; nothing to do.")
        return 0
    save_state(args.project, state)

    if args.decision:
        append_decision(
            args.project,
            DecisionEntry(
                phase_transition=f"{previous.tag} -> {target.tag}",
                decision=args.decision,
                reasoning=args.reasoning,
                confidence=args.confidence,
                revisit_trigger=args.revisit_trigger,
            ),
        )
    print(f"Phase: {previous.label} -> {target.label}")
    return 0


async def _cmd_phase_check(args: argparse.Namespace) -> int:
    from procflow.core.phase import Phase
    from procflow.core.state import load_state

    load_state(args.project).check_phase(Phase.parse(args.required))
    return 0


async def _cmd_pass_list(args: argparse.Namespace) -> int:
    registry = _build_pass_registry(args.branch)
    for info in registry.list_passes():
        print(f"  {info.name:<28} [{info.kind.value}] {info.description}")
    return 0


async def _cmd_pass_run(args: argparse.Namespace) -> int:
    from procflow.core.state import load_state

    registry = _build_pass_registry(args.branch)
    p = registry.get_or_raise(args.name)
    state = load_state(args.project)
    if p.required_phase is not None and not args.skip_phase_check:
        state.check_phase(p.required_phase)

    outcome = await _build_executor(args.project, registry).run_pass(args.name, args.project)
    _print_outcome(outcome)
    return 0


async def _cmd_pass_run_all(args: argparse.Namespace) -> int:
    from procflow.core.state import load_state

    load_state(args.project)
    registry = _build_pass_registry(args.branch)
    result = await _build_executor(args.project, registry).run_all(args.project)
    for outcome in result.outcomes:
        _print_outcome(outcome)
    return 0


async def _cmd_pass_run_phase(args: argparse.Namespace) -> int:
    from procflow.core.state import load_state

    load_state(args.project)
    registry = _build_pass_registry(args.branch)
    result = await _build_executor(args.project, registry).run_phase(args.prefix, args.project)
    for outcome in result.outcomes:
        _print_outcome(outcome)
    return 0


async def _cmd_ai_show(args: argparse.Namespace) -> int:
    from procflow.llm.config import resolve_provider_settings

    resolver = _build_resolver(args.project)
    config = resolver.config_for(args.branch)
    settings = _load_settings()

    print(f"Configured provider: {config.ai.provider}")
    for section in ("claude", "openai", "ollama"):
        resolved = resolve_provider_settings(section, settings, config)
        key_state = f"set ({resolved.api_key.source})" if resolved.has_api_key else "not set"
        print(
            f"  {section:<8} model={resolved.model.value} ({resolved.model.source}) "
            f"base_url={resolved.base_url.value} ({resolved.base_url.source}) api_key={key_state}"
        )

    print("Providers (priority order):")
    registry = resolver.registry_for(args.branch)
    available = {p.name for p in await registry.available_providers()}
    providers = sorted(
        (registry.get_or_raise(n) for n in registry.provider_names),
        key=lambda p: p.priority,
        reverse=True,
    )
    for p in providers:
        mark = "available" if p.name in available else "unavailable"
        print(f"  {p.name:<12} {p.priority:>3}  {mark}")
    return 0


async def _cmd_ai_test(args: argparse.Namespace) -> int:
    from procflow.llm.models import CompletionRequest

    resolver = _build_resolver(args.project)
    provider = await resolver.resolve(args.branch)
    print(f"Using provider: {provider.name}")
    response = await provider.complete(
        CompletionRequest(prompt="Reply with the single word OK.", max_tokens=16)
    )
    print(f"Response: {response.content}")
    if response.usage is not None:
        print(f"Tokens: {response.usage.total_tokens}")
    return 0


# --- Helpers ---


def _load_settings():
    from procflow.config.settings import load_settings

    return load_settings()


def _build_pass_registry(branches: list[str]):
    from procflow.pipeline.passes.branch import BranchReviewPass
    from procflow.pipeline.registry import PassRegistry

    registry = PassRegistry()
    registry.load_all()
    for branch in branches:
        registry.register(BranchReviewPass(branch))
    return registry


def _build_resolver(project: Path):
    from procflow.core.layout import is_initialized
    from procflow.core.errors import NotInitializedError
    from procflow.llm.client_factory import ProviderResolver
    from procflow.logging.context import set_run_context

    if not is_initialized(project):
        raise NotInitializedError(project)
    set_run_context(str(project.resolve()))
    return ProviderResolver(project, _load_settings())


def _build_executor(project: Path, registry):
    from procflow.pipeline.runner import PassExecutor

    return PassExecutor(registry, providers=_build_resolver(project))


def _print_outcome(outcome) -> None:
    produced = ", ".join(outcome.produced) or "nothing"
    via = f" via {outcome.provider}" if outcome.provider else ""
    print(f"  {outcome.pass_name}: produced {produced}{via} ({outcome.duration_ms}ms)")


def _setup_logging(verbose: bool) -> None:
    """Configure logging from Settings for CLI usage."""
    from procflow.logging.logger import setup_logging

    settings = _load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
