#!/usr/bin/env python3
"""
Run an API scenario file.

Usage:
  python scripts/run_scenario.py <scenario-file> [--header "Name: value"]... [--var name=value]...
                                 [--timeout-sec N] [--log-level LEVEL]

Examples:
  python scripts/run_scenario.py scenarios/example.yaml
  python scripts/run_scenario.py scenarios/example.yaml -H "Authorization: Bearer ${token}" -V token=abc

Exit codes: 0 success, 1 step error or failed assertion, 2 invalid arguments / scenario.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from application.executor.step_engine import build_step_engine
from application.executor.step_executor import ExecutionResult, StepExecutor
from application.outcome import ResultStep
from application.ports.requests_client import RequestsSessionHttpClient
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.base import StepKind
from domain.variable_store import VariableStore
from infrastructure.config.settings import (
    LOG_LEVELS,
    SettingsError,
    load_settings,
    parse_header_flags,
    parse_timeout,
    parse_var_flags,
)
from infrastructure.config.static_header_provider import StaticHeaderProvider
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.scenario import ScenarioLoadError, load_scenario


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run an API scenario")
    parser.add_argument("scenario_file", type=str)
    parser.add_argument("-H", "--header", action="append", default=[], help="override header 'Name: value'")
    parser.add_argument("-V", "--var", action="append", default=[], help="initial variable name=value")
    parser.add_argument("--timeout-sec", type=str, help="transport timeout in seconds (> 0)")
    parser.add_argument("--log-level", type=str, choices=LOG_LEVELS)
    return parser


def _print_step(index: int, result: ResultStep) -> None:
    if result.kind is StepKind.PAUSE:
        print(f"  {index + 1}. pause {result.step_time:.3f}s")
        return

    req = result.request
    status = result.response.status if result.response else "-"
    label = "OK" if result.ok and result.response else "FAIL"
    print(f"  {index + 1}. [{label}] {req.method} {req.url} -> {status} ({int(result.step_time * 1000)}ms)")
    for a in result.assertions:
        mark = "+" if a.success else "x"
        print(f"       {mark} {a.source} {a.property} {a.comparison} {a.expected!r} (actual: {a.actual!r})")
    for v in result.variables_created:
        if v.ok:
            print(f"       = {v.key}: {v.value}")
        else:
            print(f"       ! {v.key}: {v.error}")


def _print_summary(result: ExecutionResult, ctx: RunContext) -> None:
    print("\n=== Result ===")
    print(f"Run ID: {ctx.run_id}")
    for index, step_result in enumerate(result.results):
        _print_step(index, step_result)
    print(f"Assertions: {result.assertions_passed} passed, {result.assertions_failed} failed")
    print(f"Success: {result.ok}")
    if result.error_message:
        print(f"Failed Step: {result.failed_step_index + 1}")
        print(f"Error: {result.error_message}")


def run(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings()
        settings = settings.with_headers(parse_header_flags(args.header))
        initial_vars = parse_var_flags(args.var)
        timeout_sec = settings.timeout_sec
        if args.timeout_sec is not None:
            timeout_sec = parse_timeout(args.timeout_sec, "--timeout-sec")
        scenario = load_scenario(args.scenario_file)
    except (SettingsError, ScenarioLoadError) as exc:
        print(f"ERROR: {exc}")
        return 2

    setup_console_logging(level=args.log_level or settings.log_level)

    print(f"Scenario: {scenario.meta.name} (v{scenario.meta.version})")
    print(f"Steps: {len(scenario.steps)}")

    http_client = RequestsSessionHttpClient(timeout_sec=timeout_sec)
    executor = StepExecutor(build_step_engine(http_client))
    deps = ExecutionDeps(
        logger=ConsoleLogger(),
        header_provider=StaticHeaderProvider(settings.headers),
    )
    ctx = RunContext(store=VariableStore(initial_vars))

    result = executor.execute(scenario.steps, ctx, deps)
    _print_summary(result, ctx)
    return 0 if result.ok else 1


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
