"""Command-line interface to the economic model engine.

Runs fee estimates, payment settlements, CVPI scores, tier look-ups and
reputation adjustments against the configured economic tables. Output
formats: JSON (default) or a two-column table.

Usage::

    campaign-economics estimate --budget 4000 --participants 1 --complexity simple
    campaign-economics settle --base 5000 --achievement 116.3 --format table
    campaign-economics adjust --score 680 --delta 25 --approval APR-1042
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

import pydantic
import structlog

from campaign_economics.config import get_settings
from campaign_economics.cvpi import score as score_cvpi
from campaign_economics.domain import (
    ApprovalRequiredError,
    CampaignBudgetInput,
    ComplexityTag,
    CreatorTier,
    DivisionByZeroError,
    KpiMetric,
    PartyEconomicProfile,
    ValidationError,
)
from campaign_economics.domain.money import to_decimal
from campaign_economics.fees import estimate
from campaign_economics.reputation import (
    ReputationScale,
    apply_adjustment,
    benefits_for,
    next_tier_projection,
    percentile_for,
    score_breakdown,
    tier_for,
)
from campaign_economics.settlement import settle
from campaign_economics.tables import EconomicTables, get_tables

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_DIVISION_BY_ZERO = 2
EXIT_APPROVAL_REQUIRED = 3


def configure_logging(production: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level. Logs go to
    stderr so that stdout carries only command output.

    Args:
        production: Enable production mode if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="campaign-economics")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one sub-command per calculator.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="campaign-economics",
        description="Campaign marketplace fee, CVPI, settlement and reputation calculator",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="json",
        dest="output_format",
        help="Output format (default: json)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    est = subparsers.add_parser("estimate", help="Estimate fees and escrow for a campaign")
    est.add_argument("--budget", required=True, help="Campaign budget in USD")
    est.add_argument("--participants", type=int, required=True, help="Number of creators")
    est.add_argument(
        "--complexity",
        choices=[c.value for c in ComplexityTag],
        default=ComplexityTag.STANDARD.value,
        help="Declared campaign complexity (default: standard)",
    )
    est.add_argument(
        "--metric",
        action="append",
        default=[],
        dest="metrics",
        help="KPI data source, repeatable (e.g. --metric twitter --metric onchain)",
    )
    est.add_argument("--spend", default="0", help="Payer's cumulative platform spend")
    est.add_argument("--reputation", default="0", help="Payer's reputation score (0-1000)")
    est.add_argument(
        "--token", action="store_true", help="Pay the service fee in platform tokens"
    )

    stl = subparsers.add_parser("settle", help="Settle a performance-based payment")
    stl.add_argument("--base", required=True, help="Payment at 100%% achievement")
    stl.add_argument("--achievement", required=True, help="Verified achievement percentage")
    stl.add_argument("--fee-rate", default=None, help="Platform fee rate (default: 0.04)")

    cvpi = subparsers.add_parser("cvpi", help="Score a completed deliverable")
    cvpi.add_argument("--cost", required=True, help="Total campaign cost")
    cvpi.add_argument("--impact", required=True, help="Verified impact score")

    tier = subparsers.add_parser("tier", help="Look up the tier of a reputation score")
    tier.add_argument("--score", required=True, help="Reputation score")
    tier.add_argument(
        "--scale",
        choices=[s.value for s in ReputationScale],
        default=ReputationScale.CREATOR.value,
        help="Reputation scale (default: creator)",
    )

    adj = subparsers.add_parser("adjust", help="Apply a manual reputation adjustment")
    adj.add_argument("--score", required=True, help="Current reputation score")
    adj.add_argument("--delta", required=True, help="Points to add (negative to deduct)")
    adj.add_argument("--approval", default=None, help="Approval reference for large changes")
    adj.add_argument(
        "--scale",
        choices=[s.value for s in ReputationScale],
        default=ReputationScale.CREATOR.value,
        help="Reputation scale (default: creator)",
    )

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _run_estimate(args: argparse.Namespace, tables: EconomicTables) -> dict[str, Any]:
    budget_input = CampaignBudgetInput(
        budget_amount=args.budget,
        number_of_participants=args.participants,
        complexity=ComplexityTag(args.complexity),
        kpi_metrics=tuple(KpiMetric(source=m) for m in args.metrics),
        pay_with_platform_token=args.token,
    )
    profile = PartyEconomicProfile(
        cumulative_spend=args.spend, reputation_score=args.reputation
    )
    return estimate(budget_input, profile, tables=tables).model_dump(mode="json")


def _run_settle(args: argparse.Namespace, tables: EconomicTables) -> dict[str, Any]:
    return settle(args.base, args.achievement, args.fee_rate, tables=tables).model_dump(
        mode="json"
    )


def _run_cvpi(args: argparse.Namespace, tables: EconomicTables) -> dict[str, Any]:
    return score_cvpi(args.cost, args.impact, tables=tables).model_dump(mode="json")


def _run_tier(args: argparse.Namespace, tables: EconomicTables) -> dict[str, Any]:
    scale = ReputationScale(args.scale)
    value = to_decimal(args.score, "score")
    current = tier_for(value, scale, tables=tables)
    upcoming = next_tier_projection(value, current, scale, tables=tables)
    result: dict[str, Any] = {
        "score": str(value),
        "scale": scale.value,
        "tier": current.value,
        "next_tier": upcoming.model_dump(mode="json") if upcoming else None,
    }
    if scale is ReputationScale.CREATOR:
        result["benefits"] = benefits_for(CreatorTier(current), tables=tables).model_dump(
            mode="json"
        )
        result["percentile"] = str(percentile_for(value, tables=tables))
        result["breakdown"] = score_breakdown(value, tables=tables).model_dump(mode="json")
    return result


def _run_adjust(args: argparse.Namespace, tables: EconomicTables) -> dict[str, Any]:
    adjustment = apply_adjustment(
        args.score,
        args.delta,
        args.approval,
        scale=ReputationScale(args.scale),
        tables=tables,
    )
    return {**adjustment.model_dump(mode="json"), "tier_changed": adjustment.tier_changed}


_COMMANDS = {
    "estimate": _run_estimate,
    "settle": _run_settle,
    "cvpi": _run_cvpi,
    "tier": _run_tier,
    "adjust": _run_adjust,
}


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        elif isinstance(value, list):
            rows.append((name, ", ".join(str(v) for v in value)))
        else:
            rows.append((name, "" if value is None else str(value)))
    return rows


def format_table(result: dict[str, Any]) -> str:
    """Format a command result as a two-column field/value table.

    Nested records are flattened into dotted field names.

    Args:
        result: The JSON-ready command result.

    Returns:
        Formatted table string with header row.
    """
    rows = _flatten(result)
    width = max([len("Field"), *(len(name) for name, _ in rows)])
    lines = [f"{'Field'.ljust(width)}  Value", "-" * (width + 7)]
    lines.extend(f"{name.ljust(width)}  {value}" for name, value in rows)
    return "\n".join(lines)


def format_json(result: dict[str, Any]) -> str:
    """Format a command result as a pretty-printed JSON string."""
    return json.dumps(result, indent=2)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the requested calculation, and print the result.

    Returns:
        The process exit code: 0 on success, 1 for invalid input, 2 for a
        zero denominator, 3 when an adjustment needs an approval reference.
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(production=settings.production)

    try:
        result = _COMMANDS[args.command](args, get_tables())
    except DivisionByZeroError as exc:
        print(f"division by zero: {exc}", file=sys.stderr)
        return EXIT_DIVISION_BY_ZERO
    except ApprovalRequiredError as exc:
        print(f"approval required: {exc}", file=sys.stderr)
        return EXIT_APPROVAL_REQUIRED
    except (ValidationError, pydantic.ValidationError) as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return EXIT_VALIDATION

    output = format_json(result) if args.output_format == "json" else format_table(result)
    print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
