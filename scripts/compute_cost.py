from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Sequence

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.errors import PricingError
from src.io.exporting import write_json_atomic
from src.pricing.availability import get_availability
from src.pricing.config import PricingConfig, get_default_config, load_pricing_config
from src.pricing.engine import CostOptions, compute_cost

logger = logging.getLogger("compute_cost")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute an itemized tuition cost breakdown.")
    parser.add_argument("--program", type=str, default=None, help="Program code, e.g. 'mscs'.")
    parser.add_argument("--partner", type=str, default=None, help="Partner id, e.g. 'pseg'.")
    parser.add_argument("--promotional", action="store_true", help="Apply the promotional discount.")
    parser.add_argument("--residency", action="store_true", help="Student qualifies for the residency discount.")
    parser.add_argument("--alumni", action="store_true", help="Student qualifies for the alumni discount.")
    parser.add_argument(
        "--reimbursement",
        type=float,
        default=None,
        help="Total employer reimbursement to subtract after all discounts.",
    )
    parser.add_argument(
        "--annual-reimbursement",
        type=float,
        default=None,
        help="Yearly employer benefit; capped at the policy maximum and multiplied by program years.",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Calculation date in YYYY-MM-DD format. Defaults to today.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Pricing config JSON path.")
    parser.add_argument("--output", type=Path, default=None, help="Also write the result to this JSON path.")
    parser.add_argument(
        "--availability",
        action="store_true",
        help="Report which discount toggles apply instead of computing a price.",
    )
    parser.add_argument("--list-partners", action="store_true", help="List partners and exit.")
    return parser.parse_args(argv)


def _coerce_date(value: str | None) -> date:
    if value is None:
        return date.today()
    return date.fromisoformat(value)


def _load_config(path: Path | None) -> PricingConfig:
    if path is None:
        return get_default_config()
    return load_pricing_config(path)


def run(args: argparse.Namespace) -> dict[str, Any]:
    config = _load_config(args.config)
    today = _coerce_date(args.date)

    if args.list_partners:
        return {
            "config_version": config.version,
            "partners": [
                {"id": partner.id, "name": partner.name} for partner in config.catalog.list_partners()
            ],
        }

    if not args.program or not args.partner:
        raise ValueError("--program and --partner are required.")

    if args.availability:
        availability = get_availability(args.program, args.partner, config=config, today=today)
        return availability.to_dict()

    reimbursement = args.reimbursement
    if args.annual_reimbursement is not None:
        program = config.catalog.get_program(args.program)
        reimbursement = config.reimbursement.annual_reimbursement_total(program, args.annual_reimbursement)

    options = CostOptions(
        apply_promotional_discount=args.promotional,
        is_residency_eligible=args.residency,
        is_alumni_eligible=args.alumni,
        employer_reimbursement=reimbursement,
    )
    breakdown = compute_cost(args.program, args.partner, options, config=config, today=today)
    return breakdown.to_dict()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        result = run(args)
    except PricingError as exc:
        logger.error("Unable to calculate: %s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2

    if args.output is not None:
        write_json_atomic(result, args.output)
        logger.info("Wrote result to %s", args.output)
    print(json.dumps(result, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
