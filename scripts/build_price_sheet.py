from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Sequence

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.errors import PricingError
from src.io.exporting import write_csv_atomic, write_json_atomic
from src.pricing.config import get_default_config, load_pricing_config
from src.pricing.engine import CostOptions
from src.pricing.tables import build_price_matrix, summarize_price_matrix

logger = logging.getLogger("build_price_sheet")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price every program for every partner and write a CSV price sheet."
    )
    parser.add_argument("--output-dir", type=Path, default=ROOT_DIR / "data" / "price_sheets")
    parser.add_argument("--config", type=Path, default=None, help="Pricing config JSON path.")
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Calculation date in YYYY-MM-DD format. Defaults to today.",
    )
    parser.add_argument("--promotional", action="store_true")
    parser.add_argument("--residency", action="store_true")
    parser.add_argument("--alumni", action="store_true")
    parser.add_argument("--reimbursement", type=float, default=None)
    return parser.parse_args(argv)


def build_price_sheet(
    *,
    output_dir: Path,
    run_date: date,
    options: CostOptions,
    config_path: Path | None = None,
) -> dict[str, Any]:
    config = load_pricing_config(config_path) if config_path is not None else get_default_config()
    matrix = build_price_matrix(options, config=config, today=run_date)

    stem = f"price_sheet_{run_date.strftime('%Y%m%d')}"
    csv_path = output_dir / f"{stem}.csv"
    summary_path = output_dir / f"{stem}.json"
    write_csv_atomic(matrix, csv_path)

    summary = {
        "run_date": run_date,
        "config_version": config.version,
        "options": {
            "apply_promotional_discount": options.apply_promotional_discount,
            "is_residency_eligible": options.is_residency_eligible,
            "is_alumni_eligible": options.is_alumni_eligible,
            "employer_reimbursement": options.employer_reimbursement,
        },
        "counts": summarize_price_matrix(matrix),
        "artifact_paths": {"csv": str(csv_path), "summary": str(summary_path)},
    }
    write_json_atomic(summary, summary_path)
    logger.info("Wrote price sheet rows=%d to %s", matrix.shape[0], csv_path)
    return summary


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_date = date.fromisoformat(args.date) if args.date else date.today()
    options = CostOptions(
        apply_promotional_discount=args.promotional,
        is_residency_eligible=args.residency,
        is_alumni_eligible=args.alumni,
        employer_reimbursement=args.reimbursement,
    )
    try:
        summary = build_price_sheet(
            output_dir=args.output_dir,
            run_date=run_date,
            options=options,
            config_path=args.config,
        )
    except PricingError:
        logger.exception("Price sheet generation failed.")
        return 1

    print(f"Wrote price sheet: {summary['artifact_paths']['csv']}")
    print(f"Wrote summary: {summary['artifact_paths']['summary']}")
    print(
        "Counts: "
        f"rows={summary['counts']['rows']}, "
        f"programs={summary['counts']['programs']}, "
        f"partners={summary['counts']['partners']}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
