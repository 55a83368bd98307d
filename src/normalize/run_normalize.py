from __future__ import annotations

import argparse
from pathlib import Path

from src.common.config import load_settings
from src.common.errors import CotDataError
from src.common.logging import setup_logging
from src.common.paths import ProjectPaths
from src.ingest.loader import load
from src.normalize.qa_checks import qa_duplicates, run_qa


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Load, normalize and QA a COT positions table")
    p.add_argument("--root", default=".", help="project root")
    p.add_argument("--source", default=None, help="URL or path (overrides config / COT_DATA_URL)")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args(argv)

    logger = setup_logging(args.log_level)
    paths = ProjectPaths(Path(args.root).resolve())
    settings = load_settings(paths)

    try:
        ds = load(args.source, settings)
    except CotDataError as e:
        logger.error(f"[normalize] load failed: {e}")
        raise SystemExit(f"Failed to load data: {e}")

    errors = run_qa(ds.records)
    for w in qa_duplicates(ds.records):
        logger.warning(f"[normalize] {w}")

    if errors:
        logger.error("[normalize] QA FAILED:\n" + "\n".join(errors))
        raise SystemExit("Normalization QA failed")

    bounds = ds.bounds()
    logger.info(f"[normalize] source={ds.source}")
    logger.info(f"[normalize] rows read={ds.rows_read} kept={len(ds)} rejected={ds.rows_rejected}")
    logger.info(f"[normalize] deltas: {'sourced' if ds.deltas_sourced else 'derived'}")
    if bounds is not None:
        logger.info(f"[normalize] date range: {bounds.start}..{bounds.end}")

    counts = {}
    for r in ds.records:
        counts[r.symbol] = counts.get(r.symbol, 0) + 1
    logger.info(f"[normalize] symbols: {len(counts)}")
    for sym, n in counts.items():
        logger.info(f"  {sym}: {n}")

    logger.info("[normalize] DONE")
    return 0


if __name__ == "__main__":
    main()
