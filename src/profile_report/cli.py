"""Command-line interface for profile report export."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import EXPORT_FORMATS, REPORT_TYPES, ExportConfig, load_config
from .errors import ReportError
from .export import ExportResult, export_many, generate_report, save_result
from .record import Record, load_records
from .sample_data import generate_records

logger = logging.getLogger(__name__)


def run_export(
    config: ExportConfig,
    records: Sequence[Record],
    record_id: Optional[str] = None,
) -> List[Path]:
    """Render and save the configured reports. Returns the written paths."""
    brand = config.load_brand()
    options = config.render_options()

    print(f"Exporting {config.report_type} {config.format} report(s) for {len(records)} record(s)...")
    print(f"Output directory: {config.out_dir}")

    results: List[ExportResult]
    if config.report_type == "summary" or record_id:
        results = [generate_report(records, config.format, config.report_type, record_id,
                                   brand, options)]
    else:
        results = export_many(records, config.format, brand, options,
                              max_workers=config.max_workers)

    paths = [save_result(result, config.out_dir) for result in results]
    warnings = sum(len(result.warnings) for result in results)
    pages = sum(result.page_count or 0 for result in results)

    print("\nExport complete!")
    print(f"  Files: {len(paths)}")
    for path in paths:
        print(f"    {path}")
    if pages:
        print(f"  Pages: {pages}")
    if warnings:
        print(f"  Warnings: {warnings}")
    return paths


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Profile report exporter (PDF, Excel, Word)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--records",
        type=Path,
        help="JSON or YAML file holding one record or a list of records",
    )
    source.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Generate N synthetic records instead of reading a file",
    )
    parser.add_argument("--format", choices=EXPORT_FORMATS, help="Output encoding")
    parser.add_argument("--report-type", choices=REPORT_TYPES, help="Report type")
    parser.add_argument("--record-id", help="Render only the record with this id")
    parser.add_argument("--brand", type=Path, help="Brand YAML file (company_name, logo_path, copyright_text)")
    parser.add_argument("--no-logo", action="store_true", help="Leave the logo out of page headers")
    parser.add_argument("--no-photo", action="store_true", help="Leave the profile photo out")
    parser.add_argument("--locale", help="Date locale token, e.g. en-US or en-GB")
    parser.add_argument("--exact-pages", action="store_true",
                        help="Lay out twice so headers show the exact page total")
    parser.add_argument("--out-dir", type=Path, help="Output directory (overrides config)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --sample")
    parser.add_argument("--log-level", help="Logging level (overrides config)")

    args = parser.parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except (ReportError, OSError) as exc:
        parser.error(str(exc))

    # Override with CLI args
    if args.format:
        config.format = args.format
    if args.report_type:
        config.report_type = args.report_type
    if args.brand:
        config.brand_path = args.brand
    if args.no_logo:
        config.include_logo = False
    if args.no_photo:
        config.include_photo = False
    if args.locale:
        config.locale = args.locale
    if args.exact_pages:
        config.exact_page_count = True
    if args.out_dir:
        config.out_dir = args.out_dir
    if args.log_level:
        config.log_level = args.log_level

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.records:
            records = load_records(args.records)
        else:
            records = generate_records(args.sample, seed=args.seed)
        run_export(config, records, args.record_id)
    except (ReportError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
