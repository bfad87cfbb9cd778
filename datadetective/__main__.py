import argparse
import json
import sys

from .errors import LoadError
from .loader import load_table
from .logging_config import setup_logging
from .orchestrator import AnalysisOrchestrator
from .report import build_report, render_markdown, write_report, _to_jsonable


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="datadetective", description="Analyze a CSV/JSON table and print findings")
    p.add_argument("path", help="Input file (.csv, .tsv, .txt or .json)")
    p.add_argument("--output-dir", default=None, help="Write report.json and report.md to this directory")
    p.add_argument("--json", action="store_true", help="Print the report as JSON instead of Markdown")
    p.add_argument("--log-level", default="WARNING", help="Logging level")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        table = load_table(args.path)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    analysis = AnalysisOrchestrator().analyze(table)
    report = build_report(analysis, input_name=args.path)

    if args.output_dir:
        paths = write_report(report, args.output_dir)
        print(f"Report written to {paths['json']} and {paths['markdown']}", file=sys.stderr)

    if args.json:
        print(json.dumps(report, indent=2, default=_to_jsonable))
    else:
        print(render_markdown(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
