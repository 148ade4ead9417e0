#!/usr/bin/env python3
"""Classify incident reports from a JSONL file and print a summary."""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from civic_intake.classifier.scorer import PriorityScorer
from civic_intake.classifier.tables import default_tables, load_tables
from civic_intake.data.loader import ReportLoader
from civic_intake.log import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Classify incident reports by priority")
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("data/sample/reports.jsonl"),
        help="Input JSONL file with reports",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional JSONL file for report + classification records",
    )
    parser.add_argument(
        "--tables",
        type=Path,
        default=None,
        help="Optional JSON file overriding the scoring tables",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip malformed lines instead of failing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every scoring stage",
    )

    args = parser.parse_args()
    configure_logging(level="DEBUG" if args.verbose else None)

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}")
        return 1

    tables = load_tables(args.tables) if args.tables else default_tables()
    scorer = PriorityScorer(tables)

    print(f"Loading reports from {args.input}...")
    loader = ReportLoader()
    reports = loader.load_jsonl(args.input, skip_invalid=args.skip_invalid)
    print(f"Classifying {len(reports)} reports")

    results = scorer.classify_batch(reports)

    print(f"\n{'=' * 60}")
    print("CLASSIFICATIONS")
    print("=" * 60)
    for report, result in zip(reports, results):
        probs = result.probabilities
        print(f"  {report.type} @ {report.location or '-'}")
        print(f"    Description: {report.description[:50]}")
        print(
            f"    Priority: {result.priority.value} ({result.confidence}%)"
            f"  [low {probs.low} / medium {probs.medium} / high {probs.high}]"
        )
        print()

    counts = Counter(result.priority.value for result in results)
    print("Priority distribution:")
    for priority in ("High", "Medium", "Low"):
        print(f"  {priority}: {counts.get(priority, 0)}")

    if args.output:
        loader.save_results(reports, results, args.output)
        print(f"\nSaved results to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
