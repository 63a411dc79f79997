#!/usr/bin/env python3

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from typing import Dict, List, Optional

from valex import (
    Context,
    Document,
    EntityResolver,
    Locale,
    Options,
    RuleEvaluator,
    __version__,
    dimension_set,
    rules_for,
)
from valex.grammars import supported_languages
from valex.vx_types import DimensionKind


def show_resolution_statistics(
    progress_data: Dict, forest_size: int, output_count: int, rule_counts: Dict = None
):
    """Display detailed resolution statistics."""
    total_time = time.time() - progress_data["start_time"]
    stages = progress_data.get("stages", [])

    sys.stderr.write("=== Resolution Statistics ===\n")
    sys.stderr.write(f"Total processing time: {total_time:.2f} seconds\n")
    sys.stderr.write(f"Forest nodes: {forest_size}\n")
    sys.stderr.write(f"Output entities: {output_count}\n")
    sys.stderr.write(
        f"Reduction: {forest_size - output_count} nodes ({((forest_size - output_count) / forest_size * 100) if forest_size else 0:.1f}%)\n"
    )

    if rule_counts is not None:
        sys.stderr.write("\nForest breakdown by rule:\n")
        for rule_name, count in sorted(rule_counts.items(), key=lambda kv: (-kv[1], kv[0])):
            sys.stderr.write(f"  {rule_name}: {count}\n")

    if stages:
        sys.stderr.write("\nStage breakdown:\n")
        stage_times: Dict[str, List[float]] = {}
        for i, stage_info in enumerate(stages):
            prev_time = stages[i - 1]["timestamp"] if i > 0 else 0
            stage_times.setdefault(stage_info["stage"], []).append(
                stage_info["timestamp"] - prev_time
            )

        for stage, times in stage_times.items():
            total_stage_time = sum(times)
            avg_time = total_stage_time / len(times) if times else 0
            sys.stderr.write(
                f"  {stage}: {total_stage_time:.2f}s (avg: {avg_time:.2f}s per update)\n"
            )

    sys.stderr.write("=============================\n\n")


def parse_reference_time(value: str) -> datetime:
    """argparse type for --reference-time: ISO-8601, "Z" accepted for UTC."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 time: {value!r}")


def parse_dims(value: str) -> List[DimensionKind]:
    """argparse type for --dims: a comma-separated list of dimension names."""
    try:
        return sorted(
            dimension_set(name for name in value.split(",") if name.strip()),
            key=lambda kind: kind.order,
        )
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract numbers, amounts, distances, times and other values from a text file."
    )
    parser.add_argument("input_file", nargs="?", help="Path to input text file")
    parser.add_argument(
        "--dims",
        type=parse_dims,
        default=None,
        help="Comma-separated dimensions to extract (default: all), e.g. amount-of-money,distance",
    )
    parser.add_argument(
        "--locale",
        default="en",
        help=f"Locale of the input text (supported languages: {', '.join(supported_languages())})",
    )
    parser.add_argument(
        "--reference-time",
        type=parse_reference_time,
        default=None,
        help="ISO-8601 reference time for relative times (default: now, UTC)",
    )
    parser.add_argument(
        "--with-latent",
        action="store_true",
        help="Include latent entities, such as a currency with no amount",
    )
    parser.add_argument(
        "--max-passes",
        type=int,
        default=None,
        help="Cap on rule composition passes",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="Emit all results in a single pretty-printed JSON array",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all progress updates",
    )
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Skip entity resolution and emit the raw parse forest",
    )
    parser.add_argument(
        "--show-stats",
        action="store_true",
        help="Show detailed resolution statistics",
    )
    parser.add_argument(
        "--show-timing",
        action="store_true",
        help="Show detailed timing information",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )
    return parser


def forest_records(evaluator: RuleEvaluator) -> List[Dict]:
    """Raw forest nodes carrying a dimension payload, in document order."""
    records = []
    for _, node in evaluator.stash.items():
        if node.dimension is None:
            continue
        records.append(
            {
                "offset": node.range.start,
                "length": node.range.length,
                "rule": node.rule_name,
                "dim": node.dimension.value,
                "match": evaluator.document.body(node.range),
                "latent": node.latent,
            }
        )
    return records


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print("Version information:")
        print(f"  valex: {__version__}")
        print(f"  grammars: {', '.join(supported_languages())}")
        sys.exit(0)

    if not args.input_file:
        parser.error("the following arguments are required: input_file")

    # Start overall timing
    overall_start_time = time.time()

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("extract")

    try:
        locale = Locale.parse(args.locale)
        rules = rules_for(locale, args.dims)
    except ValueError as e:
        parser.error(str(e))

    # Time file loading
    file_load_start = time.time()
    try:
        with open(args.input_file, "rb") as f:
            raw = f.read()
    except OSError as e:
        parser.error(f"cannot read {args.input_file}: {e}")
    try:
        document = Document(raw)
    except UnicodeDecodeError as e:
        raise RuntimeError(f"{args.input_file} is not valid UTF-8") from e
    file_load_time = time.time() - file_load_start

    if args.show_timing:
        sys.stderr.write(f"File loading time: {file_load_time:.3f}s\n")

    # Time rule evaluation
    eval_start_time = time.time()
    logger.info("Applying %s rules to %s bytes", len(rules), len(raw))
    evaluator_args = {} if args.max_passes is None else {"max_passes": args.max_passes}
    evaluator = RuleEvaluator(rules, document, **evaluator_args)
    stash = evaluator.evaluate()
    eval_time = time.time() - eval_start_time

    if args.show_timing:
        sys.stderr.write("\n=== Rule Evaluation Timings ===\n")
        sys.stderr.write(f"Rule evaluation time: {eval_time:.3f} seconds\n")
        sys.stderr.write(f"  Passes: {evaluator.passes} (converged: {evaluator.converged})\n")
        sys.stderr.write(f"  Forest nodes: {len(stash)}\n")
        sys.stderr.write("=============================\n\n")

    rule_counts: Dict[str, int] = {}
    for _, node in stash.items():
        rule_counts[node.rule_name] = rule_counts.get(node.rule_name, 0) + 1

    if args.no_resolve:
        output = forest_records(evaluator)
        if args.dims:
            wanted = {kind.value for kind in args.dims}
            output = [record for record in output if record["dim"] in wanted]

        sys.stderr.write(f"Found {len(output)} forest nodes using {len(rules)} rules\n")
        if args.show_stats:
            dummy_progress_data = {"stages": [], "start_time": overall_start_time}
            show_resolution_statistics(dummy_progress_data, len(stash), len(output), rule_counts)
    else:
        context = Context(
            locale=locale,
            **({} if args.reference_time is None else {"reference_time": args.reference_time}),
        )
        options = Options(with_latent=args.with_latent)
        resolver = EntityResolver(document)

        # Track resolution progress and timing
        resolve_start_time = time.time()
        progress_data = {"stages": [], "start_time": resolve_start_time}

        def progress_callback(stage: str, current: int, total: int):
            """Progress callback for EntityResolver."""
            if not args.quiet:
                pct = (current / total * 100) if total else 0
                sys.stderr.write(f"\rResolution: {stage}: {current}/{total} ({pct:.1f}%)")
                sys.stderr.flush()

            progress_data["stages"].append(
                {
                    "stage": stage,
                    "current": current,
                    "total": total,
                    "timestamp": time.time() - resolve_start_time,
                }
            )

        entities = resolver.resolve(
            stash,
            dimension_set(args.dims),
            context,
            options,
            progress_callback=progress_callback,
        )

        resolve_time = time.time() - resolve_start_time
        if not args.quiet:
            sys.stderr.write("\n")
        if args.show_timing:
            sys.stderr.write(f"Resolution time: {resolve_time:.3f}s\n")
        if args.show_stats:
            show_resolution_statistics(progress_data, len(stash), len(entities), rule_counts)

        output = [entity.to_dict() for entity in entities]
        sys.stderr.write(f"Found {len(output)} entities using {len(rules)} rules\n")

    overall_time = time.time() - overall_start_time
    if args.show_timing:
        sys.stderr.write(f"Overall processing time: {overall_time:.3f} seconds\n")

    # Output results
    if args.output:
        output_stream = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        if args.pretty_print:
            json.dump(output, output_stream, indent=2, ensure_ascii=False)
            output_stream.write("\n")
        else:
            for item in output:
                output_stream.write(json.dumps(item, ensure_ascii=False))
                output_stream.write("\n")
    finally:
        if output_stream is not sys.stdout:
            output_stream.close()


if __name__ == "__main__":
    # Ensure UTF-8 encoding for stdout
    sys.stdout.reconfigure(encoding="utf-8")
    main()
