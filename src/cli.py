"""Command-line interface for javacg."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from pathlib import Path

from artifacts.write import write_callgraph
from callgraph.analyzer import CallGraphAnalyzer, ExternalAnalyzer, PrecomputedAnalyzer
from config.settings import ConfigError, JavaCGConfig, load_config
from contract.validation import validate_callgraph
from errors import CallGraphError
from maven.coordinate import MavenCoordinate
from maven.fetch import HttpFetcher, MavenResolver
from pipeline.batch import format_report, run_batch
from pipeline.process import (
    generate_for_coordinate,
    generate_for_jar,
    merge_dependency_sets,
)
from utils import parse_timestamp

logger = logging.getLogger(__name__)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--repos",
        type=_split_csv,
        default=None,
        help="Comma-separated Maven repositories (default: config or Maven Central)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory for call graphs (default: config output_dir)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also write call graphs to stdout",
    )
    parser.add_argument(
        "--analyzer",
        default=None,
        help="Analyzer command line; classpath entries are appended",
    )
    parser.add_argument(
        "--raw-graph",
        default=None,
        help="Use a precomputed raw call graph JSON instead of running the analyzer",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="javacg")
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: ./javacg.toml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: config log_level)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    coord_parser = subparsers.add_parser(
        "coord", help="Generate the call graph of a Maven coordinate"
    )
    coord_parser.add_argument("coordinate", help="groupId:artifactId:version")
    coord_parser.add_argument(
        "-t", "--timestamp", default="0", help="Release timestamp (default: 0)"
    )
    _add_common_options(coord_parser)

    jar_parser = subparsers.add_parser(
        "jar", help="Generate the call graph of a local JAR file"
    )
    jar_parser.add_argument("path", help="Path to the JAR file")
    jar_parser.add_argument("-p", "--product", default="PRODUCT", help="Product name")
    jar_parser.add_argument("-v", "--version", default="0.0.0", help="Product version")
    jar_parser.add_argument(
        "-d",
        "--dependencies",
        type=_split_csv,
        default=[],
        help="Comma-separated coordinates whose dependencies are merged in",
    )
    jar_parser.add_argument(
        "-t", "--timestamp", default="0", help="Release timestamp (default: 0)"
    )
    _add_common_options(jar_parser)

    batch_parser = subparsers.add_parser(
        "batch", help="Generate call graphs for a file of JSON coordinate lines"
    )
    batch_parser.add_argument("path", help="File with one JSON coordinate per line")
    _add_common_options(batch_parser)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate an emitted call graph document"
    )
    validate_parser.add_argument("path", help="Call graph JSON file")

    return parser


def _resolve_analyzer(
    args: argparse.Namespace, config: JavaCGConfig
) -> CallGraphAnalyzer | None:
    if args.raw_graph is not None:
        return PrecomputedAnalyzer(Path(args.raw_graph).expanduser().resolve())
    if args.analyzer is not None:
        return ExternalAnalyzer(shlex.split(args.analyzer), timeout=config.analyzer.timeout)
    if config.analyzer.command:
        return ExternalAnalyzer(config.analyzer.command, timeout=config.analyzer.timeout)
    return None


def _resolve_output_dir(out_dir: str | None, config: JavaCGConfig) -> Path | None:
    chosen = out_dir if out_dir is not None else config.output_dir
    if chosen is None:
        return None
    return Path(chosen).expanduser().resolve()


def _handle_coord(
    args: argparse.Namespace,
    config: JavaCGConfig,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
) -> int:
    coordinate = MavenCoordinate.from_string(args.coordinate).with_repos(
        args.repos or config.repositories
    )
    graph = generate_for_coordinate(
        coordinate,
        parse_timestamp(args.timestamp),
        resolver=resolver,
        analyzer=analyzer,
    )
    if graph.is_callgraph_empty():
        logger.warning("Empty call graph for %s; nothing written", coordinate)
        return 0
    write_callgraph(
        graph,
        out_dir=_resolve_output_dir(args.output, config),
        to_stdout=args.stdout,
    )
    return 0


def _handle_jar(
    args: argparse.Namespace,
    config: JavaCGConfig,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
) -> int:
    repos = args.repos or config.repositories
    coordinates = [
        MavenCoordinate.from_string(dep).with_repos(repos) for dep in args.dependencies
    ]
    depset = merge_dependency_sets(coordinates, resolver=resolver)
    graph = generate_for_jar(
        Path(args.path).expanduser().resolve(),
        product=args.product,
        version=args.version,
        timestamp=parse_timestamp(args.timestamp),
        depset=depset,
        analyzer=analyzer,
    )
    if graph.is_callgraph_empty():
        logger.warning("Empty call graph for %s; nothing written", args.path)
        return 0
    write_callgraph(
        graph,
        out_dir=_resolve_output_dir(args.output, config),
        to_stdout=args.stdout,
    )
    return 0


def _handle_batch(
    args: argparse.Namespace,
    config: JavaCGConfig,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
) -> int:
    out_dir = _resolve_output_dir(args.output, config)
    batch_path = Path(args.path).expanduser().resolve()
    try:
        lines = batch_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        sys.stderr.write(f"error: couldn't read coordinates file: {exc}\n")
        return 2

    report = run_batch(
        lines,
        resolver=resolver,
        analyzer=analyzer,
        repos=args.repos or config.repositories,
        on_graph=lambda graph: write_callgraph(
            graph, out_dir=out_dir, to_stdout=args.stdout
        ),
    )
    sys.stdout.write(format_report(report) + "\n")
    return 0


def _handle_validate(path: str) -> int:
    result = validate_callgraph(Path(path).expanduser().resolve())
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(
            Path.cwd(),
            Path(args.config).expanduser().resolve() if args.config else None,
        )
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    logging.basicConfig(level=args.log_level or config.log_level)

    if args.command == "validate":
        return _handle_validate(args.path)

    analyzer = _resolve_analyzer(args, config)
    if analyzer is None:
        sys.stderr.write(
            "error: no analyzer configured (use --analyzer, --raw-graph or "
            "[analyzer] command in javacg.toml)\n"
        )
        return 2

    handlers = {
        "coord": _handle_coord,
        "jar": _handle_jar,
        "batch": _handle_batch,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise AssertionError

    with HttpFetcher(timeout=config.http.timeout) as fetcher:
        resolver = MavenResolver(fetcher)
        try:
            return handler(args, config, resolver, analyzer)
        except CallGraphError as exc:
            sys.stderr.write(f"error: {exc.kind}: {exc}\n")
            return 1
        except OSError as exc:
            sys.stderr.write(f"error: {exc}\n")
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
