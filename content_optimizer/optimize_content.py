#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Optimize a documentation corpus (content.json) for use as LLM/RAG context.

Modes (see cfg.yaml):
  - filter     : drop blocks without content and blocks whose href starts with an
                 excluded prefix; write {...original fields, blocks: [...]}.
                 With `slim: true` each block is reduced to {title, content}.
  - fixed      : regroup blocks under a configured chapter -> section schema and
                 merge each section into one markdown document.
  - discovered : same, but chapters/sections come from the breadcrumbs themselves
                 (chapter = first two levels, section = third level).

Grouping modes also write a minified copy and, optionally, one JSON Lines
record per section.

Usage:
    optimize-content
    optimize-content --mode svelte
    python -m content_optimizer.optimize_content --mode discover --in ./content.json --progress
"""
import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from content_optimizer.blocks import Block, filter_blocks, load_content, slim_block
from content_optimizer.config import ModeConfig, get_mode, load_config
from content_optimizer.grouping import (
    DiscoveredSchemaMatcher,
    FixedSchemaMatcher,
    build_chapter_tree,
    group_blocks,
    section_counts,
)
from content_optimizer.stats import OptimizationStats, print_report
from content_optimizer.writer import (
    byte_size,
    to_minified_json,
    to_pretty_json,
    write_sections_jsonl,
    write_text_atomic,
)


@dataclass
class RunResult:
    stats: OptimizationStats
    outputs: List[Path] = field(default_factory=list)


def build_matcher(mode: ModeConfig, blocks: List[Block]):
    """Pick the matcher for a grouping mode. Discovery always sees the unfiltered blocks."""
    if mode.strategy == "fixed":
        return FixedSchemaMatcher(mode.chapters)
    if mode.strategy == "discovered":
        return DiscoveredSchemaMatcher.from_blocks(blocks)
    raise ValueError(f"Mode '{mode.name}' does not group blocks")


def _write_outputs(mode: ModeConfig, payload: Any, out_dir: Path) -> Dict[str, Any]:
    """Write the pretty (and optional minified) JSON. Returns paths and sizes."""
    pretty = to_pretty_json(payload)
    out_path = out_dir / mode.output
    write_text_atomic(out_path, pretty)
    written = {"outputs": [out_path], "formatted_size": byte_size(pretty), "minified_size": None}

    if mode.minified_output:
        minified = to_minified_json(payload)
        min_path = out_dir / mode.minified_output
        write_text_atomic(min_path, minified)
        written["outputs"].append(min_path)
        written["minified_size"] = byte_size(minified)
    return written


def run_filter_mode(mode: ModeConfig, data: Dict[str, Any], blocks: List[Block], out_dir: Path) -> RunResult:
    kept = filter_blocks(blocks, mode.exclude_prefixes)
    if mode.slim:
        out_blocks = [slim_block(b) for b in kept]
    else:
        out_blocks = [b.raw for b in kept]
    optimized = {**data, "blocks": out_blocks}

    written = _write_outputs(mode, optimized, out_dir)

    stats = OptimizationStats(
        original_blocks=len(blocks),
        kept_blocks=len(kept),
        original_size=byte_size(to_pretty_json(data)),
        formatted_size=written["formatted_size"],
        original_minified_size=byte_size(to_minified_json(data)) if mode.minified_output else None,
        minified_size=written["minified_size"],
    )
    return RunResult(stats=stats, outputs=written["outputs"])


def run_grouping_mode(mode: ModeConfig, data: Dict[str, Any], blocks: List[Block], out_dir: Path,
                      progress: bool = False) -> RunResult:
    matcher = build_matcher(mode, blocks)
    kept = filter_blocks(blocks, mode.exclude_prefixes)
    grouped = group_blocks(kept, matcher, progress=progress)
    tree = build_chapter_tree(grouped, merge=mode.merge_sections)

    written = _write_outputs(mode, tree, out_dir)
    outputs = written["outputs"]
    if mode.jsonl_output:
        jsonl_path = out_dir / mode.jsonl_output
        write_sections_jsonl(jsonl_path, tree)
        outputs.append(jsonl_path)

    stats = OptimizationStats(
        original_blocks=len(blocks),
        kept_blocks=len(kept),
        original_size=byte_size(to_pretty_json(data)),
        formatted_size=written["formatted_size"],
        original_minified_size=byte_size(to_minified_json(data)) if mode.minified_output else None,
        minified_size=written["minified_size"],
        grouped_blocks=sum(len(entries) for entries in grouped.values()),
        breakdown=section_counts(grouped),
    )
    return RunResult(stats=stats, outputs=outputs)


def run_mode(mode: ModeConfig, inp: Path, out_dir: Path, progress: bool = False) -> RunResult:
    """Read `inp`, apply `mode`, write its outputs under `out_dir`."""
    data, blocks = load_content(inp)
    if mode.is_grouping:
        return run_grouping_mode(mode, data, blocks, out_dir, progress=progress or mode.progress)
    return run_filter_mode(mode, data, blocks, out_dir)


def report_error(exc: Exception, inp: Path) -> None:
    if isinstance(exc, FileNotFoundError) and exc.filename is not None and str(exc.filename) == str(inp):
        print(f"Error: {inp.name} file not found in current directory", file=sys.stderr)
    elif isinstance(exc, json.JSONDecodeError):
        print(f"Error: Invalid JSON format in {inp.name}", file=sys.stderr)
    else:
        print(f"Error: {exc}", file=sys.stderr)


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Filter and regroup the blocks of a content.json documentation corpus.")
    ap.add_argument("--mode", dest="mode", default=None,
                    help="Mode from the config file (default: the config's default_mode).")
    ap.add_argument("--in", dest="inp", default=None,
                    help="Input JSON path (default: the config's input file, content.json, in the current directory).")
    ap.add_argument("--config", dest="config", default=None,
                    help="YAML config with mode definitions (default: bundled cfg.yaml).")
    ap.add_argument("--progress", dest="progress", action="store_true",
                    help="Show a progress bar while grouping.")
    args = ap.parse_args(argv)

    inp = Path(args.inp) if args.inp else Path.cwd() / "content.json"
    try:
        cfg = load_config(args.config)
        if not args.inp:
            inp = Path.cwd() / cfg["input"]
        mode = get_mode(cfg, args.mode)
        result = run_mode(mode, inp, Path.cwd(), progress=args.progress)
    except Exception as e:
        report_error(e, inp)
        sys.exit(1)

    print(f"Optimization complete ({mode.name}):")
    print_report(result.stats)
    for path in result.outputs:
        print(f"Output saved to: {path}")


if __name__ == "__main__":
    main()
