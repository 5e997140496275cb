#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
List every block href found in content.json, numbered from 1.

By default all blocks are listed; with --mode the blocks first go through
that mode's content and path filters.

Usage:
    extract-hrefs
    extract-hrefs --mode slim
"""
import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from content_optimizer.blocks import Block, filter_blocks, load_content
from content_optimizer.config import get_mode, load_config
from content_optimizer.optimize_content import report_error


def collect_hrefs(blocks: Iterable[Block]) -> List[str]:
    return [b.href for b in blocks if b.href]


def format_hrefs(hrefs: List[str]) -> List[str]:
    return [f"{i}. {href}" for i, href in enumerate(hrefs, start=1)]


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Print the hrefs of all blocks in content.json.")
    ap.add_argument("--mode", dest="mode", default=None,
                    help="Apply this mode's filters before listing (default: no filtering).")
    ap.add_argument("--in", dest="inp", default=None,
                    help="Input JSON path (default: the config's input file, content.json, in the current directory).")
    ap.add_argument("--config", dest="config", default=None,
                    help="YAML config with mode definitions (default: bundled cfg.yaml).")
    args = ap.parse_args(argv)

    inp = Path(args.inp) if args.inp else Path.cwd() / "content.json"
    try:
        cfg = load_config(args.config)
        if not args.inp:
            inp = Path.cwd() / cfg["input"]
        _, blocks = load_content(inp)
        if args.mode:
            mode = get_mode(cfg, args.mode)
            blocks = filter_blocks(blocks, mode.exclude_prefixes)
    except Exception as e:
        report_error(e, inp)
        sys.exit(1)

    print("Found hrefs:")
    for line in format_hrefs(collect_hrefs(blocks)):
        print(line)


if __name__ == "__main__":
    main()
