"""
Regroup flat blocks into a chapter -> section tree and merge each section into
one markdown document.

Two ways of deciding (chapter, section) for a block:

  FixedSchemaMatcher       chapters and their sections come from configuration,
                           e.g. {"Docs > Svelte": ["Runes", ...]}.
  DiscoveredSchemaMatcher  chapter = segments[0] > segments[1], section = segments[2],
                           valid pairs discovered from the unfiltered input.

Matching is segment-wise on the breadcrumb list: a configured name matches
when it equals the first n segments joined with " > ", and when several
configured names match, the one covering the most segments wins.

group_blocks() folds the blocks into {(chapter, section): (SectionEntry, ...)};
build_chapter_tree() renders that mapping into the JSON output shape.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from content_optimizer.blocks import BREADCRUMB_SEP, Block

HEADING_PREFIX = "### "

SectionKey = Tuple[str, str]
Placement = Tuple[str, str, str]  # (chapter, section, title)


@dataclass(frozen=True)
class SectionEntry:
    title: str
    content: str


def _longest_prefix(segments: Sequence[str], names: Sequence[str]) -> Optional[Tuple[str, int]]:
    """Return (name, n) for the longest name equal to the first n segments joined with ' > '."""
    best: Optional[Tuple[str, int]] = None
    for name in names:
        for n in range(1, len(segments) + 1):
            joined = BREADCRUMB_SEP.join(segments[:n])
            if len(joined) >= len(name):
                if joined == name and (best is None or n > best[1]):
                    best = (name, n)
                break
    return best


class FixedSchemaMatcher:
    """Match blocks against a configured {chapter: [section, ...]} schema."""

    def __init__(self, chapters: Dict[str, List[str]]):
        self.chapters = chapters
        self._chapters = list(chapters)

    def bucket_order(self) -> List[SectionKey]:
        return [(ch, sec) for ch, sections in self.chapters.items() for sec in sections]

    def match(self, block: Block) -> Optional[Placement]:
        segments = block.segments
        if not segments:
            return None
        chapter = _longest_prefix(segments, self._chapters)
        if chapter is None:
            return None
        chapter_name, used = chapter
        rest = segments[used:]
        section = _longest_prefix(rest, self.chapters[chapter_name])
        if section is None:
            return None
        section_name, used = section
        tail = rest[used:]
        title = BREADCRUMB_SEP.join(tail) if tail else section_name
        return chapter_name, section_name, title


def discover_sections(blocks: Iterable[Block]) -> List[SectionKey]:
    """First pass: every (segments[0] > segments[1], segments[2]) pair, in first-seen order.

    Runs over the unfiltered blocks; only paths with at least 3 segments count.
    """
    seen: Dict[SectionKey, None] = {}
    for block in blocks:
        segments = block.segments
        if len(segments) < 3:
            continue
        key = (BREADCRUMB_SEP.join(segments[:2]), segments[2])
        seen.setdefault(key, None)
    return list(seen)


class DiscoveredSchemaMatcher:
    """Match blocks against (chapter, section) pairs found in the data itself."""

    min_segments = 4

    def __init__(self, pairs: Iterable[SectionKey]):
        self.pairs = list(dict.fromkeys(pairs))
        self._known = set(self.pairs)

    @classmethod
    def from_blocks(cls, blocks: Iterable[Block]) -> "DiscoveredSchemaMatcher":
        return cls(discover_sections(blocks))

    def bucket_order(self) -> List[SectionKey]:
        return list(self.pairs)

    def match(self, block: Block) -> Optional[Placement]:
        segments = block.segments
        if len(segments) < self.min_segments:
            return None
        key = (BREADCRUMB_SEP.join(segments[:2]), segments[2])
        if key not in self._known:
            return None
        return key[0], key[1], BREADCRUMB_SEP.join(segments[3:])


def group_blocks(blocks: Sequence[Block], matcher,
                 progress: bool = False) -> Dict[SectionKey, Tuple[SectionEntry, ...]]:
    """Fold blocks into {(chapter, section): entries}, keeping input order.

    Buckets follow matcher.bucket_order(); empty buckets are left out.
    """
    buckets: Dict[SectionKey, List[SectionEntry]] = {key: [] for key in matcher.bucket_order()}
    for block in tqdm(blocks, desc="Grouping blocks", unit="block", disable=not progress):
        placement = matcher.match(block)
        if placement is None:
            continue
        chapter, section, title = placement
        bucket = buckets.get((chapter, section))
        if bucket is None:
            continue
        bucket.append(SectionEntry(title=title, content=block.content))
    return {key: tuple(entries) for key, entries in buckets.items() if entries}


def merge_section_content(entries: Iterable[SectionEntry]) -> str:
    """Render entries as '### title', blank line, content; blocks separated by a blank line."""
    parts = [f"{HEADING_PREFIX}{e.title}\n\n{e.content}" for e in entries]
    return "\n\n".join(parts).strip()


def build_chapter_tree(grouped: Dict[SectionKey, Tuple[SectionEntry, ...]],
                       merge: bool = True) -> List[Dict]:
    """Render grouped entries as [{chapter, sections: [...]}, ...]."""
    chapters: Dict[str, List[Dict]] = {}
    for (chapter, section), entries in grouped.items():
        if not entries:
            continue
        if merge:
            rendered = {"section": section, "content": merge_section_content(entries)}
        else:
            rendered = {
                "section": section,
                "blocks": [{"title": e.title, "content": e.content} for e in entries],
            }
        chapters.setdefault(chapter, []).append(rendered)
    return [{"chapter": ch, "sections": sections} for ch, sections in chapters.items() if sections]


def section_counts(grouped: Dict[SectionKey, Tuple[SectionEntry, ...]]) -> Dict[str, Dict[str, int]]:
    """Block count per chapter/section, in output order."""
    counts: Dict[str, Dict[str, int]] = {}
    for (chapter, section), entries in grouped.items():
        if entries:
            counts.setdefault(chapter, {})[section] = len(entries)
    return counts
