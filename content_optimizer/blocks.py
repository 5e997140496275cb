"""
Block records of a documentation corpus (content.json) and the simple
per-record filters applied before any regrouping.

Input shape:
    {"blocks": [{"content": "...", "breadcrumbs": ["Docs", "Svelte", ...], "href": "/docs/..."}, ...]}

`breadcrumbs` may also arrive as one string already joined with " > ".
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

BREADCRUMB_SEP = " > "

STRUCTURE_ERROR = 'Invalid JSON structure: expected "blocks" array'


@dataclass(frozen=True)
class Block:
    """One record from the `blocks` array, with breadcrumbs already normalized."""
    content: Any
    breadcrumb: Optional[str]          # canonical " > " joined path, None if missing/malformed
    href: Optional[str]
    parts: Tuple[str, ...] = ()        # breadcrumb segments as given; a joined string is split
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def segments(self) -> List[str]:
        return list(self.parts)


def normalize_breadcrumbs(value: Union[List[str], str, None]) -> Optional[str]:
    """Join a breadcrumb list with ' > '; pass a pre-joined string through.

    Anything else (missing, empty, non-string segments, other types) -> None.
    """
    if isinstance(value, str):
        return value or None
    if isinstance(value, (list, tuple)):
        if not value or not all(isinstance(s, str) for s in value):
            return None
        return BREADCRUMB_SEP.join(value)
    return None


def split_breadcrumb(path: str) -> List[str]:
    return path.split(BREADCRUMB_SEP) if path else []


def breadcrumb_parts(value: Union[List[str], str, None]) -> Tuple[str, ...]:
    """Segments of a breadcrumb. List elements are kept whole, even if they contain ' > '."""
    if normalize_breadcrumbs(value) is None:
        return ()
    if isinstance(value, str):
        return tuple(split_breadcrumb(value))
    return tuple(value)


def to_block(item: Dict[str, Any]) -> Block:
    href = item.get("href")
    breadcrumbs = item.get("breadcrumbs")
    return Block(
        content=item.get("content"),
        breadcrumb=normalize_breadcrumbs(breadcrumbs),
        href=href if isinstance(href, str) and href else None,
        parts=breadcrumb_parts(breadcrumbs),
        raw=item,
    )


def check_structure(data: Any) -> List[Dict[str, Any]]:
    """Return the `blocks` array or raise ValueError."""
    if not isinstance(data, dict):
        raise ValueError(STRUCTURE_ERROR)
    blocks = data.get("blocks")
    if not isinstance(blocks, list):
        raise ValueError(STRUCTURE_ERROR)
    # non-object entries carry nothing usable
    return [b if isinstance(b, dict) else {} for b in blocks]


def load_content(path: Path) -> Tuple[Dict[str, Any], List[Block]]:
    """Read content.json and return (top-level document, parsed blocks).

    Raises FileNotFoundError, json.JSONDecodeError or ValueError; nothing is
    caught here.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    items = check_structure(data)
    return data, [to_block(item) for item in items]


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def has_content(block: Block) -> bool:
    """Only None, "", False, 0 and NaN count as empty; [] and {} are content."""
    content = block.content
    if content is None or content is False or content == "":
        return False
    if isinstance(content, (int, float)) and not isinstance(content, bool):
        return content == content and content != 0
    return True


def should_exclude_href(href: Optional[str], prefixes: Iterable[str]) -> bool:
    """Return True if href starts with any of the excluded prefixes."""
    if not href:
        return False
    return any(href.startswith(p) for p in prefixes if p)


def keep_block(block: Block, exclude_prefixes: Iterable[str]) -> bool:
    return has_content(block) and not should_exclude_href(block.href, exclude_prefixes)


def filter_blocks(blocks: Iterable[Block], exclude_prefixes: Iterable[str] = ()) -> List[Block]:
    prefixes = list(exclude_prefixes)
    return [b for b in blocks if keep_block(b, prefixes)]


def slim_block(block: Block) -> Dict[str, Any]:
    """Project a block to {title?, content}.

    The title is the normalized breadcrumb; a record that was already slimmed
    keeps its existing title so the projection is idempotent.
    """
    title = block.breadcrumb
    if title is None:
        existing = block.raw.get("title")
        title = existing if isinstance(existing, str) and existing else None
    out: Dict[str, Any] = {}
    if title is not None:
        out["title"] = title
    out["content"] = block.content
    return out
