import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable

import jsonlines


def to_pretty_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def to_minified_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def _temp_path(out_path: Path) -> Path:
    fd, tmp = tempfile.mkstemp(prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent)
    os.close(fd)
    return Path(tmp)


def _output_mode(out_path: Path) -> int:
    """Permissions for a new output: keep the existing file's mode, else 0o666 minus the umask."""
    if out_path.exists():
        return stat.S_IMODE(out_path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _replace(tmp: Path, out_path: Path) -> None:
    # mkstemp creates 0600 files
    os.chmod(tmp, _output_mode(out_path))
    os.replace(tmp, out_path)


def write_text_atomic(out_path: Path, text: str) -> None:
    """Write text to out_path so the file is either complete or untouched."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    tmp = _temp_path(out_path)
    try:
        tmp.write_text(text, encoding="utf-8")
        _replace(tmp, out_path)
    finally:
        if tmp.exists():
            tmp.unlink()


def write_sections_jsonl(out_path: Path, tree: Iterable[Dict[str, Any]]) -> int:
    """Write one JSON Lines record per section of a chapter tree. Returns the record count."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    tmp = _temp_path(out_path)
    count = 0
    try:
        with jsonlines.open(tmp, mode="w", dumps=to_minified_json) as writer:
            for chapter in tree:
                for section in chapter["sections"]:
                    writer.write({"chapter": chapter["chapter"], **section})
                    count += 1
        _replace(tmp, out_path)
    finally:
        if tmp.exists():
            tmp.unlink()
    return count
