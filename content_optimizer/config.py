"""
Mode configuration. Each mode is one variant of the optimizer: which blocks are
excluded, whether and how they are regrouped, and where the results go.

Modes live in cfg.yaml next to this module unless another file is given.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

STRATEGIES = ("filter", "fixed", "discovered")


@dataclass
class ModeConfig:
    """Settings for one optimizer mode"""
    name: str
    strategy: str = "filter"                 # filter | fixed | discovered
    description: str = ""

    # Filters
    exclude_prefixes: List[str] = field(default_factory=list)

    # Flat filter output: keep full records or project to {title, content}
    slim: bool = False

    # Grouping
    chapters: Dict[str, List[str]] = field(default_factory=dict)
    merge_sections: bool = True

    # Outputs (relative to the working directory)
    output: str = "content_optimized.json"
    minified_output: Optional[str] = None
    jsonl_output: Optional[str] = None

    progress: bool = False

    @property
    def is_grouping(self) -> bool:
        return self.strategy in ("fixed", "discovered")


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict:
    """Load configuration from YAML file. Defaults to cfg.yaml next to this module."""
    if config_path is None:
        config_path = Path(__file__).with_name("cfg.yaml")
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}

    if not isinstance(cfg, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    cfg.setdefault('input', 'content.json')
    cfg.setdefault('default_mode', 'optimize')
    cfg.setdefault('modes', {})
    return cfg


def _string_list(value: Any, what: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{what} must be a list of strings")
    return list(value)


def build_mode(name: str, raw: Optional[Dict[str, Any]], defaults: Optional[Dict[str, Any]] = None) -> ModeConfig:
    """Turn one `modes:` entry into a ModeConfig, validating its shape."""
    settings = dict(defaults or {})
    settings.update(raw or {})

    strategy = settings.get('strategy', 'filter')
    if strategy not in STRATEGIES:
        raise ValueError(f"Mode '{name}': unknown strategy '{strategy}' (expected one of {', '.join(STRATEGIES)})")

    chapters_raw = settings.get('chapters') or {}
    if not isinstance(chapters_raw, dict):
        raise ValueError(f"Mode '{name}': chapters must be a mapping of chapter -> sections")
    chapters = {
        str(chapter): _string_list(sections, f"Mode '{name}': sections of '{chapter}'")
        for chapter, sections in chapters_raw.items()
    }
    if strategy == 'fixed' and not chapters:
        raise ValueError(f"Mode '{name}': fixed strategy requires 'chapters'")
    if any(not ch.strip() for ch in chapters) or any(not s.strip() for secs in chapters.values() for s in secs):
        raise ValueError(f"Mode '{name}': chapter and section names must not be empty")

    return ModeConfig(
        name=name,
        strategy=strategy,
        description=settings.get('description', '') or '',
        exclude_prefixes=_string_list(settings.get('exclude_prefixes'), f"Mode '{name}': exclude_prefixes"),
        slim=bool(settings.get('slim', False)),
        chapters=chapters,
        merge_sections=bool(settings.get('merge_sections', True)),
        output=settings.get('output') or 'content_optimized.json',
        minified_output=settings.get('minified_output'),
        jsonl_output=settings.get('jsonl_output'),
        progress=bool(settings.get('progress', False)),
    )


def get_mode(cfg: Dict, name: Optional[str] = None) -> ModeConfig:
    """Look up a mode by name (or the configured default)."""
    name = name or cfg.get('default_mode', 'optimize')
    modes = cfg.get('modes') or {}
    if name not in modes:
        available = ", ".join(sorted(modes)) or "none"
        raise ValueError(f"Unknown mode '{name}' (available: {available})")
    return build_mode(name, modes[name], cfg.get('mode_defaults'))
