"""Console statistics for an optimization run. Reporting only; never touches output files."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


def reduction_percent(before: int, after: int) -> float:
    """Percentage of bytes saved going from `before` to `after` (0.0 when before is 0)."""
    if before <= 0:
        return 0.0
    return (before - after) / before * 100.0


@dataclass
class OptimizationStats:
    original_blocks: int
    kept_blocks: int
    original_size: int                       # input re-serialized, pretty
    formatted_size: int                      # output, pretty
    original_minified_size: Optional[int] = None
    minified_size: Optional[int] = None
    grouped_blocks: Optional[int] = None
    breakdown: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def removed_blocks(self) -> int:
        return self.original_blocks - self.kept_blocks

    @property
    def ungrouped_blocks(self) -> Optional[int]:
        if self.grouped_blocks is None:
            return None
        return self.kept_blocks - self.grouped_blocks

    @property
    def formatted_reduction(self) -> float:
        return reduction_percent(self.original_size, self.formatted_size)

    @property
    def minified_reduction(self) -> Optional[float]:
        if self.original_minified_size is None or self.minified_size is None:
            return None
        return reduction_percent(self.original_minified_size, self.minified_size)

    def report_lines(self) -> List[str]:
        lines = [
            f"Original blocks: {self.original_blocks}",
            f"Filtered blocks: {self.kept_blocks}",
            f"Removed {self.removed_blocks} blocks",
        ]
        if self.grouped_blocks is not None:
            lines.append(f"Grouped blocks: {self.grouped_blocks} ({self.ungrouped_blocks} without a matching section)")
        lines.append(
            f"Formatted size: {self.original_size} -> {self.formatted_size} bytes "
            f"({self.formatted_reduction:.1f}% reduction)"
        )
        if self.minified_reduction is not None:
            lines.append(
                f"Minified size: {self.original_minified_size} -> {self.minified_size} bytes "
                f"({self.minified_reduction:.1f}% reduction)"
            )
        if self.breakdown:
            lines.append("")
            lines.append("Blocks per section:")
            for chapter, sections in self.breakdown.items():
                lines.append(f"  {chapter} ({sum(sections.values())})")
                for section, count in sections.items():
                    lines.append(f"    {section}: {count}")
        return lines


def print_report(stats: OptimizationStats) -> None:
    for line in stats.report_lines():
        print(line)
