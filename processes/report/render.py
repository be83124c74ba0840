"""Plain-text rendering of the item table, result panel and statistics."""

from __future__ import annotations

from collections.abc import Sequence

from processes.optimizer.types import Item, SolutionResult, Stats


def _num(x: float) -> str:
    # 5.0 -> "5", 2.5 -> "2.5"
    return f"{x:g}"


def render_items_table(items: Sequence[Item]) -> str:
    if not items:
        return "no items available"
    header = ("ID", "Weight (kg)", "Value (kcal)")
    rows = [(it.id, _num(it.weight), _num(it.value)) for it in items]
    widths = [max(len(r[c]) for r in [header, *rows]) for c in range(3)]
    sep = "  "
    lines = [
        sep.join(h.ljust(w) for h, w in zip(header, widths, strict=True)),
        sep.join("-" * w for w in widths),
    ]
    for r in rows:
        lines.append(
            sep.join(
                [r[0].ljust(widths[0]), r[1].rjust(widths[1]), r[2].rjust(widths[2])]
            )
        )
    lines.append(f"{len(items)} item(s)")
    return "\n".join(lines)


def render_result_panel(
    result: SolutionResult, min_value: float, max_weight: float
) -> str:
    if not result.success:
        return f"NO SOLUTION\n{result.message}"

    weight_pct = result.total_weight / max_weight * 100
    value_pct = result.total_value / min_value * 100
    lines = [result.message, "", "Selected items:"]
    for it in result.selected_items:
        lines.append(
            f"  - {it.id} (weight: {_num(it.weight)} kg, value: {_num(it.value)} kcal)"
        )
    lines += [
        "",
        f"Total weight: {_num(result.total_weight)} kg of {_num(max_weight)} kg"
        f" ({weight_pct:.1f}% of ceiling)",
        f"Total value:  {_num(result.total_value)} kcal of {_num(min_value)} kcal"
        f" ({value_pct:.1f}% of floor)",
        f"Items:        {len(result.selected_items)}",
    ]
    if result.total_weight > 0:
        lines.append(
            f"Efficiency:   {result.total_value / result.total_weight:.2f} kcal/kg"
        )
    return "\n".join(lines)


def render_statistics(stats: Stats) -> str:
    return "\n".join(
        [
            f"Items:        {stats.count}",
            f"Mean weight:  {_num(stats.mean_weight)} kg"
            f" (min {_num(stats.min_weight)}, max {_num(stats.max_weight)})",
            f"Mean value:   {_num(stats.mean_value)} kcal"
            f" (min {_num(stats.min_value)}, max {_num(stats.max_value)})",
            f"Mean ratio:   {_num(stats.mean_ratio)} kcal/kg",
        ]
    )
