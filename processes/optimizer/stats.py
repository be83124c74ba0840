from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from .types import Item, Stats, round2


def compute_statistics(items: Sequence[Item]) -> Stats:
    """Descriptive aggregates over a candidate set; all zeros when empty."""
    if not items:
        return Stats()
    df = pd.DataFrame([it.to_dict() for it in items])
    df["ratio"] = df["value"] / df["weight"]
    return Stats(
        count=int(len(df)),
        mean_weight=round2(float(df["weight"].mean())),
        mean_value=round2(float(df["value"].mean())),
        mean_ratio=round2(float(df["ratio"].mean())),
        min_weight=float(df["weight"].min()),
        max_weight=float(df["weight"].max()),
        min_value=float(df["value"].min()),
        max_value=float(df["value"].max()),
    )
