from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import matplotlib.pyplot as plt

from .records import WeightLogEntry


def weight_history_frame(history: Sequence[WeightLogEntry]) -> pd.DataFrame:
    rows = [{"log_date": pd.Timestamp(e.log_date), "weight_kg": e.weight_kg} for e in history]
    df = pd.DataFrame(rows, columns=["log_date", "weight_kg"])
    df["weight_kg"] = df["weight_kg"].astype(float)
    df = df.sort_values("log_date").reset_index(drop=True)
    df["change_kg"] = df["weight_kg"].diff().round(2)
    return df


def save_weight_chart(history: Sequence[WeightLogEntry], out_path: Path, title: str = "Weight history") -> Path:
    df = weight_history_frame(history)
    if df.empty:
        raise ValueError("No weight logs to plot.")
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots()
    ax.plot(df["log_date"], df["weight_kg"], marker="o")
    ax.set_xlabel("Date")
    ax.set_ylabel("Weight (kg)")
    ax.set_title(title)
    fig.autofmt_xdate()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path
