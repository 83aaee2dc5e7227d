# stepwise_search/benchmarks/plot_results.py
from __future__ import annotations
import io
import json
import math
from pathlib import Path
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

HERE = Path(__file__).parent
RESULTS_JSON = HERE / "results.json"
OUT_DIR = HERE


def _load_rows(path: Path = RESULTS_JSON):
    if not path.exists():
        raise SystemExit(f"Missing {path}. Run: python -m stepwise_search.benchmarks.run_all")
    data = json.loads(path.read_text())
    # Keep only successful runs
    return {
        pname: [r for r in rows if r.get("success")]
        for pname, rows in data.get("problems", {}).items()
    }


def _sorted(rows, key):
    def key_fn(r):
        v = r.get(key)
        if v is None:
            return math.inf
        return v
    return sorted(rows, key=key_fn)


def _bar(ax, rows, metric, title, ylabel):
    algos = [r["algo"] for r in rows]
    vals = [r.get(metric) or 0 for r in rows]

    x = list(range(len(algos)))
    ax.bar(x, vals)
    ax.set_title(title)
    ax.set_ylabel(ylabel)
    ax.set_xticks(x)
    ax.set_xticklabels(algos, rotation=20, ha="right")

    top = max(vals) if vals else 1
    for xi, v in zip(x, vals):
        if isinstance(v, float) and v < 0.01:
            label = f"{v:.4f}"
        elif isinstance(v, float):
            label = f"{v:.3f}"
        else:
            label = f"{v}"
        ax.text(xi, v + 0.01 * (top or 1), label, ha="center", va="bottom", fontsize=8)


def fmt_table(rows) -> str:
    # Markdown table
    lines = [
        "| Algorithm | Cost | Nodes Explored | Steps | Time (s) | Peak KB |",
        "|---|---:|---:|---:|---:|---:|",
    ]

    def fnum(x):
        if isinstance(x, (int, float)):
            return f"{x:.6f}" if isinstance(x, float) else f"{x}"
        return "n/a"

    for r in rows:
        lines.append(
            f"| {r['algo']} | {fnum(r.get('cost'))} | {fnum(r.get('nodes_explored'))} | "
            f"{fnum(r.get('steps'))} | {fnum(r.get('time_s'))} | {fnum(r.get('peak_kb'))} |"
        )
    return "\n".join(lines)


def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)
    return buf.getvalue()


def main():
    per_problem = _load_rows()
    if not any(per_problem.values()):
        raise SystemExit("No successful rows to plot.")

    md = []
    for pname, rows in per_problem.items():
        if not rows:
            continue
        md.append(f"## {pname}\n\n{fmt_table(rows)}\n")
        stem = pname.replace(" ", "_")
        for metric, title, ylabel in (
            ("nodes_explored", "Nodes Explored (lower is better)", "nodes"),
            ("time_s", "Wall Time (lower is better)", "seconds"),
            ("cost", "Path Cost (lower is better)", "cost"),
        ):
            fig, ax = plt.subplots(figsize=(6, 4))
            _bar(ax, _sorted(rows, metric), metric, f"{pname}: {title}", ylabel)
            fig.tight_layout()
            out = OUT_DIR / f"{stem}_{metric}.png"
            out.write_bytes(fig_to_png_bytes(fig))
            plt.close(fig)
            print(f"Wrote {out}")

    md_path = OUT_DIR / "results.md"
    md_path.write_text("\n".join(md))
    print(f"Wrote {md_path}")


if __name__ == "__main__":
    main()
