import os, argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from scipy.spatial.distance import pdist
from sklearn.manifold import MDS

NUMERIC = ["proteins", "sugars", "saturated_fat", "trans_fat"]

# Kruskal (1964) verbal scale for stress-1: lower bound of each band, worst first.
STRESS_SCALE = [(0.2, "poor"), (0.1, "fair"), (0.05, "good"), (0.025, "excellent")]

def fit_mds(X, n_components=2, random_state=0, n_init=4, max_iter=300):
    mds = MDS(n_components=n_components, n_init=n_init, max_iter=max_iter,
              random_state=random_state)
    Y = mds.fit_transform(np.asarray(X, dtype=float))
    return Y, float(mds.stress_)

def kruskal_stress(X, Y):
    d = pdist(np.asarray(X, dtype=float))
    d_hat = pdist(np.asarray(Y, dtype=float))
    denom = float(np.sum(d ** 2))
    if denom == 0.0:
        return 0.0
    return float(np.sqrt(np.sum((d - d_hat) ** 2) / denom))

def stress_label(value):
    for cut, name in STRESS_SCALE:
        if value >= cut:
            return name
    return "perfect" if np.isclose(value, 0.0) else "excellent"

def add_coordinates(df, Y, prefix):
    out = df.copy()
    for k in range(Y.shape[1]):
        out[f"{prefix}_{k + 1}"] = Y[:, k]
    return out

def plot_embedding(df, x, y, out_png=None, title="", color_by="sugars", annotate=True, ax=None):
    own = ax is None
    if own:
        fig, ax = plt.subplots(figsize=(9, 7))
    sc = ax.scatter(df[x], df[y], c=df[color_by], cmap="viridis", s=35, alpha=0.8,
                    edgecolors="k", linewidths=0.3)
    plt.colorbar(sc, ax=ax, label=f"{color_by} (z-score)")
    if annotate:
        for _, r in df.iterrows():
            ax.annotate(str(r["product"]), (r[x], r[y]), fontsize=6, alpha=0.75,
                        xytext=(3, 3), textcoords="offset points")
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    ax.set_title(title)
    ax.grid(True, alpha=0.2)
    if own:
        fig.tight_layout()
        fig.savefig(out_png, dpi=150)
        plt.close(fig)
        print(f"Saved: {out_png}")
    return ax

def main(in_path="output/food_nutrition_z.csv", outdir="output", seed=0,
         color_by="sugars", annotate=True):
    os.makedirs(outdir, exist_ok=True)
    df = pd.read_csv(in_path)
    X = df[NUMERIC].to_numpy(float)
    Y, raw = fit_mds(X, random_state=seed)
    s1 = kruskal_stress(X, Y)
    print(f"MDS stress (raw) = {raw:.4f}")
    print(f"MDS stress-1     = {s1:.4f} ({stress_label(s1)})")
    out = add_coordinates(df, Y, "mds")
    out_csv = os.path.join(outdir, "food_mds.csv")
    out.to_csv(out_csv, index=False)
    print(f"Saved: {out_csv}")
    plot_embedding(out, "mds_1", "mds_2", os.path.join(outdir, "q3_mds_scatter.png"),
                   title=f"MDS of food products (stress-1 = {s1:.3f})",
                   color_by=color_by, annotate=annotate)
    return out, raw, s1

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="output/food_nutrition_z.csv")
    p.add_argument("--outdir", type=str, default="output")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--color-by", type=str, default="sugars")
    p.add_argument("--no-annotate", action="store_true")
    args = p.parse_args()
    main(args.input, args.outdir, args.seed, args.color_by, not args.no_annotate)
