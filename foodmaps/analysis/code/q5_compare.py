import os, argparse
import numpy as np
import pandas as pd
import statsmodels.api as sm
import matplotlib.pyplot as plt
from scipy.spatial.distance import pdist
from scipy.stats import spearmanr
from sklearn.manifold import trustworthiness
from foodmaps.analysis.code.q3_mds import NUMERIC, kruskal_stress, stress_label, plot_embedding
from foodmaps.analysis.utils.latex_table import export_df_to_latex

METHODS = {"MDS": ("mds_1", "mds_2"), "t-SNE": ("tsne_1", "tsne_2")}

def _neighbors(n_samples, n_neighbors):
    # trustworthiness needs n_neighbors < n_samples / 2
    if n_samples < 3:
        raise ValueError(f"trustworthiness needs at least 3 products, got {n_samples}")
    return max(1, min(n_neighbors, (n_samples - 1) // 2))

def shepard_fit(X, Y):
    d = pdist(np.asarray(X, dtype=float))
    d_hat = pdist(np.asarray(Y, dtype=float))
    res = sm.OLS(d_hat, sm.add_constant(d, has_constant="add")).fit(cov_type="HC1")
    rho = spearmanr(d, d_hat)[0] if len(d) > 1 else np.nan
    return {
        "intercept": float(res.params[0]),
        "slope": float(res.params[1]),
        "slope_se": float(res.bse[1]),
        "r2": float(res.rsquared),
        "spearman": float(rho),
    }

def embedding_metrics(X, embeddings, n_neighbors=5):
    X = np.asarray(X, dtype=float)
    k = _neighbors(X.shape[0], n_neighbors)
    rows = []
    for name, Y in embeddings.items():
        s1 = kruskal_stress(X, Y)
        fit = shepard_fit(X, Y)
        rows.append({
            "Method": name,
            "Trustworthiness": float(trustworthiness(X, Y, n_neighbors=k)),
            "Stress-1": s1,
            "Rating": stress_label(s1),
            "Shepard slope": fit["slope"],
            "Shepard R2": fit["r2"],
            "Spearman rho": fit["spearman"],
        })
    return pd.DataFrame(rows)

def plot_side_by_side(df, out_png, color_by="sugars", annotate=False):
    fig, axes = plt.subplots(1, len(METHODS), figsize=(8 * len(METHODS), 6.5))
    for ax, (name, (x, y)) in zip(axes, METHODS.items()):
        plot_embedding(df, x, y, title=name, color_by=color_by, annotate=annotate, ax=ax)
    fig.suptitle("MDS vs t-SNE: food product similarity", fontsize=13, fontweight="bold")
    fig.tight_layout()
    fig.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {out_png}")

def plot_shepard(X, embeddings, out_png):
    d = pdist(np.asarray(X, dtype=float))
    fig, axes = plt.subplots(1, len(embeddings), figsize=(5 * len(embeddings), 4.5), squeeze=False)
    for ax, (name, Y) in zip(axes[0], embeddings.items()):
        d_hat = pdist(np.asarray(Y, dtype=float))
        ax.scatter(d, d_hat, s=4, alpha=0.3, color="steelblue")
        fit = shepard_fit(X, Y)
        xs = np.linspace(0, d.max() if len(d) else 1.0, 50)
        ax.plot(xs, fit["intercept"] + fit["slope"] * xs, color="coral", lw=2,
                label=f"OLS fit, $R^2$ = {fit['r2']:.3f}")
        ax.set_xlabel("distance in standardized nutrient space")
        ax.set_ylabel("distance in embedding")
        ax.set_title(f"Shepard diagram: {name}")
        ax.legend()
        ax.grid(True, alpha=0.2)
    fig.tight_layout()
    fig.savefig(out_png, dpi=150)
    plt.close(fig)
    print(f"Saved: {out_png}")

def render_table(df, out_png, title="", digits=3):
    cells = [[f"{v:.{digits}f}" if isinstance(v, (float, np.floating)) else str(v) for v in row]
             for row in df.itertuples(index=False)]
    fig, ax = plt.subplots(figsize=(max(6, 1.6 * df.shape[1]), 0.45 * (len(df) + 2)))
    ax.axis("off")
    table = ax.table(cellText=cells, colLabels=[str(c) for c in df.columns],
                     loc="center", cellLoc="center")
    table.auto_set_font_size(False)
    table.set_fontsize(9)
    table.scale(1, 1.4)
    for j in range(df.shape[1]):
        table[0, j].set_facecolor("#4472C4")
        table[0, j].set_text_props(color="white", fontweight="bold")
    if title:
        ax.set_title(title, fontsize=11, pad=12)
    fig.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {out_png}")

def main(in_path="output/food_embeddings.csv", outdir="output", color_by="sugars",
         n_neighbors=5, n_rows=15):
    os.makedirs(outdir, exist_ok=True)
    df = pd.read_csv(in_path)
    X = df[NUMERIC].to_numpy(float)
    embeddings = {name: df[list(cols)].to_numpy(float) for name, cols in METHODS.items()}

    metrics = embedding_metrics(X, embeddings, n_neighbors=n_neighbors)
    print(metrics.round(4).to_string(index=False))
    export_df_to_latex(metrics, os.path.join(outdir, "q5_metrics.tex"),
                       caption="Structure preservation of the MDS and t-SNE embeddings.")
    render_table(metrics, os.path.join(outdir, "q5_metrics.png"),
                 title="MDS vs t-SNE: structure preservation")

    plot_side_by_side(df, os.path.join(outdir, "q5_mds_vs_tsne.png"), color_by=color_by)
    plot_shepard(X, embeddings, os.path.join(outdir, "q5_shepard.png"))

    head = df[["product"] + NUMERIC + [c for cols in METHODS.values() for c in cols]].head(n_rows)
    render_table(head, os.path.join(outdir, "q5_embedding_table.png"),
                 title=f"First {len(head)} products: z-scores and 2D coordinates")
    return metrics

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="output/food_embeddings.csv")
    p.add_argument("--outdir", type=str, default="output")
    p.add_argument("--color-by", type=str, default="sugars")
    p.add_argument("--n-neighbors", type=int, default=5)
    p.add_argument("--rows", type=int, default=15)
    args = p.parse_args()
    main(args.input, args.outdir, args.color_by, args.n_neighbors, args.rows)
