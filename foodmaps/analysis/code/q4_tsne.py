import os, argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from sklearn.manifold import TSNE
from foodmaps.analysis.code.q3_mds import NUMERIC, add_coordinates, plot_embedding

def effective_perplexity(perplexity, n_samples):
    # sklearn requires perplexity < n_samples
    if perplexity < n_samples:
        return float(perplexity)
    return float(max(1, n_samples - 1))

def fit_tsne(X, perplexity=30.0, random_state=0, init="pca"):
    X = np.asarray(X, dtype=float)
    perp = effective_perplexity(perplexity, X.shape[0])
    if perp != perplexity:
        print(f"perplexity {perplexity} >= n_samples {X.shape[0]}; using {perp}")
    tsne = TSNE(n_components=2, perplexity=perp, learning_rate="auto",
                init=init, random_state=random_state)
    Y = tsne.fit_transform(X)
    return Y, float(tsne.kl_divergence_)

def perplexity_sweep(X, perplexities=(5, 15, 30, 50), random_state=0):
    results = {}
    for perp in perplexities:
        Y, kl = fit_tsne(X, perplexity=perp, random_state=random_state)
        results[perp] = (Y, kl)
        print(f"perplexity={perp:<4} KL={kl:.4f}")
    return results

def plot_perplexity_sweep(results, out_png, colors=None):
    fig, axes = plt.subplots(1, len(results), figsize=(4 * len(results), 4), squeeze=False)
    for ax, (perp, (Y, kl)) in zip(axes[0], results.items()):
        ax.scatter(Y[:, 0], Y[:, 1], c=colors, cmap="viridis", s=20, alpha=0.7)
        ax.set_title(f"Perplexity = {perp}\nKL = {kl:.3f}", fontsize=11)
        ax.grid(True, alpha=0.2)
        ax.set_xticks([])
        ax.set_yticks([])
    fig.suptitle("t-SNE: effect of perplexity", fontsize=12, fontweight="bold")
    fig.tight_layout()
    fig.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {out_png}")

def main(in_path="output/food_mds.csv", outdir="output", seed=0, perplexity=30.0,
         sweep=(5, 15, 30, 50), color_by="sugars", annotate=True):
    os.makedirs(outdir, exist_ok=True)
    df = pd.read_csv(in_path)
    X = df[NUMERIC].to_numpy(float)
    Y, kl = fit_tsne(X, perplexity=perplexity, random_state=seed)
    print(f"t-SNE KL divergence = {kl:.4f}")
    out = add_coordinates(df, Y, "tsne")
    out_csv = os.path.join(outdir, "food_embeddings.csv")
    out.to_csv(out_csv, index=False)
    print(f"Saved: {out_csv}")
    plot_embedding(out, "tsne_1", "tsne_2", os.path.join(outdir, "q4_tsne_scatter.png"),
                   title=f"t-SNE of food products (KL = {kl:.3f})",
                   color_by=color_by, annotate=annotate)
    if sweep:
        results = perplexity_sweep(X, sweep, random_state=seed)
        plot_perplexity_sweep(results, os.path.join(outdir, "q4_tsne_perplexity.png"),
                              colors=df[color_by].to_numpy(float))
    return out, kl

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="output/food_mds.csv")
    p.add_argument("--outdir", type=str, default="output")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--perplexity", type=float, default=30.0)
    p.add_argument("--sweep", type=float, nargs="*", default=[5, 15, 30, 50])
    p.add_argument("--color-by", type=str, default="sugars")
    p.add_argument("--no-annotate", action="store_true")
    args = p.parse_args()
    main(args.input, args.outdir, args.seed, args.perplexity, args.sweep,
         args.color_by, not args.no_annotate)
