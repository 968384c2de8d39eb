import os, argparse
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from foodmaps.analysis.utils.latex_table import export_df_to_latex

NUMERIC = ["proteins", "sugars", "saturated_fat", "trans_fat"]
PRETTY = {
    "proteins": "Protein (g)",
    "sugars": "Sugar (g)",
    "saturated_fat": "Saturated fat (g)",
    "trans_fat": "Trans fat (g)",
}

def describe_products(df, cols=NUMERIC):
    stats = df[cols].agg(["count", "mean", "std", "min", "median", "max"]).T
    stats.insert(0, "Nutrient", [PRETTY.get(c, c) for c in stats.index])
    stats = stats.rename(columns={"count": "N", "mean": "Mean", "std": "Std. Dev.",
                                  "min": "Min", "median": "Median", "max": "Max"})
    stats["N"] = stats["N"].astype(int)
    return stats.reset_index(drop=True)

def top_products(df, col, n=5):
    return df.nlargest(n, col)[["product", col]].reset_index(drop=True)

def plot_pairwise(df, out_png, cols=NUMERIC):
    grid = sns.pairplot(df[cols].rename(columns=PRETTY), corner=True,
                        plot_kws={"s": 20, "alpha": 0.7}, diag_kws={"bins": 15})
    grid.figure.suptitle("Pairwise relationships between nutrients", y=1.02)
    grid.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(grid.figure)
    print(f"Saved: {out_png}")

def main(in_path="input/food_nutrition_clean.csv", outdir="output"):
    os.makedirs(outdir, exist_ok=True)
    df = pd.read_csv(in_path)
    export_df_to_latex(describe_products(df), os.path.join(outdir, "q1_summary_stats.tex"),
                       caption=f"Summary statistics of {len(df)} food products (per serving).")
    for col in ["proteins", "sugars"]:
        print(f"Top products by {col}:\n", top_products(df, col))
    plot_pairwise(df, os.path.join(outdir, "q1_pairplot.png"))

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="input/food_nutrition_clean.csv")
    p.add_argument("--outdir", type=str, default="output")
    args = p.parse_args()
    main(args.input, args.outdir)
