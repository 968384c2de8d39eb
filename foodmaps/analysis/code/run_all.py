import os, argparse, time
from foodmaps.data import clean_data
from foodmaps.analysis.code import q1_summary_stats, q2_standardize, q3_mds, q4_tsne, q5_compare

def run(input_path="input/food_nutrition.csv", outdir="output", seed=0, perplexity=30.0,
        sweep=(5, 15, 30, 50), threshold=3.0, color_by="sugars", annotate=True):
    os.makedirs(outdir, exist_ok=True)
    clean_csv = os.path.join(outdir, "food_nutrition_clean.csv")
    z_csv = os.path.join(outdir, "food_nutrition_z.csv")
    mds_csv = os.path.join(outdir, "food_mds.csv")
    emb_csv = os.path.join(outdir, "food_embeddings.csv")

    t0 = time.time()
    clean_data.main(input_path, clean_csv, threshold=threshold)
    q1_summary_stats.main(clean_csv, outdir)
    q2_standardize.main(clean_csv, z_csv)
    _, raw, s1 = q3_mds.main(z_csv, outdir, seed=seed, color_by=color_by, annotate=annotate)
    _, kl = q4_tsne.main(mds_csv, outdir, seed=seed, perplexity=perplexity, sweep=sweep,
                         color_by=color_by, annotate=annotate)
    metrics = q5_compare.main(emb_csv, outdir, color_by=color_by)
    print(f"Done in {time.time() - t0:.1f}s (MDS stress-1 = {s1:.4f}, t-SNE KL = {kl:.4f})")
    return metrics

def main(argv=None):
    p = argparse.ArgumentParser(prog="foodmaps",
                                description="Compare MDS and t-SNE maps of food products.")
    p.add_argument("--input", type=str, default="input/food_nutrition.csv")
    p.add_argument("--outdir", type=str, default="output")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--perplexity", type=float, default=30.0)
    p.add_argument("--sweep", type=float, nargs="*", default=[5, 15, 30, 50])
    p.add_argument("--outlier-threshold", type=float, default=3.0)
    p.add_argument("--color-by", type=str, default="sugars",
                   choices=["proteins", "sugars", "saturated_fat", "trans_fat"])
    p.add_argument("--no-annotate", action="store_true")
    args = p.parse_args(argv)
    run(args.input, args.outdir, seed=args.seed, perplexity=args.perplexity,
        sweep=args.sweep, threshold=args.outlier_threshold, color_by=args.color_by,
        annotate=not args.no_annotate)
    return 0

if __name__ == "__main__":
    main()
