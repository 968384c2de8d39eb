import os, argparse
import numpy as np
import pandas as pd
from scipy.stats import zscore

NUMERIC = ["proteins", "sugars", "saturated_fat", "trans_fat"]

def standardize(df, cols=NUMERIC):
    out = df.copy()
    flat = [c for c in cols if np.isclose(out[c].std(ddof=0), 0.0)]
    if flat:
        raise ValueError(f"zero-variance columns cannot be standardized: {flat}")
    out[cols] = zscore(out[cols].to_numpy(float), axis=0, ddof=0)
    return out

def check_standardized(df, cols=NUMERIC):
    return pd.DataFrame({
        "column": cols,
        "mean": [float(df[c].mean()) for c in cols],
        "std": [float(df[c].std(ddof=0)) for c in cols],
    })

def main(in_path="input/food_nutrition_clean.csv", out_path="output/food_nutrition_z.csv"):
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    df = pd.read_csv(in_path)
    z = standardize(df)
    print(check_standardized(z).round(6))
    z.to_csv(out_path, index=False)
    print(f"Saved: {out_path}")
    return z

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="input/food_nutrition_clean.csv")
    p.add_argument("--out", type=str, default="output/food_nutrition_z.csv")
    args = p.parse_args()
    main(args.input, args.out)
