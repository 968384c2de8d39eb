# clean_data.py
import os, argparse
import numpy as np
import pandas as pd

COLUMNS = {
    "Product": "product",
    "Protein (g)": "proteins",
    "Sugar (g)": "sugars",
    "Saturated Fat (g)": "saturated_fat",
    "Trans Fat (g)": "trans_fat",
}
NUMERIC = ["proteins", "sugars", "saturated_fat", "trans_fat"]

def load_products(in_path):
    raw = pd.read_csv(in_path)
    missing = [c for c in COLUMNS if c not in raw.columns]
    if missing:
        raise KeyError(f"{in_path} is missing columns: {missing}")
    df = raw[list(COLUMNS)].rename(columns=COLUMNS)
    for col in NUMERIC:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df

def drop_incomplete(df):
    return df.dropna(subset=["product"] + NUMERIC)

def find_trans_fat_outlier(df, threshold=3.0):
    tf = df["trans_fat"].to_numpy(float)
    if len(tf) < 3:
        return None
    pos = int(np.argmax(tf))
    # score the maximum against the remaining rows only
    rest = np.delete(tf, pos)
    sd = rest.std()
    if sd == 0:
        return df.index[pos] if tf[pos] > rest[0] else None
    z = (tf[pos] - rest.mean()) / sd
    return df.index[pos] if z > threshold else None

def drop_trans_fat_outlier(df, threshold=3.0):
    idx = find_trans_fat_outlier(df, threshold)
    return df if idx is None else df.drop(index=idx)

def dedupe_products(df):
    return df.drop_duplicates(subset=NUMERIC, keep="first")

def clean(df, threshold=3.0, report=None):
    steps = [
        ("incomplete rows", drop_incomplete),
        ("trans-fat outlier", lambda d: drop_trans_fat_outlier(d, threshold)),
        ("numeric duplicates", dedupe_products),
    ]
    for name, step in steps:
        before = len(df)
        df = step(df)
        if report is not None:
            report[name] = before - len(df)
    if df.empty:
        raise ValueError("no products left after cleaning")
    return df.reset_index(drop=True)

def main(in_path="input/food_nutrition.csv",
         out_path="input/food_nutrition_clean.csv",
         threshold=3.0):
    df = load_products(in_path)
    report = {}
    out = clean(df, threshold=threshold, report=report)
    for name, n in report.items():
        print(f"Dropped {n} {name}")
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    out.to_csv(out_path, index=False)
    print(f"Kept {len(out)} of {len(df)} products")
    print(f"Saved: {out_path}")
    return out

if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--input", type=str, default="input/food_nutrition.csv")
    p.add_argument("--out", type=str, default="input/food_nutrition_clean.csv")
    p.add_argument("--threshold", type=float, default=3.0)
    args = p.parse_args()
    main(args.input, args.out, args.threshold)
