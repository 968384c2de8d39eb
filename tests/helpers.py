import numpy as np
import pandas as pd


def raw_frame():
    return pd.DataFrame({
        "Product": ["Burger", "Fries", "Shake", "Salad", "Nuggets", "Nuggets Box", "Pie", "Cola"],
        "Category": ["a", "b", "c", "d", "e", "e", "f", "g"],
        "Protein (g)": [15, 3, 14, 30, 23, 23, 2, 0],
        "Sugar (g)": [7, 0, 86, 3, 0, 0, 13, 56],
        "Saturated Fat (g)": [6, 1.5, 11, 3, 3.5, 3.5, 7, 0],
        "Trans Fat (g)": [0.5, 0, 1, 0.5, 1, 1, 0, 1.5],
    })


def product_frame(n=40, seed=0):
    rng = np.random.RandomState(seed)
    centers = np.array([[25, 5, 8, 0.5], [3, 2, 2, 0], [12, 70, 10, 1], [2, 40, 0, 0]])
    groups = rng.randint(0, len(centers), size=n)
    values = np.abs(centers[groups] + rng.randn(n, 4) * [3, 5, 1.5, 0.2])
    df = pd.DataFrame(values, columns=["proteins", "sugars", "saturated_fat", "trans_fat"])
    df.insert(0, "product", [f"item {i}" for i in range(n)])
    return df


def write_raw_csv(path, n=40, seed=0, outlier=True):
    df = product_frame(n, seed).rename(columns={
        "product": "Product",
        "proteins": "Protein (g)",
        "sugars": "Sugar (g)",
        "saturated_fat": "Saturated Fat (g)",
        "trans_fat": "Trans Fat (g)",
    })
    if outlier:
        df.loc[3, "Trans Fat (g)"] = 40.0
    df = pd.concat([df, df.iloc[[0]].assign(Product="item 0 again")], ignore_index=True)
    df.to_csv(path, index=False)
    return df
