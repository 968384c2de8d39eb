# utils/latex_table.py
import os
import pandas as pd

def _numeric_cols(df: pd.DataFrame) -> list:
    return [c for c in df.columns if pd.api.types.is_numeric_dtype(df[c])]

def _formatters(df: pd.DataFrame, digits: int) -> dict:
    fmt = {}
    for c in _numeric_cols(df):
        d = 0 if pd.api.types.is_integer_dtype(df[c]) else digits
        fmt[c] = lambda x, d=d: "" if pd.isna(x) else f"{float(x):.{d}f}"
    return fmt

def _auto_align(df: pd.DataFrame) -> str:
    num = set(_numeric_cols(df))
    return "".join("r" if c in num else "l" for c in df.columns)

LATEX_SPECIAL = {
    "\\": "\\textbackslash{}",
    "&": "\\&",
    "%": "\\%",
    "$": "\\$",
    "#": "\\#",
    "_": "\\_",
    "{": "\\{",
    "}": "\\}",
    "~": "\\textasciitilde{}",
    "^": "\\textasciicircum{}",
}

def _latex_escape(text) -> str:
    return "".join(LATEX_SPECIAL.get(ch, ch) for ch in str(text))

def _escape_text(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    for c in out.columns:
        if c not in _numeric_cols(out):
            out[c] = out[c].map(_latex_escape)
    out.columns = [_latex_escape(c) for c in out.columns]
    return out

def _plain_rules(tabular: str) -> str:
    for rule in ("\\toprule", "\\midrule", "\\bottomrule"):
        tabular = tabular.replace(rule, "\\hline")
    return tabular

def export_df_to_latex(
    df: pd.DataFrame,
    out_tex_path: str,
    caption: str = "Table",
    label: str | None = None,
    digits: int = 3,
    index: bool = False,
    align: str | None = None,
    use_booktabs: bool = True,
) -> str:
    body_df = _escape_text(df)
    if align is None:
        align = _auto_align(body_df)
        if index:
            align = "l" + align
    tabular = body_df.to_latex(
        index=index,
        escape=False,
        na_rep="",
        column_format=align,
        formatters=_formatters(body_df, digits),
    )
    if not use_booktabs:
        tabular = _plain_rules(tabular)
    if label is None:
        label = "tab:" + os.path.splitext(os.path.basename(out_tex_path))[0]
    table_env = (
        "\\begin{table}[htbp]\n"
        "    \\centering\n"
        f"    \\caption{{{caption}}}\n"
        f"    \\label{{{label}}}\n"
        f"{tabular}"
        "\\end{table}\n"
    )
    out_dir = os.path.dirname(out_tex_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_tex_path, "w", encoding="utf-8") as f:
        f.write(table_env)
    print(f"Saved LaTeX table to: {out_tex_path}")
    return table_env
