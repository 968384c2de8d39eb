import os
import tempfile
from unittest import TestCase

from foodmaps.analysis.code import q1_summary_stats
from helpers import product_frame


class Tests(TestCase):
    def test_describe_products(self):
        df = product_frame(12)
        stats = q1_summary_stats.describe_products(df)
        self.assertEqual(stats["Nutrient"].tolist(),
                         ["Protein (g)", "Sugar (g)", "Saturated fat (g)", "Trans fat (g)"])
        self.assertEqual(stats["N"].tolist(), [12] * 4)
        self.assertAlmostEqual(stats.loc[1, "Max"], df["sugars"].max())

    def test_top_products(self):
        df = product_frame(12)
        top = q1_summary_stats.top_products(df, "proteins", n=3)
        self.assertEqual(len(top), 3)
        self.assertEqual(top.loc[0, "proteins"], df["proteins"].max())

    def test_main_writes_table_and_pairplot(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = os.path.join(tmp, "clean.csv")
            product_frame(15).to_csv(src, index=False)
            q1_summary_stats.main(src, tmp)
            self.assertTrue(os.path.exists(os.path.join(tmp, "q1_summary_stats.tex")))
            self.assertTrue(os.path.exists(os.path.join(tmp, "q1_pairplot.png")))
