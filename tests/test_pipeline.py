import os
import tempfile
from unittest import TestCase

import pandas as pd

from foodmaps.analysis.code import run_all
from helpers import write_raw_csv

OUTPUTS = [
    "food_nutrition_clean.csv",
    "food_nutrition_z.csv",
    "food_mds.csv",
    "food_embeddings.csv",
    "q1_summary_stats.tex",
    "q1_pairplot.png",
    "q3_mds_scatter.png",
    "q4_tsne_scatter.png",
    "q4_tsne_perplexity.png",
    "q5_metrics.tex",
    "q5_metrics.png",
    "q5_mds_vs_tsne.png",
    "q5_shepard.png",
    "q5_embedding_table.png",
]


class Tests(TestCase):
    def test_cli_runs_every_stage(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = os.path.join(tmp, "raw.csv")
            raw = write_raw_csv(src, n=30)
            outdir = os.path.join(tmp, "output")
            rc = run_all.main(["--input", src, "--outdir", outdir, "--perplexity", "8",
                               "--sweep", "4", "8", "--no-annotate"])
            self.assertEqual(rc, 0)
            for name in OUTPUTS:
                self.assertTrue(os.path.exists(os.path.join(outdir, name)), name)

            emb = pd.read_csv(os.path.join(outdir, "food_embeddings.csv"))
            # one trans-fat outlier and one duplicate removed
            self.assertEqual(len(emb), len(raw) - 2)
            self.assertEqual(emb[["mds_1", "mds_2", "tsne_1", "tsne_2"]].shape, (len(raw) - 2, 2 * 2))
            self.assertAlmostEqual(emb["sugars"].mean(), 0.0, places=8)
