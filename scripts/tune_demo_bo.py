#!/usr/bin/env python3
"""Bayesian Optimization demo on a noisy synthetic throughput curve.

Example:
  python scripts/tune_demo_bo.py --out artifacts/demo_bo.json --n-samples 20
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path
import numpy as np

# EN: Allow running as a script without install.
# JP: インストール前でも実行できるようにパスを追加。
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bayestune.config import BOConfig, TunerConfig
from bayestune.opt.tune import ParameterTuner


def make_workload(seed: int):
    # EN: peak near buffer_mb=64, cycle_ms=3.5 with multiplicative noise.
    # JP: buffer_mb=64, cycle_ms=3.5 付近にピークを持つノイズ付き関数。
    rng = np.random.default_rng(seed)

    def score(buffer_mb: float, cycle_ms: float) -> float:
        base = np.exp(-((buffer_mb - 64.0) / 40.0) ** 2 - ((cycle_ms - 3.5) / 2.5) ** 2)
        return float(base * (1.0 + 0.02 * rng.standard_normal()))

    return score


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--out", default="artifacts/demo_bo.json")
    p.add_argument("--n-samples", type=int, default=20)
    p.add_argument("--n-warmup", type=int, default=3)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--xi", type=float, default=0.01)
    p.add_argument("--alpha", type=float, default=1e-4)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    space = {"buffer_mb": (0.0, 256.0), "cycle_ms": (0.0, 25.0)}
    bo_cfg = BOConfig(alpha=args.alpha, xi=args.xi, random_seed=args.seed)
    tuner = ParameterTuner(space, bo_cfg, TunerConfig(n_warmup=args.n_warmup, max_samples=args.n_samples))
    workload = make_workload(args.seed)

    while not tuner.done:
        params = tuner.suggest()
        tuner.observe(params, workload(**params))

    best_params, best_score = tuner.best()
    serializable = {
        "best_params": best_params,
        "best_score": best_score,
        "trace": json.loads(tuner.history().to_json(orient="records")),
    }

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(serializable, f, indent=2)

    print(f"Saved: {args.out}")
    print("Best:", best_params, "score:", round(best_score, 4))


if __name__ == "__main__":
    main()
