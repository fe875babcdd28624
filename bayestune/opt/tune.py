"""Ask / tell tuner for named continuous parameters.

English:
    Wrap `BayesianOptimization` for the usual host loop:
        params = tuner.suggest()
        score = run_workload(**params)   # higher is better
        tuner.observe(params, score)
    The first `n_warmup` suggestions are uniform random; after that the
    Gaussian process drives every suggestion.

日本語:
    名前付き連続パラメータ用の ask / tell 型チューナーです。最初の
    `n_warmup` 回は一様乱数、その後はガウス過程で次の候補を提案します。
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Tuple
import numpy as np
import pandas as pd

from ..config import BOConfig, TunerConfig
from .bounds import Bound, BoundLike, as_bound
from .gp_bo import BayesianOptimization


class ParameterSpace:
    """Ordered mapping name -> Bound."""

    def __init__(self, params: Mapping[str, BoundLike]):
        if not params:
            raise ValueError("parameter space is empty")
        self.names: List[str] = list(params.keys())
        self.bounds: List[Bound] = [as_bound(params[n]) for n in self.names]

    def __len__(self) -> int:
        return len(self.names)

    def to_vector(self, params: Mapping[str, float]) -> np.ndarray:
        missing = [n for n in self.names if n not in params]
        unknown = [n for n in params if n not in self.names]
        if missing or unknown:
            raise ValueError(f"parameter mismatch: missing={missing} unknown={unknown}")
        return np.array([float(params[n]) for n in self.names], dtype=float)

    def to_dict(self, x: np.ndarray) -> Dict[str, float]:
        return {n: float(v) for n, v in zip(self.names, x)}


class ParameterTuner:
    def __init__(
        self,
        space: ParameterSpace | Mapping[str, BoundLike],
        bo_cfg: BOConfig = BOConfig(),
        tuner_cfg: TunerConfig = TunerConfig(),
    ):
        self.space = space if isinstance(space, ParameterSpace) else ParameterSpace(space)
        self.tuner_cfg = tuner_cfg
        self.bo = BayesianOptimization(self.space.bounds, cfg=bo_cfg)

    @property
    def n_observed(self) -> int:
        return len(self.bo)

    @property
    def done(self) -> bool:
        return self.n_observed >= self.tuner_cfg.max_samples

    def suggest(self) -> Dict[str, float]:
        # EN: at least one sample is needed before the GP can be fit.
        # JP: GPの学習には最低1サンプル必要です。
        if self.n_observed < max(1, self.tuner_cfg.n_warmup):
            x = self.bo.sampler.draw()
        else:
            x = self.bo.next_sample()
        return self.space.to_dict(x)

    def observe(self, params: Mapping[str, float], score: float) -> None:
        self.bo.add_sample(self.space.to_vector(params), float(score))

    def best(self) -> Tuple[Dict[str, float], float]:
        s = self.bo.samples.best()
        return self.space.to_dict(s.x), s.y

    def history(self) -> pd.DataFrame:
        df = self.bo.samples.to_frame()
        df.columns = self.space.names + ["score"]
        df.insert(0, "step", np.arange(len(df)))
        return df

    def reset(self) -> None:
        self.bo.clear()
