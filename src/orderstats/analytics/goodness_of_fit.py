"""
Kolmogorov-Smirnov goodness-of-fit tester (test phase) for order statistics.

Responsibilities
  - Build the empirical CDF of a raw column keyed by exact observed value.
  - Refine it with the quantile breakpoints of the model.
  - Compare it with the step CDF implied by the quantiles and report the
    maximum distance and the Kolmogorov-Smirnov statistic per variable.

Usage Context
  - Third phase of the learn/derive/test/assess chain; needs a model whose last block is "Quantiles".

Limitations
  - Only the Kolmogorov-Smirnov statistic is computed; no p-value is attached.
"""
# 说明：基于分位数模型的 Kolmogorov-Smirnov 拟合优度检验（test 阶段）。
# 职责：
# - 对原始列按精确取值累计 1/n 得到经验 PMF，再按值域升序前缀求和得到经验 CDF
# - 经验 CDF 合计需在容差内等于 1，否则告警并跳过该列
# - 将分位数断点插入经验 CDF（取前驱的累计值，无前驱则为 0），在合并后的键域上逐点比较
# - 模型 CDF 为阶梯函数：键不小于 j 个断点时取 max(j-1, 0)/N，在最大分位数处到达 1；输出 Dmn 与 sqrt(n)·Dmn
# 约定：
# - 区间数 N 取自分位数列本身（行数 - 1），与派生时的设置保持一致

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from orderstats.core.data.domain import DomainError, NumericDomain, TextDomain, ValueDomain
from orderstats.core.data.model import OrderStatisticsModel
from orderstats.core.data.table import Column, Table
from orderstats.core.utils.config import get_config
from orderstats.core.utils.logging import get_logger

from .exceptions import GoodnessOfFitError

logger = get_logger(__name__)

VARIABLE = "Variable"
MAXIMUM_DISTANCE = "Maximum Distance"
KOLMOGOROV_SMIRNOV = "Kolmogorov-Smirnov"


@dataclass(frozen=True)
class FitStatistic:
    """Outcome of one goodness-of-fit test."""

    variable: str
    maximum_distance: float
    kolmogorov_smirnov: float
    cardinality: int


def empirical_cdf(values: Sequence[Any], domain: ValueDomain, *, tolerance: float) -> Dict[Any, float]:
    """
    Return the empirical CDF of ``values`` as an ordered value -> probability map.

    Raises ``GoodnessOfFitError`` when the final cumulative value differs
    from 1 by more than ``tolerance``.
    """
    n = len(values)
    if n == 0:
        raise GoodnessOfFitError("cannot build an empirical CDF of an empty column")
    counter = Counter(values)
    keys = domain.sort(counter)
    pmf = np.asarray([counter[key] for key in keys], dtype=float) * (1.0 / n)
    cdf = np.cumsum(pmf)
    if abs(cdf[-1] - 1.0) > tolerance:
        raise GoodnessOfFitError(f"incorrect empirical CDF (total {cdf[-1]!r})")
    return dict(zip(keys, cdf.tolist()))


def maximum_cdf_distance(
    ecdf: Dict[Any, float],
    quantiles: Sequence[Any],
    domain: ValueDomain,
) -> float:
    """Largest vertical distance between an empirical CDF and the quantile step CDF."""
    if len(quantiles) < 2:
        raise GoodnessOfFitError("a quantile model needs at least two breakpoints")
    intervals = len(quantiles) - 1

    # 合并键域：断点不在经验 CDF 中时沿用前驱的累计值
    merged = domain.sort(set(ecdf) | set(quantiles))

    current_q = 0
    current = 0.0
    distance = 0.0
    for key in merged:
        if key in ecdf:
            current = ecdf[key]
        while current_q < len(quantiles) and not domain.less(key, quantiles[current_q]):
            current_q += 1
        model = max(current_q - 1, 0) / intervals
        distance = max(distance, abs(current - model))
    return distance


def kolmogorov_smirnov(
    variable: str,
    values: Sequence[Any],
    quantiles: Sequence[Any],
    domain: ValueDomain,
    *,
    tolerance: Optional[float] = None,
) -> FitStatistic:
    """Test ``values`` against ``quantiles`` and return the fit statistic."""
    config = get_config()
    if tolerance is None:
        tolerance = config.ecdf_tolerance
    if config.strict_validation:
        domain.validate_values(values)
    try:
        ecdf = empirical_cdf(values, domain, tolerance=tolerance)
        distance = maximum_cdf_distance(ecdf, quantiles, domain)
    except GoodnessOfFitError as exc:
        exc.variable = variable
        raise
    n = len(values)
    return FitStatistic(
        variable=variable,
        maximum_distance=distance,
        kolmogorov_smirnov=math.sqrt(n) * distance,
        cardinality=n,
    )


def _statistics_table() -> Table:
    return Table(
        [
            Column(VARIABLE, [], domain=TextDomain()),
            Column(MAXIMUM_DISTANCE, [], domain=NumericDomain()),
            Column(KOLMOGOROV_SMIRNOV, [], domain=NumericDomain()),
        ]
    )


def goodness_of_fit_table(
    data: Table,
    model: OrderStatisticsModel,
    variables: Sequence[str],
) -> Table:
    """Run the Kolmogorov-Smirnov test for each variable; one output row per success."""
    output = _statistics_table()
    quantile_table = model.quantile_table()
    if quantile_table is None:
        logger.warning("Model has no Quantiles block as its last block. Nothing to test.")
        return output

    results: List[FitStatistic] = []
    for variable in variables:
        column = data.get_column(variable)
        if column is None:
            logger.warning(
                "Input table does not have a column %s. Ignoring it.",
                variable,
                extra={"variable": variable},
            )
            continue
        quantile_column = quantile_table.get_column(variable)
        if quantile_column is None:
            logger.warning(
                "Quantile table does not have a column %s. Ignoring it.",
                variable,
                extra={"variable": variable},
            )
            continue
        try:
            if column.domain != quantile_column.domain:
                raise DomainError(
                    f"data domain {column.domain.name} does not match "
                    f"quantile domain {quantile_column.domain.name}"
                )
            results.append(
                kolmogorov_smirnov(variable, column.values, quantile_column.values, column.domain)
            )
        except DomainError as exc:
            logger.warning(
                "Unsupported data type for column %s: %s. Ignoring it.",
                variable,
                exc,
                extra={"variable": variable},
            )
        except GoodnessOfFitError as exc:
            logger.warning(
                "%s for variable %s. Ignoring it.",
                exc,
                variable,
                extra={"variable": variable},
            )

    for result in results:
        output.append_row([result.variable, result.maximum_distance, result.kolmogorov_smirnov])
    return output
