"""
Quantile deriver (derive phase) for order statistics.

Responsibilities
  - Resolve each histogram's dataset cardinality and probability mass function.
  - Invert the cumulative counts into N+1 evenly spaced quantile rank pairs.
  - Turn rank pairs into quantile values under the nearest-rank or averaged rule.
  - Collect one quantile column per variable into the shared "Quantiles" block.

Usage Context
  - Second phase of the learn/derive/test/assess chain; runs on learned histogram blocks.

Limitations
  - Averaging is only defined for numeric domains; text and generic domains
    always take the value at the first rank of each pair.
  - A histogram whose cumulative counts cannot reach a required rank yields no
    quantile column for that variable; other variables are unaffected.
"""
# 说明：顺序统计的分位数推导器（derive 阶段）。
# 职责：
# - 汇总直方图非哨兵行的计数得到数据集基数 n，写回哨兵行，并计算每行概率 Cardinality/n
# - 基于累计分布（CDF）为 k=0..N 构造“秩对”(first_rank, second_rank)，秩游标单调前进不回退
# - 按分位数定义取值：最近秩（NearestRank）或数值列的平均插值（AveragedInterpolation）
# - 为分位数表生成行标签：能整除时使用 Minimum/First Quartile/Median/Third Quartile/Maximum
# 约定：
# - np = k·n/N 以整数相乘后再除，保证整数秩精确；round 采用“四舍五入远离零”
# - 累计计数无法满足秩要求时抛出 QuantileDerivationError，仅跳过该列

from __future__ import annotations

import enum
import math
import numbers
from typing import Any, List, Sequence, Tuple

import numpy as np

from orderstats.core.data.domain import DomainError, DomainKind, NumericDomain, TextDomain, ValueDomain
from orderstats.core.data.model import (
    CARDINALITY,
    PROBABILITY,
    QUANTILE,
    VALUE,
    OrderStatisticsModel,
)
from orderstats.core.data.table import Column, Table
from orderstats.core.utils.logging import get_logger
from orderstats.core.utils.param_validation import ParamValidationError

from .exceptions import QuantileDerivationError
from .histogram import INVALID_PROBABILITY

logger = get_logger(__name__)

RankPair = Tuple[int, int]

_CANONICAL_LABELS = {
    0: "Minimum",
    1: "First Quartile",
    2: "Median",
    3: "Third Quartile",
    4: "Maximum",
}


class QuantileDefinition(enum.IntEnum):
    """Rank selection rule used when inverting the cumulative distribution."""

    NEAREST_RANK = 0
    AVERAGED_INTERPOLATION = 1

    @property
    def label(self) -> str:
        return "NearestRank" if self is QuantileDefinition.NEAREST_RANK else "AveragedInterpolation"

    @classmethod
    def parse(cls, value: Any) -> "QuantileDefinition":
        """Accept the enum, its integer value, or its CamelCase/snake_case name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.replace("_", "").replace(" ", "").lower()
            if key in _DEFINITION_ALIASES:
                return _DEFINITION_ALIASES[key]
        elif isinstance(value, numbers.Integral) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise ParamValidationError(f"incorrect type of quantile definition: {value!r}")


_DEFINITION_ALIASES = {
    "nearestrank": QuantileDefinition.NEAREST_RANK,
    "inversecdf": QuantileDefinition.NEAREST_RANK,
    "averagedinterpolation": QuantileDefinition.AVERAGED_INTERPOLATION,
    "inversecdfaveragedsteps": QuantileDefinition.AVERAGED_INTERPOLATION,
}


def quantile_labels(number_of_intervals: int) -> List[str]:
    """Row labels of the quantile table for ``number_of_intervals`` segments."""
    labels: List[str] = []
    for k in range(number_of_intervals + 1):
        quarter, remainder = divmod(4 * k, number_of_intervals)
        if remainder == 0 and quarter in _CANONICAL_LABELS:
            labels.append(_CANONICAL_LABELS[quarter])
        else:
            labels.append(f"{format(k / number_of_intervals, 'g')}-quantile")
    return labels


def cumulative_counts(cardinalities: Sequence[Any]) -> Tuple[int, List[int]]:
    """
    Return ``(n, cdf)`` for the cardinality column of a histogram.

    ``cdf[0]`` belongs to the sentinel row and is always 0; ``cdf[r]`` is the
    running count up to and including histogram row ``r``.
    """
    counts = list(cardinalities[1:])
    if not counts:
        raise QuantileDerivationError("histogram has no observations")
    for count in counts:
        if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
            raise QuantileDerivationError(f"invalid histogram cardinality {count!r}")
    cdf = [0] + np.cumsum(np.asarray(counts, dtype=np.int64)).tolist()
    n = cdf[-1]
    if n == 0:
        raise QuantileDerivationError("histogram has a total cardinality of 0")
    return n, cdf


def _advance_rank(cdf: Sequence[int], rank: int, target: int) -> int:
    # 秩游标只向前移动，直到累计计数覆盖目标分位数下标
    while target > cdf[rank]:
        rank += 1
        if rank >= len(cdf):
            raise QuantileDerivationError(
                f"inconsistent histogram: at last rank {rank - 1} the CDF is {cdf[-1]} "
                f"< {target} the quantile index"
            )
    return rank


def quantile_ranks(
    cdf: Sequence[int],
    number_of_intervals: int,
    definition: QuantileDefinition,
) -> List[RankPair]:
    """Rank pairs into the histogram rows realising each of the N+1 quantiles."""
    n = cdf[-1]
    last_row = len(cdf) - 1
    averaged = definition is QuantileDefinition.AVERAGED_INTERPOLATION

    # 第一个分位数恒为最小值（第 1 行），不跳跃
    pairs: List[RankPair] = [(1, 1)]
    rank = 1
    for k in range(1, number_of_intervals):
        position = (k * n) / number_of_intervals
        if averaged:
            first_index = math.floor(position + 0.5)
        else:
            first_index = math.ceil(position)
        rank = _advance_rank(cdf, rank, first_index)
        first_rank = rank

        if averaged:
            # 中点插值的第二个下标；与第一个相同时秩不变
            second_index = math.floor(position + 1.0)
            if second_index != first_index:
                rank = _advance_rank(cdf, rank, second_index)
        pairs.append((first_rank, rank))

    # 最后一个分位数恒为最大值（最后一行）
    pairs.append((last_row, last_row))
    return pairs


def quantile_values(
    values: Sequence[Any],
    ranks: Sequence[RankPair],
    domain: ValueDomain,
    definition: QuantileDefinition,
) -> List[Any]:
    """Read (and for numeric averaged quantiles, interpolate) histogram values."""
    if domain.kind is DomainKind.NUMERIC:
        if definition is QuantileDefinition.AVERAGED_INTERPOLATION:
            return [domain.average(values[first], values[second]) for first, second in ranks]
        return [float(values[first]) for first, _ in ranks]
    # 文本与通用值域没有平均运算，只取第一个秩上的值
    return [values[first] for first, _ in ranks]


def derive_quantile_column(
    variable: str,
    histogram: Table,
    number_of_intervals: int,
    definition: QuantileDefinition,
) -> Column:
    """
    Resolve the histogram's cardinality/probabilities in place and derive its quantiles.

    Raises ``QuantileDerivationError`` on inconsistent histograms and
    ``DomainError`` when the value column is not a supported domain.
    """
    value_column = histogram.get_column(VALUE)
    cardinality_column = histogram.get_column(CARDINALITY)
    if value_column is None or cardinality_column is None:
        raise QuantileDerivationError(
            f"block {variable} is not a histogram table", variable=variable
        )
    domain = value_column.domain

    try:
        n, cdf = cumulative_counts(cardinality_column.values)
    except QuantileDerivationError as exc:
        exc.variable = variable
        raise

    # 写回数据集基数与概率质量函数（哨兵行概率保持无效值 -1）
    histogram.set_value(0, CARDINALITY, n)
    if histogram.get_column(PROBABILITY) is None:
        histogram.append_column(
            Column(PROBABILITY, [math.nan] * histogram.row_count(), domain=NumericDomain())
        )
    histogram.set_value(0, PROBABILITY, INVALID_PROBABILITY)
    inv_n = 1.0 / n
    for row in range(1, histogram.row_count()):
        histogram.set_value(row, PROBABILITY, inv_n * cardinality_column[row])

    try:
        ranks = quantile_ranks(cdf, number_of_intervals, definition)
    except QuantileDerivationError as exc:
        exc.variable = variable
        raise
    values = quantile_values(value_column.values, ranks, domain, definition)
    column_domain = NumericDomain() if domain.kind is DomainKind.NUMERIC else domain
    return Column(variable, values, domain=column_domain)


def derive_quantiles(
    model: OrderStatisticsModel,
    number_of_intervals: int,
    definition: QuantileDefinition,
) -> Table:
    """Derive the shared quantile table from every histogram block of ``model``."""
    quantile_table = Table([Column(QUANTILE, quantile_labels(number_of_intervals), domain=TextDomain())])

    for variable, histogram in model.histogram_blocks():
        try:
            column = derive_quantile_column(variable, histogram, number_of_intervals, definition)
        except QuantileDerivationError as exc:
            logger.error(
                "%s. Cannot derive model for %s.",
                exc,
                variable,
                extra={"variable": variable},
            )
            continue
        except DomainError as exc:
            logger.warning(
                "Unsupported data type for column %s: %s. Cannot calculate quantiles for it.",
                variable,
                exc,
                extra={"variable": variable},
            )
            continue
        if column.name in quantile_table:
            logger.warning(
                "Quantile table already has a column %s. Ignoring duplicate histogram.",
                variable,
                extra={"variable": variable},
            )
            continue
        quantile_table.append_column(column)

    model.set_quantiles(quantile_table)
    return quantile_table
