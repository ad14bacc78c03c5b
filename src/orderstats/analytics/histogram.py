"""
Histogram builder (learn phase) for order statistics.

Responsibilities
  - Group the observations of one column by exact value and count them.
  - Emit histogram tables with a cardinality sentinel row followed by ascending values.
  - Append one histogram block per honoured request to the output model.

Usage Context
  - First phase of the learn/derive/test/assess chain; its blocks feed the quantile deriver.

Limitations
  - Numeric NaN observations make a column unsupported (NaN is not totally ordered).
  - Probabilities are left as NaN placeholders until the derive phase fills them.
"""
# 说明：顺序统计的直方图构建器（learn 阶段）。
# 职责：
# - 将单列观测值按“精确相等”分组计数，按值域自然全序升序排列
# - 输出直方图表：第 0 行为基数哨兵行（Value=空值，Cardinality=-1，Probability=-1），其后每个不同取值一行
# - 对每个请求列追加一个直方图块到模型；缺列或值域不受支持时告警并跳过

from __future__ import annotations

import math
from collections import Counter
from typing import List, Sequence, Tuple

import numpy as np

from orderstats.core.data.domain import DomainError, DomainKind, NumericDomain, ValueDomain
from orderstats.core.data.model import CARDINALITY, PROBABILITY, VALUE, OrderStatisticsModel
from orderstats.core.data.table import Column, Table
from orderstats.core.utils.logging import get_logger

logger = get_logger(__name__)

# learn 阶段写入的无效基数：真正的数据集基数只在 derive 阶段计算
UNDERIVED_CARDINALITY = -1
INVALID_PROBABILITY = -1.0


def count_values(values: Sequence, domain: ValueDomain) -> Tuple[List, List[int]]:
    """Return distinct values in ascending domain order and their counts."""
    # 数值列走 numpy.unique（已排序 + 计数）；文本/通用列用 Counter 再按值域排序
    if domain.kind is DomainKind.NUMERIC:
        distinct, counts = np.unique(np.asarray(values), return_counts=True)
        return distinct.tolist(), counts.tolist()
    counter = Counter(values)
    distinct = domain.sort(counter)
    return distinct, [counter[value] for value in distinct]


def build_histogram(column: Column) -> Table:
    """
    Build the histogram table of one column.

    Raises ``DomainError`` when the column's values are not one of the
    supported domains or cannot be totally ordered.
    """
    domain = column.domain
    values = column.values
    domain.validate_values(values)
    distinct, counts = count_values(values, domain)

    return Table(
        [
            Column(VALUE, [domain.empty_value] + distinct, domain=domain),
            Column(CARDINALITY, [UNDERIVED_CARDINALITY] + counts, domain=NumericDomain()),
            Column(
                PROBABILITY,
                [INVALID_PROBABILITY] + [math.nan] * len(distinct),
                domain=NumericDomain(),
            ),
        ]
    )


def learn_histograms(
    data: Table,
    variables: Sequence[str],
    model: OrderStatisticsModel,
) -> OrderStatisticsModel:
    """Append one histogram block per variable of ``data`` to ``model``."""
    for variable in variables:
        column = data.get_column(variable)
        if column is None:
            logger.warning(
                "Input table does not have a column %s. Ignoring it.",
                variable,
                extra={"variable": variable},
            )
            continue
        try:
            histogram = build_histogram(column)
        except DomainError as exc:
            logger.warning(
                "Unsupported data type for column %s: %s. Ignoring it.",
                variable,
                exc,
                extra={"variable": variable},
            )
            continue
        model.append_block(variable, histogram)
        logger.debug(
            "Learned histogram of %d distinct values over %d rows.",
            histogram.row_count() - 1,
            len(column),
            extra={"variable": variable},
        )
    return model
