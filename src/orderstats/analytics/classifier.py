"""
Quantile classifier (assess phase) for order statistics.

Responsibilities
  - Assign each observation of a column to the index of its quantile bucket.
  - Select one classifier per column, checking the data and quantile domains agree.
  - Append one ``Quantile(<variable>)`` column per variable to a copy of the data.

Usage Context
  - Last phase of the learn/derive/test/assess chain; needs a model whose last block is "Quantiles".

Limitations
  - Quantile values are assumed non-decreasing, as produced by the derive phase.
"""
# 说明：基于分位数的观测值分桶器（assess 阶段）。
# 职责：
# - 规则：值严格小于最小分位数 -> 0；否则从下标 1 起线性扫描，第一个满足“值不大于该分位数”的下标即为桶号；
#   大于所有分位数时桶号等于分位数个数
# - 每列只在准备阶段根据值域选择一次分桶器，数据值域与分位数值域不一致时告警并跳过
# - 数值列整列分桶使用 numpy.searchsorted，结果与线性扫描一致
# - 运行时配置 strict_validation 开启时，分桶前逐值校验数据列属于该值域

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from orderstats.core.data.domain import DomainError, DomainKind, NumericDomain, ValueDomain
from orderstats.core.data.model import OrderStatisticsModel
from orderstats.core.data.table import Column, Table
from orderstats.core.utils.config import get_config
from orderstats.core.utils.logging import get_logger

logger = get_logger(__name__)

ASSESS_NAME = "Quantile"


def assessment_column_name(variable: str) -> str:
    return f"{ASSESS_NAME}({variable})"


class QuantileClassifier:
    """
    Classify values of one column into quantile buckets.

    - Configuration
      - data: Observations of the assessed column.
      - quantiles: Non-decreasing quantile values derived for that column.
      - domain: Value domain shared by the data and the quantiles.

    - Behavior
      - ``classify`` scans the quantiles linearly for a single value.
      - ``__call__`` classifies one row of the bound data.
      - ``classify_column`` classifies every row.
    """

    def __init__(self, data: Sequence[Any], quantiles: Sequence[Any], domain: ValueDomain):
        if len(quantiles) == 0:
            raise DomainError("cannot classify against an empty quantile column")
        self.data = list(data)
        self.quantiles = list(quantiles)
        self.domain = domain

    def classify(self, value: Any) -> int:
        domain = self.domain
        if domain.less(value, self.quantiles[0]):
            return 0
        q = 1
        n = len(self.quantiles)
        while q < n and domain.less(self.quantiles[q], value):
            q += 1
        return q

    def __call__(self, row: int) -> int:
        return self.classify(self.data[row])

    def classify_column(self) -> List[int]:
        if self.domain.kind is DomainKind.NUMERIC:
            # 第一个满足 value <= quantiles[q] 的 q>=1，即 searchsorted(left) 在 quantiles[1:] 上的位置 + 1
            try:
                values = np.asarray(self.data, dtype=float)
                quantiles = np.asarray(self.quantiles, dtype=float)
            except OverflowError as exc:
                raise DomainError(f"values out of float range: {exc}") from exc
            buckets = np.searchsorted(quantiles[1:], values, side="left") + 1
            buckets[values < quantiles[0]] = 0
            return buckets.tolist()
        return [self.classify(value) for value in self.data]

    def __repr__(self) -> str:
        return f"QuantileClassifier(domain={self.domain!r}, quantiles={len(self.quantiles)})"


def select_classifier(data_column: Column, quantile_column: Column) -> Optional[QuantileClassifier]:
    """Return a classifier for the column, or ``None`` (with a warning) if the domains disagree."""
    variable = data_column.name
    try:
        data_domain = data_column.domain
        quantile_domain = quantile_column.domain
        if data_domain != quantile_domain:
            raise DomainError(
                f"data type is {data_domain.name} and quantiles type is {quantile_domain.name}"
            )
        if get_config().strict_validation:
            data_domain.validate_values(data_column.values)
        return QuantileClassifier(data_column.values, quantile_column.values, data_domain)
    except DomainError as exc:
        logger.warning(
            "Unsupported (data,quantiles) type for column %s: %s. Ignoring it.",
            variable,
            exc,
            extra={"variable": variable},
        )
        return None


def assess_table(
    data: Table,
    model: OrderStatisticsModel,
    variables: Sequence[str],
) -> Table:
    """Return a copy of ``data`` with one bucket-index column per assessable variable."""
    output = data.copy()
    quantile_table = model.quantile_table()
    if quantile_table is None:
        logger.warning("Model has no Quantiles block as its last block. Nothing to assess.")
        return output

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
        name = assessment_column_name(variable)
        if name in output:
            logger.warning(
                "Input table already has a column %s. Ignoring it.",
                name,
                extra={"variable": variable},
            )
            continue

        classifier = select_classifier(column, quantile_column)
        if classifier is None:
            continue
        try:
            buckets = classifier.classify_column()
        except DomainError as exc:
            logger.warning(
                "Cannot classify column %s: %s. Ignoring it.",
                variable,
                exc,
                extra={"variable": variable},
            )
            continue
        output.append_column(Column(name, buckets, domain=NumericDomain()))
    return output
