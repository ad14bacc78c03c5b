"""
Error hierarchy for the order statistics phases.

Responsibilities
  - Define per-column failure types raised inside the learn/derive/test/assess helpers.
  - Let the phase loops tell "skip this column" failures apart from programming errors.

Usage Context
  - Raised by per-column helpers; caught and logged by the phase loops.

Limitations
  - Exceptions only carry message text and the affected variable name.
"""
# 说明：顺序统计各阶段的异常体系。
# 职责：
# - OrderStatisticsError：各阶段统一基类异常
# - QuantileDerivationError：直方图累计计数无法满足所需秩（模型不一致），仅中止该列的分位数推导
# - GoodnessOfFitError：经验 CDF 不满足合计为 1 等统计合理性检查，仅跳过该列的检验

from __future__ import annotations

from typing import Optional


class OrderStatisticsError(RuntimeError):
    """Base error type for order statistics phase failures."""

    def __init__(self, message: str, *, variable: Optional[str] = None) -> None:
        super().__init__(message)
        self.variable = variable


class QuantileDerivationError(OrderStatisticsError):
    """Raised when a histogram cannot realise a required quantile rank."""


class GoodnessOfFitError(OrderStatisticsError):
    """Raised when the empirical CDF of a column fails its sanity checks."""
