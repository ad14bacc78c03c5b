"""Histogram, quantile, goodness-of-fit and quantile-bucket statistics over tabular columns."""

from .analytics import (
    OrderStatistics,
    QuantileClassifier,
    QuantileDefinition,
    run_order_statistics,
)
from .core.data import (
    Column,
    GenericDomain,
    NumericDomain,
    OrderStatisticsModel,
    Table,
    TextDomain,
)

__version__ = "0.1.0"

__all__ = [
    "OrderStatistics",
    "QuantileClassifier",
    "QuantileDefinition",
    "run_order_statistics",
    "Column",
    "GenericDomain",
    "NumericDomain",
    "OrderStatisticsModel",
    "Table",
    "TextDomain",
]
