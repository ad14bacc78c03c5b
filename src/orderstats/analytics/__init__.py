"""Convenience accessors for the order statistics phases."""

from .classifier import (
    QuantileClassifier,
    assess_table,
    assessment_column_name,
    select_classifier,
)
from .exceptions import (
    GoodnessOfFitError,
    OrderStatisticsError,
    QuantileDerivationError,
)
from .goodness_of_fit import (
    FitStatistic,
    empirical_cdf,
    goodness_of_fit_table,
    kolmogorov_smirnov,
    maximum_cdf_distance,
)
from .histogram import (
    build_histogram,
    count_values,
    learn_histograms,
)
from .order_statistics import (
    OrderStatistics,
    run_order_statistics,
)
from .quantiles import (
    QuantileDefinition,
    cumulative_counts,
    derive_quantile_column,
    derive_quantiles,
    quantile_labels,
    quantile_ranks,
    quantile_values,
)

__all__ = [
    "QuantileClassifier",
    "assess_table",
    "assessment_column_name",
    "select_classifier",
    "GoodnessOfFitError",
    "OrderStatisticsError",
    "QuantileDerivationError",
    "FitStatistic",
    "empirical_cdf",
    "goodness_of_fit_table",
    "kolmogorov_smirnov",
    "maximum_cdf_distance",
    "build_histogram",
    "count_values",
    "learn_histograms",
    "OrderStatistics",
    "run_order_statistics",
    "QuantileDefinition",
    "cumulative_counts",
    "derive_quantile_column",
    "derive_quantiles",
    "quantile_labels",
    "quantile_ranks",
    "quantile_values",
]
