"""
Unit tests for the Kolmogorov-Smirnov goodness-of-fit tester (test phase).
"""
# 说明：经验 CDF、模型阶梯 CDF 与 Kolmogorov-Smirnov 统计量的单元测试。
# 覆盖：
# - empirical_cdf：按精确取值累计、合计为 1 的合理性检查
# - maximum_cdf_distance：分位数断点插入经验 CDF 后的最大距离
# - goodness_of_fit_table：1..10 与文本列示例、缺少分位数块/列、值域不一致、合理性检查失败时告警跳过

import logging
import math

import pytest

from orderstats.analytics import (
    GoodnessOfFitError,
    QuantileDefinition,
    derive_quantiles,
    empirical_cdf,
    goodness_of_fit_table,
    kolmogorov_smirnov,
    learn_histograms,
    maximum_cdf_distance,
)
from orderstats.analytics.goodness_of_fit import KOLMOGOROV_SMIRNOV, MAXIMUM_DISTANCE, VARIABLE
from orderstats.core.data import NumericDomain, OrderStatisticsModel, Table, TextDomain
from orderstats.core.utils import configure


def _model(table: Table, variables, definition=QuantileDefinition.AVERAGED_INTERPOLATION) -> OrderStatisticsModel:
    model = learn_histograms(table, variables, OrderStatisticsModel())
    derive_quantiles(model, 4, definition)
    return model


def test_empirical_cdf_is_ordered_and_cumulative() -> None:
    ecdf = empirical_cdf([3, 1, 3, 2], NumericDomain(), tolerance=1e-6)
    assert list(ecdf) == [1, 2, 3]
    assert list(ecdf.values()) == pytest.approx([0.25, 0.5, 1.0])


def test_empirical_cdf_sanity_check() -> None:
    with pytest.raises(GoodnessOfFitError):
        empirical_cdf([1, 2, 3], NumericDomain(), tolerance=-1.0)
    with pytest.raises(GoodnessOfFitError):
        empirical_cdf([], NumericDomain(), tolerance=1e-6)


def test_breakpoint_between_observations_takes_predecessor_value() -> None:
    ecdf = {1: 0.5, 2: 1.0}
    # 断点 1.5 不在数据中：经验 CDF 沿用 0.5，模型 CDF 为 1/2；最大距离出现在最小值处
    assert maximum_cdf_distance(ecdf, [1, 1.5, 2], NumericDomain()) == pytest.approx(0.5)


def test_perfect_two_point_fit_is_zero() -> None:
    ecdf = empirical_cdf(["a", "b"], TextDomain(), tolerance=1e-6)
    assert maximum_cdf_distance(ecdf, ["a", "a", "b"], TextDomain()) == pytest.approx(0.0)
    assert maximum_cdf_distance(ecdf, ["a", "b"], TextDomain()) == pytest.approx(0.5)


def test_maximum_distance_needs_two_breakpoints() -> None:
    with pytest.raises(GoodnessOfFitError):
        maximum_cdf_distance({1: 1.0}, [1], NumericDomain())


def test_kolmogorov_smirnov_on_ten_values() -> None:
    values = list(range(1, 11))
    averaged = kolmogorov_smirnov("x", values, [1.0, 3.0, 5.5, 8.0, 10.0], NumericDomain())
    assert averaged.maximum_distance == pytest.approx(0.25)
    assert averaged.kolmogorov_smirnov == pytest.approx(math.sqrt(10) * 0.25)
    assert averaged.cardinality == 10

    nearest = kolmogorov_smirnov("x", values, [1.0, 3.0, 5.0, 8.0, 10.0], NumericDomain())
    assert nearest.maximum_distance == pytest.approx(0.2)


def test_goodness_of_fit_table_rows(mixed_table: Table) -> None:
    model = _model(mixed_table, ["name", "x"])
    output = goodness_of_fit_table(mixed_table, model, ["name", "x"])
    assert output.column_names == [VARIABLE, MAXIMUM_DISTANCE, KOLMOGOROV_SMIRNOV]
    assert output.get_column(VARIABLE).values == ["name", "x"]
    distance = output.value(0, MAXIMUM_DISTANCE)
    assert distance == pytest.approx(0.125)
    assert output.value(0, KOLMOGOROV_SMIRNOV) == pytest.approx(math.sqrt(8) * 0.125)


def test_statistic_is_bounded_by_one_interval(ten_values: Table) -> None:
    for definition in QuantileDefinition:
        model = _model(ten_values, ["x"], definition)
        output = goodness_of_fit_table(ten_values, model, ["x"])
        assert 0.0 <= output.value(0, MAXIMUM_DISTANCE) <= 0.25 + 1e-9


def test_missing_quantiles_block_yields_empty_table(ten_values: Table, caplog) -> None:
    model = learn_histograms(ten_values, ["x"], OrderStatisticsModel())
    with caplog.at_level(logging.WARNING):
        output = goodness_of_fit_table(ten_values, model, ["x"])
    assert output.row_count() == 0
    assert "Nothing to test" in caplog.text


def test_missing_columns_are_skipped(ten_values: Table, caplog) -> None:
    model = _model(ten_values, ["x"])
    other = Table.from_arrays({"x": list(range(5)), "y": list(range(5))})
    with caplog.at_level(logging.WARNING):
        output = goodness_of_fit_table(other, model, ["absent", "y", "x"])
    assert output.get_column(VARIABLE).values == ["x"]
    assert "Input table does not have a column absent" in caplog.text
    assert "Quantile table does not have a column y" in caplog.text


def test_domain_mismatch_is_skipped(ten_values: Table, caplog) -> None:
    model = _model(ten_values, ["x"])
    text = Table.from_arrays({"x": ["a", "b", "c"]})
    with caplog.at_level(logging.WARNING):
        output = goodness_of_fit_table(text, model, ["x"])
    assert output.row_count() == 0
    assert "Unsupported data type for column x" in caplog.text


def test_failed_sanity_check_is_skipped(ten_values: Table, caplog) -> None:
    model = _model(ten_values, ["x"])
    configure(ecdf_tolerance=-1.0)
    with caplog.at_level(logging.WARNING):
        output = goodness_of_fit_table(ten_values, model, ["x"])
    assert output.row_count() == 0
    assert "incorrect empirical CDF" in caplog.text
