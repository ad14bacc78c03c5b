"""
Unit tests for value domain abstractions.
"""
# 说明：数值 / 文本 / 通用三类值域的比较、排序、平均与推断行为单元测试。
# 覆盖：
# - NumericDomain：成员判定（排除 bool）、平均、展示字符串，拒绝 NaN 与超出 float 范围的整数
# - TextDomain / GenericDomain：字典序与原生顺序比较，不支持平均
# - infer_domain：按元素类型或 numpy dtype 推断值域，混合类型列抛出 DomainError

import datetime
import math

import numpy as np
import pytest

from orderstats.core.data import (
    DomainError,
    DomainKind,
    GenericDomain,
    NumericDomain,
    TextDomain,
    infer_domain,
)


def test_numeric_domain_contains_and_average() -> None:
    domain = NumericDomain()
    assert domain.contains(3)
    assert domain.contains(2.5)
    assert domain.contains(np.int64(7))
    # bool 不属于数值域
    assert not domain.contains(True)
    assert not domain.contains("3")
    assert domain.supports_average
    assert domain.average(5, 6) == 5.5
    assert math.isnan(domain.empty_value)


def test_numeric_domain_rejects_nan() -> None:
    with pytest.raises(DomainError):
        NumericDomain().validate_values([1.0, float("nan"), 2.0])


def test_numeric_domain_rejects_values_out_of_float_range() -> None:
    domain = NumericDomain()
    assert domain.contains(10**400)
    with pytest.raises(DomainError):
        domain.validate_values([1, 10**400])
    domain.validate_values([1, 10**300])


def test_numeric_display_string() -> None:
    domain = NumericDomain()
    assert domain.to_display_string(5.5) == "5.5"
    assert domain.to_display_string(3) == "3"


def test_text_domain_orders_lexicographically() -> None:
    domain = TextDomain()
    assert domain.compare("apple", "banana") == -1
    assert domain.compare("b", "B") == 1
    assert domain.compare("fig", "fig") == 0
    assert domain.sort(["pear", "apple", "fig"]) == ["apple", "fig", "pear"]
    assert domain.empty_value == ""
    assert not domain.supports_average
    with pytest.raises(DomainError):
        domain.average("a", "b")


def test_generic_domain_sorts_dates_and_rejects_incomparable_values() -> None:
    domain = GenericDomain()
    days = [datetime.date(2024, 3, 1), datetime.date(2023, 1, 5), datetime.date(2024, 1, 1)]
    assert domain.sort(days) == sorted(days)
    assert domain.empty_value is None
    # 日期与元组无法比较：以 DomainError 暴露
    with pytest.raises(DomainError):
        domain.sort([datetime.date(2024, 1, 1), (1, 2)])


def test_infer_domain_from_elements() -> None:
    assert infer_domain([1, 2.5, 3]).kind is DomainKind.NUMERIC
    assert infer_domain(["a", "b"]).kind is DomainKind.TEXT
    assert infer_domain([(1, 2), (0, 5)]).kind is DomainKind.GENERIC
    assert infer_domain([True, False]).kind is DomainKind.GENERIC
    assert infer_domain([]).kind is DomainKind.GENERIC


def test_infer_domain_from_numpy_dtype() -> None:
    assert infer_domain(np.arange(5)).kind is DomainKind.NUMERIC
    assert infer_domain(np.array(["x", "y"])).kind is DomainKind.TEXT


def test_infer_domain_rejects_mixed_columns() -> None:
    with pytest.raises(DomainError):
        infer_domain([1, "two", 3])


def test_domains_compare_equal_by_kind() -> None:
    assert NumericDomain() == NumericDomain()
    assert NumericDomain() != TextDomain()
    assert GenericDomain().describe().kind is DomainKind.GENERIC
