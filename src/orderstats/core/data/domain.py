"""
Value domains used throughout the order statistics layer.

Responsibilities:
    * describe the three totally ordered value families a column may hold
    * provide comparison, sorting, display and (numeric only) averaging
    * infer the domain of a column from its values and reject mixed columns
"""
# 说明：数据层通用“值域（Domain）”抽象。
# 职责：
# - 统一描述列的取值族：数值（可求平均）、文本（字典序）、通用可比较值（不可求平均）
# - 为直方图、分位数、拟合检验与分位数分类提供一致的比较/排序/展示接口
# - 根据列中元素类型（或 numpy dtype）推断值域，混合类型列直接拒绝

from __future__ import annotations

import enum
import functools
import math
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional

import numpy as np


class DomainError(ValueError):
    """Raised when values fall outside of, or cannot be ordered by, a domain."""


class DomainKind(enum.Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    GENERIC = "generic"


@dataclass(frozen=True)
class DomainInfo:
    """Lightweight descriptor used for logging and inspection."""

    name: str
    kind: DomainKind
    supports_average: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)


class ValueDomain(ABC):
    """Abstract base class for all value domains."""
    # 所有值域的抽象基类：统一名称、空值、成员判定、全序比较与展示接口

    kind: DomainKind

    def __init__(self, name: Optional[str] = None):
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def empty_value(self) -> Any:
        """Placeholder stored in the cardinality row of a histogram."""

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """Return True when the provided value belongs to the domain."""

    @property
    def supports_average(self) -> bool:
        return False

    def average(self, first: Any, second: Any) -> Any:
        # 默认不支持求平均：文本与通用值域只有顺序没有算术
        raise DomainError(f"domain {self.name} does not support averaging")

    def compare(self, first: Any, second: Any) -> int:
        """Three-way comparison under the domain's total order."""
        try:
            if first < second:
                return -1
            if second < first:
                return 1
        except TypeError as exc:
            raise DomainError(
                f"values {first!r} and {second!r} are not comparable in domain {self.name}"
            ) from exc
        return 0

    def less(self, first: Any, second: Any) -> bool:
        return self.compare(first, second) < 0

    @property
    def sort_key(self) -> Optional[Callable[[Any], Any]]:
        # 数值与文本直接使用原生顺序；通用值域覆盖为基于 compare 的 key
        return None

    def sort(self, values: Iterable[Any]) -> List[Any]:
        try:
            return sorted(values, key=self.sort_key)
        except TypeError as exc:
            raise DomainError(f"values of domain {self.name} cannot be ordered: {exc}") from exc

    def to_display_string(self, value: Any) -> str:
        return str(value)

    def validate_values(self, values: Iterable[Any]) -> None:
        """Raise ``DomainError`` unless every value belongs to the domain."""
        for value in values:
            if not self.contains(value):
                raise DomainError(f"value {value!r} outside of domain {self.name}")

    def describe(self) -> DomainInfo:
        return DomainInfo(name=self.name, kind=self.kind, supports_average=self.supports_average)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ValueDomain) and other.kind is self.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NumericDomain(ValueDomain):
    """Real numbers; the only domain with a defined average of two values."""

    kind = DomainKind.NUMERIC

    @property
    def empty_value(self) -> float:
        return math.nan

    @property
    def supports_average(self) -> bool:
        return True

    def contains(self, value: Any) -> bool:
        # bool 虽然是 Integral 子类，但在这里按通用值处理
        if isinstance(value, (bool, np.bool_)):
            return False
        return isinstance(value, numbers.Real)

    def average(self, first: Any, second: Any) -> float:
        return 0.5 * (float(first) + float(second))

    def to_display_string(self, value: Any) -> str:
        return format(float(value), "g")

    def validate_values(self, values: Iterable[Any]) -> None:
        # NaN 不满足全序；超出 float 表示范围的整数无法求平均或向量化分桶
        values = list(values)
        super().validate_values(values)
        for value in values:
            try:
                as_float = float(value)
            except OverflowError as exc:
                raise DomainError(f"value {value!r} is out of float range in domain {self.name}") from exc
            if math.isnan(as_float):
                raise DomainError(f"NaN is not totally ordered in domain {self.name}")


class TextDomain(ValueDomain):
    """Strings under lexicographic order."""

    kind = DomainKind.TEXT

    @property
    def empty_value(self) -> str:
        return ""

    def contains(self, value: Any) -> bool:
        return isinstance(value, (str, np.str_))


class GenericDomain(ValueDomain):
    """Comparable but not summarizable values (dates, tuples, boxed values)."""

    kind = DomainKind.GENERIC

    @property
    def empty_value(self) -> None:
        return None

    def contains(self, value: Any) -> bool:
        try:
            hash(value)
        except TypeError:
            return False
        return value is not None

    @property
    def sort_key(self) -> Callable[[Any], Any]:
        # 通过 compare 排序，使不可比较的值以 DomainError 而不是 TypeError 暴露
        return functools.cmp_to_key(self.compare)


def _kind_of(value: Any) -> DomainKind:
    if isinstance(value, (str, np.str_)):
        return DomainKind.TEXT
    if NumericDomain().contains(value):
        return DomainKind.NUMERIC
    return DomainKind.GENERIC


_DOMAINS = {
    DomainKind.NUMERIC: NumericDomain,
    DomainKind.TEXT: TextDomain,
    DomainKind.GENERIC: GenericDomain,
}


def domain_for(kind: DomainKind) -> ValueDomain:
    return _DOMAINS[kind]()


def infer_domain(values: Iterable[Any]) -> ValueDomain:
    """
    Infer the value domain of a column.

    numpy arrays are classified by dtype; other sequences by the types of
    their elements. A column mixing value kinds is rejected.
    Empty input is treated as generic.
    """
    # numpy 数组优先按 dtype 判断，避免逐元素检查
    if isinstance(values, np.ndarray) and values.dtype.kind != "O":
        if values.dtype.kind in "iuf":
            return NumericDomain()
        if values.dtype.kind in "US":
            return TextDomain()
        return GenericDomain()

    kinds = {_kind_of(value) for value in values}
    if not kinds:
        return GenericDomain()
    if len(kinds) > 1:
        names = ", ".join(sorted(kind.value for kind in kinds))
        raise DomainError(f"column mixes value kinds ({names})")
    return domain_for(kinds.pop())
