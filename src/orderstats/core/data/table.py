"""
Columnar table abstraction consumed by the order statistics phases.

Responsibilities:
    * hold uniquely named columns sharing one row count
    * give read access to named columns and append columns/rows
    * convert from/to records and columnar mappings
"""
# 说明：概述 Table 抽象的作用域与职责，供 learn/derive/test/assess 各阶段统一读取输入列并写出结果表。
# 职责：
# - Column：具名列，持有值序列与（惰性推断的）值域
# - Table：有序、列名唯一、各列行数一致的内存表，提供按名取列、追加列/行、按格读写等能力
# - 支持从记录列表（records）或列式映射（arrays）构造，并可导出为记录列表

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

import numpy as np

from .domain import ValueDomain, infer_domain


class TableError(RuntimeError):
    """Raised when table operations fail."""
    # 表相关操作失败时抛出的异常（列名重复、行数不一致、缺少列等）


class Column:
    """Named sequence of values of one value domain."""
    # 具名列：值序列 + 值域；未显式给出值域时在首次访问时推断（推断失败抛 DomainError）

    def __init__(self, name: str, values: Iterable[Any] = (), domain: Optional[ValueDomain] = None):
        if not isinstance(name, str) or not name:
            raise TableError("column name must be a non-empty string")
        self.name = name
        self._domain = domain
        if isinstance(values, np.ndarray):
            if domain is None and values.dtype.kind != "O":
                self._domain = infer_domain(values)  # 非 object dtype 推断不会失败
            self._values: List[Any] = values.tolist()
        else:
            self._values = list(values)

    @property
    def domain(self) -> ValueDomain:
        if self._domain is None:
            self._domain = infer_domain(self._values)
        return self._domain

    @property
    def values(self) -> List[Any]:
        # 返回副本，避免外部绕过 Table 修改列长度
        return list(self._values)

    def append(self, value: Any) -> None:
        self._values.append(value)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self._values[index] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def copy(self) -> "Column":
        return Column(self.name, list(self._values), domain=self._domain)

    def __repr__(self) -> str:
        return f"Column(name={self.name!r}, rows={len(self)})"


class Table:
    """In-memory table of uniquely named, equally long columns."""

    def __init__(self, columns: Optional[Iterable[Column]] = None):
        self._columns: Dict[str, Column] = {}
        for column in columns or ():
            self.append_column(column)

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    @property
    def columns(self) -> List[Column]:
        return list(self._columns.values())

    def get_column(self, name: str) -> Optional[Column]:
        return self._columns.get(name)

    def row_count(self) -> int:
        if not self._columns:
            return 0
        return len(next(iter(self._columns.values())))

    def __len__(self) -> int:
        return self.row_count()

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def append_column(self, column: Column) -> None:
        """Append a column; its length must match the existing row count."""
        # 追加列：列名唯一，且（非空表时）行数必须一致
        if not isinstance(column, Column):
            raise TableError("append_column() expects a Column")
        if column.name in self._columns:
            raise TableError(f"duplicate column name '{column.name}'")
        if self._columns and len(column) != self.row_count():
            raise TableError(
                f"column '{column.name}' has {len(column)} rows, table has {self.row_count()}"
            )
        self._columns[column.name] = column

    def append_row(self, values: Union[Sequence[Any], Mapping[str, Any]]) -> None:
        """Append one row given in column order or as a name -> value mapping."""
        if not self._columns:
            raise TableError("cannot append a row to a table without columns")
        if isinstance(values, Mapping):
            missing = [name for name in self._columns if name not in values]
            if missing:
                raise TableError(f"row is missing columns {missing}")
            row = [values[name] for name in self._columns]
        else:
            row = list(values)
            if len(row) != len(self._columns):
                raise TableError(f"row has {len(row)} values, table has {len(self._columns)} columns")
        for column, value in zip(self._columns.values(), row):
            column.append(value)

    def _require(self, name: str) -> Column:
        column = self._columns.get(name)
        if column is None:
            raise TableError(f"table has no column '{name}'")
        return column

    def value(self, row: int, name: str) -> Any:
        return self._require(name)[row]

    def set_value(self, row: int, name: str, value: Any) -> None:
        self._require(name)[row] = value

    def copy(self) -> "Table":
        return Table(column.copy() for column in self._columns.values())

    @classmethod
    def from_arrays(cls, arrays: Mapping[str, Iterable[Any]]) -> "Table":
        """Create a table from columnar arrays (name -> values)."""
        # 由列式数组（列名->序列）构建；行数不一致由 append_column 拦截
        return cls(Column(name, values) for name, values in arrays.items())

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Table":
        """Create a table from mapping-based records sharing the same keys."""
        records = list(records)
        if not records:
            return cls()
        names = list(records[0])
        for record in records:
            if set(record) != set(names):
                raise TableError("all records must share the same fields")
        return cls(Column(name, [record[name] for record in records]) for name in names)

    def to_records(self) -> List[Dict[str, Any]]:
        """Materialize the table as a list of name -> value mappings."""
        names = self.column_names
        return [
            {name: self._columns[name][row] for name in names}
            for row in range(self.row_count())
        ]

    def __repr__(self) -> str:
        return f"Table(columns={self.column_names}, rows={self.row_count()})"
