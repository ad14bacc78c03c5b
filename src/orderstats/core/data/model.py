"""
Multi-block model container exchanged between the order statistics phases.
"""
# 说明：顺序统计模型容器，按顺序保存具名数据块（每个请求列一个直方图表，最后一个为 "Quantiles" 分位数表）。
# 职责：
# - append_block / get_block：按顺序追加与读取 (名称, Table) 数据块
# - quantile_table：仅当最后一个块名为 "Quantiles" 时返回该表，test/assess 只读取这个块
# - set_quantiles：替换已有分位数块并追加到末尾，保证“恰好一个且位于最后”
# 约定：
# - 直方图表列名：Value / Cardinality / Probability；第 0 行为基数哨兵行
# - 分位数表列名：Quantile（标签列）+ 每个变量一列

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .table import Table

VALUE = "Value"
CARDINALITY = "Cardinality"
PROBABILITY = "Probability"
QUANTILE = "Quantile"
QUANTILES_BLOCK = "Quantiles"


class ModelError(RuntimeError):
    """Raised when model blocks are accessed inconsistently."""


class OrderStatisticsModel:
    """Ordered collection of named tables: histograms first, quantiles last."""

    def __init__(self) -> None:
        self._blocks: List[Tuple[str, Table]] = []

    @property
    def number_of_blocks(self) -> int:
        return len(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Tuple[str, Table]]:
        return iter(list(self._blocks))

    @property
    def block_names(self) -> List[str]:
        return [name for name, _ in self._blocks]

    def append_block(self, name: str, table: Table) -> None:
        if not isinstance(table, Table):
            raise ModelError(f"block '{name}' must be a Table")
        self._blocks.append((name, table))

    def get_block(self, index: int) -> Tuple[str, Table]:
        if not -len(self._blocks) <= index < len(self._blocks):
            raise ModelError(f"block index {index} out of range ({len(self._blocks)} blocks)")
        return self._blocks[index]

    def find_block(self, name: str) -> Optional[Table]:
        for block_name, table in self._blocks:
            if block_name == name:
                return table
        return None

    def last_block(self) -> Optional[Tuple[str, Table]]:
        return self._blocks[-1] if self._blocks else None

    def quantile_table(self) -> Optional[Table]:
        # 结构约定：只有最后一个块、且名为 "Quantiles" 时才视为有效分位数表
        last = self.last_block()
        if last is None or last[0] != QUANTILES_BLOCK:
            return None
        return last[1]

    def histogram_blocks(self) -> List[Tuple[str, Table]]:
        return [(name, table) for name, table in self._blocks if name != QUANTILES_BLOCK]

    def set_quantiles(self, table: Table) -> None:
        # 重复 derive 时丢弃旧分位数块，新块始终位于末尾
        self._blocks = [(name, block) for name, block in self._blocks if name != QUANTILES_BLOCK]
        self.append_block(QUANTILES_BLOCK, table)

    def __repr__(self) -> str:
        return f"OrderStatisticsModel(blocks={self.block_names})"
