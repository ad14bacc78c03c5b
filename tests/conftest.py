"""Shared pytest configuration, path setup and fixtures for test modules."""

import dataclasses
import sys
from pathlib import Path

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from orderstats.core.data import Table  # noqa: E402
from orderstats.core.utils import get_config  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_runtime_config():
    # 全局配置是进程级单例，测试结束后恢复原值，避免用例之间互相污染
    config = get_config()
    snapshot = dataclasses.asdict(config)
    yield
    config.update(**snapshot)


@pytest.fixture
def ten_values() -> Table:
    # 1..10 的数值列：四分位数的经典示例
    return Table.from_arrays({"x": list(range(1, 11))})


@pytest.fixture
def mixed_table() -> Table:
    # 同一张表中包含数值、文本两类列
    return Table.from_arrays(
        {
            "x": [4, 1, 3, 1, 2, 5, 3, 3],
            "name": ["pear", "apple", "fig", "apple", "kiwi", "plum", "fig", "date"],
        }
    )
