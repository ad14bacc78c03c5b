"""
Order statistics pipeline object chaining learn, derive, test and assess.

Responsibilities
  - Hold the variable requests and the quantile settings of one analysis.
  - Expose the four phases as explicit calls the caller chains itself.
  - Offer the key/value parameter surface used by enclosing frameworks.

Usage Context
  - ``learn`` -> ``derive`` once per model, then any number of ``test``/``assess`` calls.

Limitations
  - A request is a set of column names but only its lexicographically first
    name is analysed; the other names are logged once and ignored.
"""
# 说明：顺序统计流水线对象，串联 learn / derive / test / assess 四个阶段。
# 职责：
# - 管理变量请求（每个请求为列名集合，只使用字典序第一个列名）与分位数相关设置
# - learn：生成直方图块；derive：补全基数/概率并生成 "Quantiles" 块；test：KS 检验；assess：逐行分桶
# - set_parameter：以键值对形式配置 NumberOfIntervals / QuantileDefinition
# 约定：
# - 非法的 QuantileDefinition 仅告警并保留原设置；非法的区间数抛出 ParamValidationError
# - set_parameter 的 NumberOfIntervals 接受整数字符串；属性与构造参数只接受整数
# - 所有失败都以“列”为粒度降级，不会中断其他列

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from orderstats.core.data.model import OrderStatisticsModel
from orderstats.core.data.table import Table
from orderstats.core.utils.config import get_config
from orderstats.core.utils.logging import get_logger
from orderstats.core.utils.param_validation import (
    ParamValidationError,
    ensure,
    ensure_positive_int,
    ensure_type,
)

from .classifier import QuantileClassifier, assess_table, select_classifier
from .goodness_of_fit import goodness_of_fit_table
from .histogram import learn_histograms
from .quantiles import QuantileDefinition, derive_quantiles

logger = get_logger(__name__)


class OrderStatistics:
    """
    Histogram, quantile, goodness-of-fit and quantile-bucket statistics.

    - Configuration
      - number_of_intervals: Number of quantile segments (N+1 quantiles are derived).
      - quantile_definition: ``NearestRank`` or ``AveragedInterpolation``.

    - Behavior
      - ``learn`` builds one histogram block per request into a model.
      - ``derive`` resolves cardinalities and appends the shared "Quantiles" block.
      - ``test`` returns the Kolmogorov-Smirnov statistics table.
      - ``assess`` returns a copy of the data with ``Quantile(<variable>)`` columns.

    - Usage Notes
      - Defaults for both settings come from the runtime configuration.
    """

    def __init__(
        self,
        number_of_intervals: Optional[int] = None,
        quantile_definition: Any = None,
    ):
        config = get_config()
        if number_of_intervals is None:
            number_of_intervals = config.number_of_intervals
        if quantile_definition is None:
            quantile_definition = config.quantile_definition
        self._number_of_intervals = ensure_positive_int(number_of_intervals, label="number_of_intervals")
        self._quantile_definition = QuantileDefinition.parse(quantile_definition)
        self._requests: Set[FrozenSet[str]] = set()

    # ------------------------------------------------------------------ settings
    @property
    def number_of_intervals(self) -> int:
        return self._number_of_intervals

    @number_of_intervals.setter
    def number_of_intervals(self, value: int) -> None:
        self._number_of_intervals = ensure_positive_int(value, label="number_of_intervals")

    @property
    def quantile_definition(self) -> QuantileDefinition:
        return self._quantile_definition

    @quantile_definition.setter
    def quantile_definition(self, value: Any) -> None:
        try:
            self._quantile_definition = QuantileDefinition.parse(value)
        except ParamValidationError:
            logger.warning("Incorrect type of quantile definition: %r. Ignoring it.", value)

    def set_parameter(self, parameter: str, value: Any) -> bool:
        """Set a named parameter; return False when the name is not recognised."""
        if parameter == "NumberOfIntervals":
            if isinstance(value, str):
                # 键值接口允许整数字符串，如 "8"
                try:
                    value = int(value.strip())
                except ValueError as exc:
                    raise ParamValidationError(
                        f"number_of_intervals must be a positive integer, got {value!r}"
                    ) from exc
            self.number_of_intervals = value
            return True
        if parameter == "QuantileDefinition":
            self.quantile_definition = value
            return True
        return False

    def describe(self) -> Dict[str, Any]:
        return {
            "NumberOfIntervals": self._number_of_intervals,
            "QuantileDefinition": self._quantile_definition.label,
            "Requests": [sorted(request) for request in self.requests],
        }

    # ------------------------------------------------------------------ requests
    def add_request(self, *names: str) -> None:
        """Request analysis of a column; extra names in one request are ignored."""
        ensure(len(names) > 0, "a request needs at least one column name")
        for name in names:
            ensure(isinstance(name, str) and bool(name), f"invalid column name {name!r}")
        request = frozenset(names)
        if len(request) > 1 and request not in self._requests:
            ordered = sorted(request)
            logger.info(
                "Request %s holds several columns; only %s is analysed.",
                ordered,
                ordered[0],
                extra={"variable": ordered[0]},
            )
        self._requests.add(request)

    def add_column(self, name: str) -> None:
        self.add_request(name)

    def reset_requests(self) -> None:
        self._requests.clear()

    @property
    def requests(self) -> List[FrozenSet[str]]:
        return sorted(self._requests, key=lambda request: sorted(request))

    def variables(self) -> List[str]:
        """Names actually analysed: the first name of each request, without repeats."""
        variables: List[str] = []
        for request in self.requests:
            variable = min(request)
            if variable not in variables:
                variables.append(variable)
        return variables

    # ------------------------------------------------------------------ phases
    @staticmethod
    def _check_inputs(data: Table, model: OrderStatisticsModel) -> None:
        ensure_type(data, (Table,), label="data")
        ensure_type(model, (OrderStatisticsModel,), label="model")

    def learn(self, data: Table, model: Optional[OrderStatisticsModel] = None) -> OrderStatisticsModel:
        """Build histogram blocks for every request into ``model`` (a new one by default)."""
        ensure_type(data, (Table,), label="data")
        if model is None:
            model = OrderStatisticsModel()
        return learn_histograms(data, self.variables(), model)

    def derive(self, model: OrderStatisticsModel) -> OrderStatisticsModel:
        """Resolve histogram cardinalities and append the "Quantiles" block."""
        ensure_type(model, (OrderStatisticsModel,), label="model")
        if model.number_of_blocks < 1:
            logger.warning("Model has no histogram blocks. Nothing to derive.")
            return model
        derive_quantiles(model, self._number_of_intervals, self._quantile_definition)
        return model

    def test(self, data: Table, model: OrderStatisticsModel) -> Table:
        """Kolmogorov-Smirnov statistics of ``data`` against the model quantiles."""
        self._check_inputs(data, model)
        return goodness_of_fit_table(data, model, self.variables())

    def assess(self, data: Table, model: OrderStatisticsModel) -> Table:
        """Copy of ``data`` with one quantile-bucket column per request."""
        self._check_inputs(data, model)
        return assess_table(data, model, self.variables())

    def select_classifier(
        self,
        data: Table,
        model: OrderStatisticsModel,
        variable: str,
    ) -> Optional[QuantileClassifier]:
        """Classifier for one variable, or ``None`` when inputs are missing or incompatible."""
        quantile_table = model.quantile_table()
        column = data.get_column(variable)
        if quantile_table is None or column is None:
            return None
        quantile_column = quantile_table.get_column(variable)
        if quantile_column is None:
            logger.warning(
                "Quantile table does not have a column %s. Ignoring it.",
                variable,
                extra={"variable": variable},
            )
            return None
        return select_classifier(column, quantile_column)

    def __repr__(self) -> str:
        return (
            f"OrderStatistics(number_of_intervals={self._number_of_intervals}, "
            f"quantile_definition={self._quantile_definition.label})"
        )


def run_order_statistics(
    data: Table,
    columns: Iterable[str],
    *,
    number_of_intervals: Optional[int] = None,
    quantile_definition: Any = None,
) -> OrderStatisticsModel:
    """Learn and derive a model for ``columns`` of ``data`` in one call."""
    engine = OrderStatistics(number_of_intervals, quantile_definition)
    for column in columns:
        engine.add_column(column)
    return engine.derive(engine.learn(data))
