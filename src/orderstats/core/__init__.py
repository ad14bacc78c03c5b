"""Entry point for the core library components."""

from __future__ import annotations

from .data import (
    Column,
    DomainError,
    DomainKind,
    GenericDomain,
    ModelError,
    NumericDomain,
    OrderStatisticsModel,
    Table,
    TableError,
    TextDomain,
    ValueDomain,
    infer_domain,
)
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    configure,
    get_config,
    get_logger,
)

__all__: list[str] = [
    "Column",
    "DomainError",
    "DomainKind",
    "GenericDomain",
    "ModelError",
    "NumericDomain",
    "OrderStatisticsModel",
    "Table",
    "TableError",
    "TextDomain",
    "ValueDomain",
    "infer_domain",
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "get_config",
    "get_logger",
]
