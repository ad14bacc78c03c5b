"""Core data abstractions shared across the order statistics phases."""

from .domain import (
    DomainError,
    DomainInfo,
    DomainKind,
    ValueDomain,
    NumericDomain,
    TextDomain,
    GenericDomain,
    domain_for,
    infer_domain,
)
from .table import (
    Column,
    Table,
    TableError,
)
from .model import (
    CARDINALITY,
    PROBABILITY,
    QUANTILE,
    QUANTILES_BLOCK,
    VALUE,
    ModelError,
    OrderStatisticsModel,
)

__all__ = [
    "DomainError",
    "DomainInfo",
    "DomainKind",
    "ValueDomain",
    "NumericDomain",
    "TextDomain",
    "GenericDomain",
    "domain_for",
    "infer_domain",
    "Column",
    "Table",
    "TableError",
    "CARDINALITY",
    "PROBABILITY",
    "QUANTILE",
    "QUANTILES_BLOCK",
    "VALUE",
    "ModelError",
    "OrderStatisticsModel",
]
