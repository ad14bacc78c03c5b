"""Shared utility helpers used across the core library."""

from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .logging import (
    get_logger,
    configure_logging,
    VariableContextFilter,
)
from .param_validation import (
    ensure,
    ensure_type,
    ensure_positive_int,
    ParamValidationError,
)

__all__ = [
    "RuntimeConfig",
    "get_config",
    "configure",
    "get_logger",
    "configure_logging",
    "VariableContextFilter",
    "ensure",
    "ensure_type",
    "ensure_positive_int",
    "ParamValidationError",
]
