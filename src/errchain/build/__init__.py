"""Builders producing errors enriched with call site and argument description."""

from .builders import (
    BUILTIN_BUILDER,
    ArgsBuilder,
    BuiltinBuilder,
    ContextError,
    ErrorBuilder,
    LazyArgsBuilder,
    new_auto_builder,
    new_builder,
    new_lazy_builder,
)

__all__ = [
    "BUILTIN_BUILDER", "ArgsBuilder", "BuiltinBuilder", "ContextError", "ErrorBuilder",
    "LazyArgsBuilder", "new_auto_builder", "new_builder", "new_lazy_builder",
]
