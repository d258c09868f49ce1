"""errchain - Contextual error chains for Python.

Errors that remember the error they wrap, the call site that raised them, and
what the raising function was called with, without every call site formatting
that by hand. ``stack_string`` walks the chain and renders each link with the
richest detail it carries.

Quick Start:
    >>> from errchain import new_builder, stack_string, wrap
    >>>
    >>> def load(path: str) -> bytes:
    ...     eb = new_builder("%r", path)
    ...     try:
    ...         with open(path, "rb") as f:
    ...             return f.read()
    ...     except OSError as e:
    ...         raise eb.wrap(e, "load failed")
    >>>
    >>> try:
    ...     load("missing.txt")
    ... except Exception as e:
    ...     print(stack_string(e))
    ~.load('missing.txt') app.py:7 load failed
    [Errno 2] No such file or directory: 'missing.txt'

Inspecting chains:
    >>> from errchain import as_, is_, new_error, stack
    >>> token = new_error("token")
    >>> err = wrap(token, "a")
    >>> is_(err, token), stack(err) == [err, token]
    (True, True)

Builders:
    new_builder       Argument description formatted when the builder is made
    new_lazy_builder  Formatted when an error is made, marked "<lazy>"
    new_auto_builder  Described from the calling function's own parameters
    BUILTIN_BUILDER   No frills, no call site

Configuration (environment):
    ERRCHAIN_MAIN_MODULE  Module prefix shown as "~" (default: detected from __main__)
    ERRCHAIN_LOG_LEVEL    Level of the "errchain" logger once configure_logging() runs
"""

from __future__ import annotations

__version__ = "0.3.0"

# Chain core
from .chain import (
    ArgsSiteCarrier,
    LinkFormatter,
    SiteCarrier,
    Unwrapper,
    WrappedError,
    Wrapper,
    as_,
    is_,
    new_error,
    root_cause,
    sprintf,
    stack,
    unwrap,
    wrap,
    wrap_with,
)

# Builders
from .build import (
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

# Foundation
from .foundation import (
    CallSite,
    ErrchainSettings,
    capture,
    clear_settings_cache,
    configure_logging,
    describe_args,
    get_settings,
    main_module,
    relative_module,
)

# Rendering
from .render import Group, Renderer, group, stack_string

__all__ = [
    "__version__",
    # Chain core
    "WrappedError", "new_error", "sprintf", "wrap", "wrap_with",
    "as_", "is_", "root_cause", "stack", "unwrap",
    "ArgsSiteCarrier", "LinkFormatter", "SiteCarrier", "Unwrapper", "Wrapper",
    # Builders
    "BUILTIN_BUILDER", "ArgsBuilder", "BuiltinBuilder", "ContextError", "ErrorBuilder",
    "LazyArgsBuilder", "new_auto_builder", "new_builder", "new_lazy_builder",
    # Foundation
    "CallSite", "capture", "describe_args", "main_module", "relative_module",
    "ErrchainSettings", "get_settings", "clear_settings_cache", "configure_logging",
    # Rendering
    "Group", "Renderer", "group", "stack_string",
]
