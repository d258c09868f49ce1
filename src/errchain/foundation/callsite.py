"""Call-site capture.

The only place in errchain that touches interpreter stack introspection. Everything
else receives a ``CallSite`` value, or a ``SiteSource`` callable that produces one,
so tests can substitute a fake source.
"""

from __future__ import annotations

import inspect
import os
import sys
from typing import Annotated, Callable, Self, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .config import get_settings
from .log import get_logger
from .text import safe_repr

_log = get_logger("callsite")


class CallSite(BaseModel):
    """Where an error was raised: qualified function name, source file, line. Frozen."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Call Site", "examples": [
            {"func_name": "myapp.db.Store.load", "file": "/srv/myapp/db.py", "line": 42},
        ]},
    )

    func_name: str = ""
    file: str = "?file?"
    line: Annotated[int, Field(ge=0)] = 0

    @computed_field
    @property
    def known(self) -> bool:
        """False for the sentinel produced when introspection failed."""
        return bool(self.func_name)

    @property
    def basename(self) -> str:
        return os.path.basename(self.file)

    @classmethod
    def unknown(cls) -> Self:
        """The sentinel capture: empty name, sentinel file, line 0."""
        return cls.model_construct(func_name="", file=get_settings().unknown_file, line=0)

    def __str__(self) -> str:
        return f"{self.func_name} {self.basename}:{self.line}"


SiteSource: TypeAlias = Callable[[int], CallSite | None]


def capture(skip: int = 0) -> CallSite:
    """Record the call site ``skip`` frames above the caller of ``capture``.

    ``capture(0)`` names the function that called ``capture``; ``capture(1)`` names
    that function's caller, and so on. Never raises: a stack too shallow for
    ``skip`` yields ``CallSite.unknown()``.

    Example:
        >>> def where():
        ...     return capture(0).func_name
        >>> where().endswith("where")
        True
    """
    try:
        frame = sys._getframe(max(skip, 0) + 1)
    except ValueError:
        _log.debug("call stack shallower than %d frames, call site unknown", skip)
        return CallSite.unknown()
    try:
        code = frame.f_code
        module = frame.f_globals.get("__name__") or ""
        return CallSite.model_construct(
            func_name=f"{module}.{code.co_qualname}" if module else code.co_qualname,
            file=code.co_filename or get_settings().unknown_file,
            line=frame.f_lineno or 0,
        )
    finally:
        del frame


# Leading parameters left out of argument descriptions
_RECEIVERS = frozenset({"self", "cls"})


def describe_args(skip: int = 0) -> str:
    """Describe the current arguments of the function ``skip`` frames above the caller.

    Produces ``name=repr(value)`` pairs for positional, keyword-only, then
    ``*args``/``**kwargs`` parameters, the leading ``self``/``cls`` left out.
    Returns "" when the frame is out of reach. Values are read at call time; later
    mutation does not show up in the returned string.

    Example:
        >>> def load(path, *, retries=3):
        ...     return describe_args()
        >>> load("a.txt")
        "path='a.txt', retries=3"
    """
    try:
        frame = sys._getframe(max(skip, 0) + 1)
    except ValueError:
        _log.debug("call stack shallower than %d frames, no arguments to describe", skip)
        return ""
    try:
        code, local = frame.f_code, frame.f_locals
        count = code.co_argcount + code.co_kwonlyargcount
        count += bool(code.co_flags & inspect.CO_VARARGS) + bool(code.co_flags & inspect.CO_VARKEYWORDS)
        names = list(code.co_varnames[:count])
        if names and names[0] in _RECEIVERS:
            names.pop(0)
        return ", ".join(f"{name}={safe_repr(local[name])}" for name in names if name in local)
    finally:
        del frame
