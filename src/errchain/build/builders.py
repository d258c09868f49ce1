"""Error builders.

A builder is obtained once per function scope and used at that function's failure
points. Three policies share the ``errorf``/``wrap`` contract:

- ``BUILTIN_BUILDER``: no frills, same as ``new_error``/``wrap``
- ``new_builder``: argument description rendered once, when the builder is made
- ``new_lazy_builder``: argument description rendered when an error is made

Errors from the last two are ``ContextError`` values carrying the caller's
call site and the argument description. ``str()`` stays the plain message; the
extra detail shows up in ``stack_string()``.

Example:
    >>> def load(path: str, retries: int) -> bytes:
    ...     eb = new_builder("%r, %d", path, retries)
    ...     try:
    ...         return read(path)
    ...     except OSError as e:
    ...         raise eb.wrap(e, "read failed")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..chain.wrapped import WrappedError, new_error, sprintf, wrap, wrap_with
from ..foundation.callsite import CallSite, SiteSource, capture, describe_args
from ..foundation.config import get_settings

# Frames between capture() and the caller of errorf()/wrap(): _annotate, errorf/wrap
_SITE_SKIP = 2


class ContextError(Exception):
    """Annotation that remembers where it was raised and the raiser's arguments.

    Immutable. ``str()`` is the message alone.
    """

    __slots__ = ("_message", "_call_site", "_arg_str")

    def __init__(self, message: str, call_site: CallSite | None = None, arg_str: str = "") -> None:
        super().__init__(message)
        self._message = message
        self._call_site = call_site
        self._arg_str = arg_str

    @property
    def message(self) -> str:
        return self._message

    @property
    def call_site(self) -> CallSite | None:
        return self._call_site

    @property
    def arg_str(self) -> str:
        return self._arg_str

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, call_site={self._call_site!r}, arg_str={self._arg_str!r})"

    def __reduce__(self) -> tuple[type[ContextError], tuple[str, CallSite | None, str]]:
        return type(self), (self._message, self._call_site, self._arg_str)


@runtime_checkable
class ErrorBuilder(Protocol):
    """Anything that can make and wrap errors."""

    def errorf(self, template: str, *args: object) -> BaseException: ...
    def wrap(self, err: BaseException | None, template: str, *args: object) -> WrappedError: ...


@dataclass(frozen=True, slots=True)
class BuiltinBuilder:
    """No frills. A proxy to ``new_error`` and ``wrap``, nothing captured."""

    def errorf(self, template: str, *args: object) -> BaseException:
        return new_error(template, *args)

    def wrap(self, err: BaseException | None, template: str, *args: object) -> WrappedError:
        return wrap(err, template, *args)


BUILTIN_BUILDER: ErrorBuilder = BuiltinBuilder()


@dataclass(frozen=True, slots=True)
class _SiteBuilder(ABC):
    """Captures the call site of every errorf/wrap call and attaches ``describe()``."""

    source: SiteSource = field(default=capture, kw_only=True, repr=False)

    @abstractmethod
    def describe(self) -> str:
        """Argument description for an error being made now."""

    def _annotate(self, template: str, args: tuple[object, ...]) -> ContextError:
        # Must be called directly from errorf/wrap, see _SITE_SKIP
        site = self.source(_SITE_SKIP)
        return ContextError(sprintf(template, *args), site, self.describe())

    def errorf(self, template: str, *args: object) -> BaseException:
        """Like ``new_error``, plus call site and argument description."""
        return self._annotate(template, args)

    def wrap(self, err: BaseException | None, template: str, *args: object) -> WrappedError:
        """Like ``wrap``, plus call site and argument description on the annotation."""
        return wrap_with(err, self._annotate(template, args))


@dataclass(frozen=True, slots=True)
class ArgsBuilder(_SiteBuilder):
    """Builder holding an argument description rendered up front."""

    arg_str: str = ""

    def describe(self) -> str:
        return self.arg_str


@dataclass(frozen=True, slots=True)
class LazyArgsBuilder(_SiteBuilder):
    """Builder that renders its argument description only when an error is made."""

    template: str = ""
    args: tuple[object, ...] = ()

    def describe(self) -> str:
        arg_str = sprintf(self.template, *self.args)
        # Nothing to warn about without args
        return f"{get_settings().lazy_marker} {arg_str}" if arg_str else arg_str


def new_builder(template: str = "", *args: object, source: SiteSource = capture) -> ErrorBuilder:
    """Builder whose errors name the calling function and describe its arguments.

    ``template`` and ``args`` describe the calling function's own parameters, not
    the error. The description is formatted now, so later mutation of ``args``
    does not change it.

    Example:
        >>> def fetch(url, timeout):
        ...     eb = new_builder("%r, %s", url, timeout)
        ...     return eb.errorf("no route to host")
        >>> str(fetch("http://x", 5))
        'no route to host'
    """
    return ArgsBuilder(arg_str=sprintf(template, *args), source=source)


def new_lazy_builder(template: str = "", *args: object, source: SiteSource = capture) -> ErrorBuilder:
    """Like ``new_builder``, except the description is formatted when an error is made.

    Use only where formatting up front is measurably too slow, e.g. in a function
    called thousands of times a second that rarely fails. The values shown are
    the ones at error time and may have drifted since the call started; the
    description is prefixed with the lazy marker (``<lazy>``) to say so.
    """
    return LazyArgsBuilder(template=template, args=tuple(args), source=source)


def new_auto_builder(*, source: SiteSource = capture) -> ErrorBuilder:
    """Eager builder describing the calling function's parameters automatically.

    Example:
        >>> def resize(image, width, height=0):
        ...     eb = new_auto_builder()
        ...     return eb.describe()
        >>> resize("cat.png", 640)
        "image='cat.png', width=640, height=0"
    """
    return ArgsBuilder(arg_str=describe_args(1), source=source)
