"""Wrapped errors and their constructors.

A ``WrappedError`` pairs an annotation (what this layer adds) with a cause (what it
is built upon). ``str()`` shows only the annotation; ``unwrap()`` yields the cause
and ``wrapper()`` the annotation, so identity checks can target either half.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..foundation.log import get_logger
from ..foundation.text import safe_repr

_log = get_logger("chain")


def sprintf(template: str, *args: object) -> str:
    """printf-style formatting that never raises.

    With no args the template is returned verbatim, so literal ``%`` signs survive.
    A single mapping argument feeds ``%(name)s`` placeholders. On a template/args
    mismatch the template is kept and the args are appended as
    ``%!(BADFORMAT ...)``.

    Example:
        >>> sprintf("open %s: %d", "a.txt", 2)
        'open a.txt: 2'
        >>> sprintf("open %s")
        'open %s'
        >>> sprintf("open %d", "a.txt")
        "open %d %!(BADFORMAT 'a.txt')"
    """
    template = str(template)
    if not args:
        return template
    values = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
    try:
        return template % values
    except Exception as e:
        # Also covers args whose own __str__/__repr__ raises
        _log.debug("format %r failed with %d args: %s", template, len(args), type(e).__name__)
        return f"{template} %!(BADFORMAT {', '.join(map(safe_repr, args))})"


class WrappedError(Exception):
    """An annotation error layered over the error that caused it.

    Immutable once built. ``__cause__`` is set as well, so the interpreter's own
    traceback output shows the chain when a ``WrappedError`` is raised.

    Example:
        >>> root = new_error("connection refused")
        >>> err = wrap(root, "fetch %s", "users")
        >>> str(err), err.unwrap() is root
        ('fetch users', True)
    """

    __slots__ = ("_annotation", "_cause")

    def __init__(self, cause: BaseException | None, annotation: BaseException) -> None:
        super().__init__(annotation)
        self._annotation = annotation
        self._cause = cause
        self.__cause__ = cause

    @property
    def annotation(self) -> BaseException:
        return self._annotation

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def unwrap(self) -> BaseException | None:
        """The error this one wraps."""
        return self._cause

    def wrapper(self) -> BaseException:
        """This layer's annotation, without the cause."""
        return self._annotation

    def __str__(self) -> str:
        return str(self._annotation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._annotation!r}, cause={self._cause!r})"

    def __reduce__(self) -> tuple[type[WrappedError], tuple[BaseException | None, BaseException]]:
        return type(self), (self._cause, self._annotation)


def new_error(template: str, *args: object) -> Exception:
    """Plain error from a printf-style template."""
    return Exception(sprintf(template, *args))


def wrap(cause: BaseException | None, template: str, *args: object) -> WrappedError:
    """Like ``new_error``, except ``unwrap()`` on the result yields ``cause``."""
    return wrap_with(cause, new_error(template, *args))


def wrap_with(cause: BaseException | None, annotation: BaseException) -> WrappedError:
    """Wrap ``cause`` with a pre-built annotation error.

    Useful when the annotation is itself a special type with its own fields, such
    as the ``ContextError`` values builders produce.
    """
    return WrappedError(cause, annotation)
