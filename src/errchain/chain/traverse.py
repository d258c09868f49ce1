"""Cause-chain traversal: unwrap, stack, is_, as_.

``unwrap`` and ``stack`` only ever descend along causes. ``is_`` and ``as_`` also
step sideways into each link's annotation (``wrapper()``) before descending, so a
wrapping layer is transparent to them.

Every walk remembers the links it has visited and stops on a repeat, so a chain a
caller has accidentally made cyclic is truncated rather than followed forever.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from ..foundation.log import get_logger
from .protocols import Unwrapper, Wrapper
from .wrapped import WrappedError

E = TypeVar("E", bound=BaseException)

_log = get_logger("chain")


def unwrap(err: BaseException | None) -> BaseException | None:
    """One level down the chain, or None when ``err`` is a root cause.

    Uses the error's ``unwrap()`` method when it has one, otherwise an explicit
    ``raise ... from ...`` cause. Implicit ``__context__`` is not followed.
    """
    if err is None:
        return None
    if isinstance(err, Unwrapper):
        return err.unwrap()
    return getattr(err, "__cause__", None)


def stack(err: BaseException | None) -> list[BaseException]:
    """``err`` followed by every error found by repeatedly unwrapping it.

    Outermost first, root cause last. Empty for ``None``.
    """
    links: list[BaseException] = []
    seen: set[int] = set()
    while err is not None:
        if id(err) in seen:
            _log.warning("cause chain loops back to %r after %d links, truncated", err, len(links))
            break
        seen.add(id(err))
        links.append(err)
        err = unwrap(err)
    return links


def root_cause(err: BaseException | None) -> BaseException | None:
    """Innermost error of the chain."""
    links = stack(err)
    return links[-1] if links else None


def _walk(err: BaseException | None, seen: dict[int, BaseException]) -> Iterator[BaseException]:
    """Each link, then its annotation subtree, then the next cause. ``seen`` keeps refs alive."""
    while err is not None and id(err) not in seen:
        seen[id(err)] = err
        yield err
        if isinstance(err, Wrapper):
            yield from _walk(err.wrapper(), seen)
        err = unwrap(err)


def _same(link: BaseException, target: BaseException) -> bool:
    if link is target:
        return True
    # Two wrappers built from the very same annotation and cause are the same error
    return (
        isinstance(link, WrappedError)
        and isinstance(target, WrappedError)
        and link.annotation is target.annotation
        and link.cause is target.cause
    )


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Whether ``target`` appears anywhere in ``err``'s chain, by identity.

    Matching text is not enough: two separately built errors with the same
    message are different errors.

    Example:
        >>> token = new_error("token")
        >>> a, b = wrap(token, "a"), wrap(token, "b")
        >>> is_(a, token), is_(b, token), is_(a, b)
        (True, True, False)
    """
    if err is None or target is None:
        return err is target
    return any(_same(link, target) for link in _walk(err, {}))


def as_(err: BaseException | None, cls: type[E] | tuple[type[E], ...]) -> E | None:
    """First link of the chain that is an instance of ``cls``, or None.

    Annotations are searched before causes at each level.

    Example:
        >>> err = wrap(KeyError("id"), "lookup failed")
        >>> as_(err, KeyError)
        KeyError('id')
    """
    if not isinstance(cls, (type, tuple)):
        raise TypeError(f"as_() needs a class or tuple of classes, got {cls!r}")
    return next((link for link in _walk(err, {}) if isinstance(link, cls)), None)
