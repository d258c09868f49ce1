"""Capabilities an error value may expose.

Traversal consults ``Unwrapper`` and ``Wrapper``. The renderer queries the
remaining protocols in a fixed priority order, see ``errchain.render.renderer``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..foundation.callsite import CallSite
    from ..render.renderer import Renderer


@runtime_checkable
class Unwrapper(Protocol):
    """Error that knows its immediate cause."""

    def unwrap(self) -> BaseException | None: ...


@runtime_checkable
class Wrapper(Protocol):
    """Error that can hand back its annotation without the cause."""

    def wrapper(self) -> BaseException: ...


@runtime_checkable
class LinkFormatter(Protocol):
    """Error that renders its own stack-string line, verbatim.

    Receives the active renderer so nested errors can be rendered consistently.
    """

    def format_link(self, renderer: Renderer) -> str: ...


@runtime_checkable
class SiteCarrier(Protocol):
    """Error that remembers where it was raised."""

    @property
    def call_site(self) -> CallSite | None: ...


@runtime_checkable
class ArgsSiteCarrier(Protocol):
    """Error that remembers where it was raised and what the raiser was called with."""

    @property
    def call_site(self) -> CallSite | None: ...

    @property
    def arg_str(self) -> str: ...
