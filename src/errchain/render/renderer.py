"""Stack-string rendering.

Each link of ``stack(err)`` becomes one line, rendered with the first capability
it has, in this order:

1. ``LinkFormatter``: its own ``format_link()``, verbatim
2. ``ArgsSiteCarrier``: ``func(args) file.py:12 message``
3. ``SiteCarrier``: ``func file.py:12 message``
4. ``Wrapper``: the annotation rendered in its place
5. ``str(link)``

A call site that is missing or unknown counts as no call site. Function names are
relativized against the main module, so ``myapp.db.load`` reads ``~.db.load``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from ..chain.protocols import ArgsSiteCarrier, LinkFormatter, SiteCarrier, Wrapper
from ..chain.traverse import stack
from ..foundation.callsite import CallSite
from ..foundation.config import get_settings
from ..foundation.log import get_logger
from ..foundation.modules import main_module, relative_module

if TYPE_CHECKING:
    from ..foundation.config import ErrchainSettings

_log = get_logger("render")


def plain(err: BaseException) -> str:
    """``str(err)``, or a placeholder when the error's own ``__str__`` fails."""
    try:
        return str(err)
    except Exception as e:
        _log.debug("str() of %s failed: %s", type(err).__name__, e)
        return f"<{type(err).__name__}: str() failed>"


@dataclass(frozen=True, slots=True)
class Renderer:
    """Renders cause chains as multi-line stack strings.

    Attributes:
        home: Main module prefix to abbreviate; "" disables abbreviation
        marker: Replacement for ``home``
    """

    home: str = ""
    marker: str = "~"

    @classmethod
    def from_settings(cls, settings: ErrchainSettings | None = None) -> Self:
        """Renderer for the configured main module, detected from ``__main__`` when unset."""
        s = settings or get_settings()
        return cls(home=s.main_module if s.main_module is not None else main_module(), marker=s.home_marker)

    def func_name(self, site: CallSite) -> str:
        return relative_module(site.func_name, self.home, self.marker)

    def render_link(self, err: BaseException) -> str:
        """One line for one link, using the richest capability the link has."""
        return self._render_link(err, set())

    def _render_link(self, err: BaseException, seen: set[int]) -> str:
        if isinstance(err, LinkFormatter):
            return err.format_link(self)
        site = err.call_site if isinstance(err, SiteCarrier) else None
        if isinstance(site, CallSite) and site.known:
            where = f"{site.basename}:{site.line} {plain(err)}"
            if isinstance(err, ArgsSiteCarrier):
                return f"{self.func_name(site)}({err.arg_str}) {where}"
            return f"{self.func_name(site)} {where}"
        if isinstance(err, Wrapper) and id(err) not in seen:
            seen.add(id(err))
            return self._render_link(err.wrapper(), seen)
        return plain(err)

    def stack_string(self, err: BaseException | None) -> str:
        """Every link of the chain, outermost first, one per line."""
        return "\n".join(self.render_link(link) for link in stack(err))


def stack_string(err: BaseException | None, *, home: str | None = None) -> str:
    """Render ``err``'s chain with a renderer built from settings.

    Example:
        >>> stack_string(wrap(new_error("a"), "b"))
        'b\\na'
    """
    renderer = Renderer.from_settings()
    if home is not None:
        renderer = Renderer(home=home, marker=renderer.marker)
    return renderer.stack_string(err)
