"""Group: several errors treated as one.

Useful when many errors together lead to one error downstream, e.g. a fetch that
fails only after every mirror has failed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Callable, overload

from .renderer import plain

if TYPE_CHECKING:
    from .renderer import Renderer


def _indent(s: str) -> str:
    return "\t" + s.replace("\n", "\n\t")


class Group(Exception):
    """Ordered errors rendered as a single error. Duplicates are kept.

    ``str()`` renders each member with ``str()``; ``stack_string()`` renders each
    member as a full stack string. Zero members render as "", one member as that
    member alone, more as an indented, bracketed block.

    Example:
        >>> print(Group([new_error("mirror a down"), new_error("mirror b down")]))
        [
        	mirror a down
        	,
        	mirror b down
        ]
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: Iterable[BaseException] = ()) -> None:
        self._errors = tuple(errors)
        super().__init__(*self._errors)

    @property
    def errors(self) -> tuple[BaseException, ...]:
        return self._errors

    def render(self, fmt: Callable[[BaseException], str]) -> str:
        """Render with ``fmt`` applied to every member."""
        match self._errors:
            case ():
                return ""
            case (only,):
                return fmt(only)
        return "[\n" + "\n\t,\n".join(_indent(fmt(e)) for e in self._errors) + "\n]"

    def format_link(self, renderer: Renderer) -> str:
        return self.render(renderer.stack_string)

    def __str__(self) -> str:
        return self.render(plain)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._errors)!r})"

    def __reduce__(self) -> tuple[type[Group], tuple[tuple[BaseException, ...]]]:
        return type(self), (self._errors,)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self._errors)

    @overload
    def __getitem__(self, index: int) -> BaseException: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[BaseException, ...]: ...

    def __getitem__(self, index: int | slice) -> BaseException | tuple[BaseException, ...]:
        return self._errors[index]


def group(*errors: BaseException) -> Group:
    """Group the given errors, in order."""
    return Group(errors)
