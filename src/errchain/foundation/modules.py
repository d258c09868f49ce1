"""Main module detection and module-name relativization."""

from __future__ import annotations

import sys
from functools import lru_cache

# Characters that may follow the home prefix for a name to count as inside it
_SEPARATORS = frozenset("./")


@lru_cache(maxsize=1)
def main_module() -> str:
    """Top-level package of the running program, or "" when it cannot be told.

    Resolved from ``__main__``'s import spec (``python -m pkg.tool`` -> ``pkg``),
    falling back to its ``__package__``. Computed once per process.
    """
    main = sys.modules.get("__main__")
    if main is None:
        return ""
    spec = getattr(main, "__spec__", None)
    name = getattr(spec, "name", None) or getattr(main, "__package__", None) or ""
    return name.partition(".")[0]


def relative_module(mod_name: str, home: str, marker: str = "~") -> str:
    """Replace a leading ``home`` in ``mod_name`` with ``marker``.

    Only abbreviates when ``home`` is followed by a separator or ends the name, so
    ``foo2.bar`` is left alone for ``home="foo"``. An empty ``home`` disables it.

    Example:
        >>> relative_module("myapp.db.load", "myapp")
        '~.db.load'
        >>> relative_module("myapp2.db.load", "myapp")
        'myapp2.db.load'
    """
    if not home or not mod_name.startswith(home):
        return mod_name
    rest = mod_name[len(home):]
    if not rest or rest[0] in _SEPARATORS:
        return marker + rest
    return mod_name
