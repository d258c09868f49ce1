"""Error chain core.

- WrappedError: annotation layered over a cause
- new_error/wrap/wrap_with: construction
- unwrap/stack/root_cause: descend along causes
- is_/as_: identity and type search that also looks inside annotations
- Unwrapper/Wrapper/LinkFormatter/SiteCarrier/ArgsSiteCarrier: capabilities
"""

from .protocols import ArgsSiteCarrier, LinkFormatter, SiteCarrier, Unwrapper, Wrapper
from .traverse import as_, is_, root_cause, stack, unwrap
from .wrapped import WrappedError, new_error, sprintf, wrap, wrap_with

__all__ = [
    # Capabilities
    "ArgsSiteCarrier", "LinkFormatter", "SiteCarrier", "Unwrapper", "Wrapper",
    # Construction
    "WrappedError", "new_error", "sprintf", "wrap", "wrap_with",
    # Traversal
    "as_", "is_", "root_cause", "stack", "unwrap",
]
