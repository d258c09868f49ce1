"""Foundation layer: settings, loggers, call-site capture, module relativization."""

from .callsite import CallSite, SiteSource, capture, describe_args
from .config import ErrchainSettings, clear_settings_cache, get_settings
from .log import configure_logging, get_logger
from .modules import main_module, relative_module
from .text import safe_repr

__all__ = [
    "CallSite", "SiteSource", "capture", "describe_args",
    "ErrchainSettings", "clear_settings_cache", "get_settings",
    "configure_logging", "get_logger",
    "main_module", "relative_module",
    "safe_repr",
]
