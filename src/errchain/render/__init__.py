"""Rendering of cause chains and error groups."""

from .group import Group, group
from .renderer import Renderer, plain, stack_string

__all__ = ["Group", "Renderer", "group", "plain", "stack_string"]
