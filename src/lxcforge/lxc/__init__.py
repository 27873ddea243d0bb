"""LXC configuration generation."""

from lxcforge.lxc.values import get_memory_swap, ResolvConfPathHelper
from lxcforge.lxc.resolvconf import ResolvConfReconciler
from lxcforge.lxc.template import LXC_TEMPLATE, LxcTemplateEngine, serialize_directives

__all__ = [
    "get_memory_swap",
    "ResolvConfPathHelper",
    "ResolvConfReconciler",
    "LXC_TEMPLATE",
    "LxcTemplateEngine",
    "serialize_directives",
]
