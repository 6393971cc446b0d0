"""
CMS Content Plugin System

Public API for the plugin system:
    PluginMeta            - plugin metadata dataclass
    ContentPlugin         - abstract base class for all content plugins
    PluginRegistry        - immutable system-name → plugin mapping
    PluginManager         - per-site enablement lookup and JSON aggregation
    build_plugin_registry - registry of the built-in plugins
"""

from .base import ContentPlugin, PluginMeta
from .loader import BUILTIN_PLUGINS, build_plugin_registry, get_plugin_registry
from .manager import PluginManager
from .registry import PluginRegistry

__all__ = [
    "BUILTIN_PLUGINS",
    "ContentPlugin",
    "PluginManager",
    "PluginMeta",
    "PluginRegistry",
    "build_plugin_registry",
    "get_plugin_registry",
]
