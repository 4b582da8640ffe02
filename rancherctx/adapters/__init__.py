"""
Adapters — the bridges between the core and external systems.

    ProjectSource        → RancherApiSource, StaticProjectSource
    InteractiveSelector  → FzfSelector, StaticSelector
"""

from rancherctx.adapters.base import InteractiveSelector, ProjectSource

__all__ = ["InteractiveSelector", "ProjectSource"]
