"""
Domain models for rancherctx.

All models are re-exported here for convenient access:

    from rancherctx.core.models import Project, ServerConfig, ServerContext
"""

from rancherctx.core.models.project import Project
from rancherctx.core.models.server import ServerConfig, ServerContext
from rancherctx.core.models.switch import SwitchResult, SwitchState

__all__ = [
    # project.py
    "Project",
    # server.py
    "ServerConfig",
    "ServerContext",
    # switch.py
    "SwitchResult",
    "SwitchState",
]
