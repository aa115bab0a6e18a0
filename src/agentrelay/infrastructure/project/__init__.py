"""
Project adapters: the in-memory file tree and the tools acting on it.
"""

from agentrelay.infrastructure.project.memory import ProjectError, VirtualProject
from agentrelay.infrastructure.project.toolbox import ProjectToolbox

__all__ = [
    "ProjectError",
    "ProjectToolbox",
    "VirtualProject",
]
