"""Drawing-surface collaborators: the abstract interface and an in-memory scene."""

from .base import DrawingSurface, ShapeHandle
from .scene import SceneShape, SceneSurface

__all__ = ["DrawingSurface", "ShapeHandle", "SceneShape", "SceneSurface"]
