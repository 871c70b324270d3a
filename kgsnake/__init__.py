"""A 3D snake game with an orbit camera, a draggable light, an input event engine and an OBJ reader."""

__version__ = "0.1.0"

__all__ = ["camera", "engine", "events", "light", "objmodel", "snake", "vector3"]