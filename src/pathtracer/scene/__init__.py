"""Scene module for ready-made scene assembly.

Components:
    presets: Scene factories (field, hollow) and the name registry

Any Surface can be rendered; presets are a convenience for the command line
and for examples.
"""

from .presets import SCENES, ScenePreset, field_scene, get_scene, hollow_scene

__all__ = [
    "SCENES",
    "ScenePreset",
    "field_scene",
    "hollow_scene",
    "get_scene",
]
