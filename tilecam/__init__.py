"""Tile map renderer with a pan/zoom camera.

Packages:
- core: backend-independent types (vectors, camera, input, render data, config)
- game: tile map, viewport culling, input handling and the main loop
- renderers: drawing backends (pygame window, headless ASCII)
"""

__version__ = "0.1.0"
