"""Tile map, camera control and main loop orchestration."""
