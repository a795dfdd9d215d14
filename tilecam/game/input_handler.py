"""
Input handling for the camera.

Translates backend-neutral input into camera changes using the configured key
bindings. Held keys pan continuously (one step per frame), pressed keys zoom
once per press.
"""

from typing import Iterable, Optional

from ..core.camera import Camera
from ..core.config import CameraConfig
from ..core.input import InputEvent, InputType, Key
from ..core.input_system import KeyConfigLoader, TriggerMode
from .log_manager import LogManager


PAN_DIRECTIONS = {
    "pan_up": (0.0, -1.0),
    "pan_down": (0.0, 1.0),
    "pan_left": (-1.0, 0.0),
    "pan_right": (1.0, 0.0),
}


class InputHandler:
    """Applies key input to a camera and reports close requests."""

    def __init__(
        self,
        key_config: KeyConfigLoader,
        camera_config: Optional[CameraConfig] = None,
        log_manager: Optional[LogManager] = None,
    ):
        self.key_config = key_config
        self.camera_config = camera_config or CameraConfig()
        self.log_manager = log_manager

    def handle_input(self, camera: Camera, events: Iterable[InputEvent], held_keys: Iterable[Key]) -> bool:
        """Apply one frame of input to ``camera``.

        Returns:
            True if the window close signal or the quit action was seen.
        """
        self.apply_held_keys(camera, held_keys)

        close_requested = False
        for event in events:
            if event.event_type == InputType.QUIT:
                close_requested = True
            elif event.event_type == InputType.KEY_PRESS and event.key is not None:
                if self.handle_key_press(camera, event.key):
                    close_requested = True
        return close_requested

    def apply_held_keys(self, camera: Camera, held_keys: Iterable[Key]) -> None:
        """Pan once per held direction; axes move independently, diagonals are not normalized."""
        actions = set()
        for key in held_keys:
            action = self.key_config.get_action_for_key(key, TriggerMode.HELD)
            if action in PAN_DIRECTIONS:
                actions.add(action)

        if not actions:
            return

        speed = self.camera_config.pan_speed
        dx = sum(PAN_DIRECTIONS[action][0] for action in actions) * speed
        dy = sum(PAN_DIRECTIONS[action][1] for action in actions) * speed
        camera.pan(dx, dy)

    def handle_key_press(self, camera: Camera, key: Key) -> bool:
        """Handle one edge-triggered key press. Returns True for quit."""
        action = self.key_config.get_action_for_key(key, TriggerMode.PRESSED)
        if action is None:
            return False

        if action == "zoom_in":
            camera.zoom_in(self.camera_config.zoom_step)
            self._log_camera(f"Zoom in -> {camera.zoom:.2f}")
        elif action == "zoom_out":
            camera.zoom_out(self.camera_config.zoom_step)
            self._log_camera(f"Zoom out -> {camera.zoom:.2f}")
        elif action == "quit":
            if self.log_manager:
                self.log_manager.input(f"Quit requested with {key.name}")
            return True
        elif self.log_manager:
            self.log_manager.warning(f"Unhandled action '{action}' bound to {key.name}")
        return False

    def _log_camera(self, text: str) -> None:
        if self.log_manager:
            self.log_manager.camera(text)
