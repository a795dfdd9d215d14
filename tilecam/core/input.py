from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Any


class InputType(Enum):
    KEY_PRESS = auto()
    KEY_RELEASE = auto()
    QUIT = auto()


class Key(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    EQUALS = auto()  # '=' / '+' and keypad plus
    MINUS = auto()   # '-' and keypad minus

    ESCAPE = auto()

    W = auto()
    A = auto()
    S = auto()
    D = auto()

    UNKNOWN = auto()


@dataclass
class InputEvent:
    event_type: InputType
    key: Optional[Key] = None
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    raw_data: Optional[Any] = None

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def key_press(cls, key: Key, shift: bool = False, ctrl: bool = False, alt: bool = False) -> "InputEvent":
        return cls(
            event_type=InputType.KEY_PRESS,
            key=key,
            shift=shift,
            ctrl=ctrl,
            alt=alt
        )

    @classmethod
    def key_release(cls, key: Key) -> "InputEvent":
        return cls(event_type=InputType.KEY_RELEASE, key=key)
