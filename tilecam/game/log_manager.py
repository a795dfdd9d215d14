"""
Runtime message log.

Messages are kept in a bounded buffer so a HUD or test can read back what
happened, and each one is also forwarded to the ``tilecam.game`` logger so
the handlers installed by ``setup_logging`` print or save it.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """Severity, on the same scale as the stdlib levels."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class LogCategory(Enum):
    """Message category: a short display tag and the level it is logged at."""
    SYSTEM = ("SYS", LogLevel.INFO)      # startup, shutdown, loop state
    ASSET = ("AST", LogLevel.INFO)       # map and tileset loading
    INPUT = ("INP", LogLevel.DEBUG)
    CAMERA = ("CAM", LogLevel.DEBUG)     # pan/zoom changes
    RENDER = ("RND", LogLevel.INFO)
    DEBUG = ("DBG", LogLevel.DEBUG)
    WARNING = ("WRN", LogLevel.WARNING)
    ERROR = ("ERR", LogLevel.ERROR)

    @property
    def tag(self) -> str:
        return self.value[0]

    @property
    def level(self) -> LogLevel:
        return self.value[1]


@dataclass(frozen=True)
class LogMessage:
    text: str
    category: LogCategory
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def level(self) -> LogLevel:
        return self.category.level

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        prefix = []
        if include_timestamp:
            prefix.append(self.timestamp.strftime("[%H:%M:%S]"))
        if include_category:
            prefix.append(f"[{self.category.tag}]")
        return " ".join(prefix + [self.text])


class LogManager:
    """Bounded, filterable message log that mirrors to stdlib logging."""

    def __init__(
        self,
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            max_messages: Oldest messages are dropped past this count
            default_level: Minimum level returned by ``get_messages``
            logger: Logger messages are forwarded to
        """
        self.messages: deque[LogMessage] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.logger = logger or logging.getLogger("tilecam.game")

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Record a message. Filtering only happens when reading back."""
        message = LogMessage(text, category)
        self.messages.append(message)
        self.logger.log(message.level, message.format())

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def asset(self, text: str) -> None:
        self.log(text, LogCategory.ASSET)

    def input(self, text: str) -> None:
        self.log(text, LogCategory.INPUT)

    def camera(self, text: str) -> None:
        self.log(text, LogCategory.CAMERA)

    def render(self, text: str) -> None:
        self.log(text, LogCategory.RENDER)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def _is_visible(self, message: LogMessage, categories: Optional[set[LogCategory]]) -> bool:
        if message.category not in self.enabled_categories:
            return False
        if categories:
            # An explicit category filter ignores the level threshold
            return message.category in categories
        return message.level >= self.log_level

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogMessage]:
        """Return the newest ``count`` visible messages, oldest first."""
        visible = [message for message in self.messages if self._is_visible(message, categories)]
        if count is not None:
            return visible[-count:] if count > 0 else []
        return visible

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return self.log_level <= LogLevel.DEBUG and LogCategory.DEBUG in self.enabled_categories

    def toggle_debug(self) -> None:
        """Switch between showing and hiding debug-level messages."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)
