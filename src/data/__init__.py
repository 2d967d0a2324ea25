"""处理会话抽象层"""

from .base import BaseProcessSession
from .memory import InMemoryProcessSession
from .directory import DirectoryProcessSession
from .factory import create_session

__all__ = [
    "BaseProcessSession",
    "InMemoryProcessSession",
    "DirectoryProcessSession",
    "create_session",
]
