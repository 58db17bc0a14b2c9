from .session import newSession
from .user_agent import getUserAgent

__all__ = [newSession, getUserAgent]  # type: ignore
