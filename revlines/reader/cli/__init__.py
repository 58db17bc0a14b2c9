from .delay import Delay

__all__ = [Delay]  # type: ignore
