from .log_error import logerror

__all__ = [logerror]  # type: ignore
