import logging
from typing import Any, Dict, Optional

# Keyword arguments that belong to ``logging.Logger.log`` rather than context.
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class AppLogger(logging.LoggerAdapter):
    """Stdlib logger adapter that carries bound key/value context.

    Context bound with :meth:`bind` and keyword arguments passed at the call
    site are rendered after the message as ``key=value`` pairs::

        log = get_logger(__name__).bind(component="catalog")
        log.info("Product found", product_id=3)
        # Product found | component=catalog product_id=3
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self.extra)

    def bind(self, **extra: Any) -> "AppLogger":
        """Return a new logger with ``extra`` merged into the bound context."""
        return AppLogger(self.logger, {**self.extra, **extra})

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        call_context = {
            key: kwargs.pop(key) for key in list(kwargs) if key not in _LOGGING_KWARGS
        }
        payload = {**self.extra, **call_context}
        self.logger.log(level, self.format_message(msg, payload), *args, **kwargs)

    @staticmethod
    def format_message(message: Any, context: Dict[str, Any]) -> str:
        if not context:
            return str(message)
        ctx_str = " ".join(
            f"{key}={AppLogger._stringify(value)}" for key, value in context.items()
        )
        return f"{message} | {ctx_str}"

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, (str, int, float, bool)) or value is None:
            return str(value)
        return repr(value)


def get_logger(name: str) -> AppLogger:
    return AppLogger(logging.getLogger(name))
