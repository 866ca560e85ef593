import logging
from dataclasses import is_dataclass
from decimal import Decimal
from typing import Any, Dict, MutableMapping, Optional, Tuple

# Keyword arguments the stdlib logger consumes itself; everything else is context
LOGGING_KWARGS = ("exc_info", "stack_info", "stacklevel", "extra")


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that renders bound and per-call context as ``message | k=v``.

    ``log.info("Added to cart", owner_id=3, product_id="p1")`` logs
    ``Added to cart | component=carts owner_id=3 product_id=p1``.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self.extra)

    def bind(self, **extra: Any) -> "ContextLogger":
        """Return a child adapter whose context is the current one plus ``extra``."""
        return ContextLogger(self.logger, {**self.extra, **extra})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        passthrough = {key: kwargs.pop(key) for key in LOGGING_KWARGS if key in kwargs}
        return render(str(msg), {**self.extra, **kwargs}), passthrough


def render(message: str, context: Dict[str, Any]) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={_render_value(value)}" for key, value in context.items())
    return f"{message} | {pairs}"


def _render_value(value: Any) -> str:
    # Products and cart lines show up by id
    if is_dataclass(value) and not isinstance(value, type) and hasattr(value, "id"):
        return str(value.id)
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + ",".join(_render_value(item) for item in value) + "]"
    if value is None or isinstance(value, (str, int, float, bool, Decimal)):
        return str(value)
    return repr(value)


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(logging.getLogger(name))
