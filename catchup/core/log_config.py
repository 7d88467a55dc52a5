import logging

# LogRecord attributes set through `extra=` across the gateway
CONTEXT_KEYS = (
    "operation",
    "booking_id",
    "external_id",
    "source",
    "provider",
    "data_dir",
    "key",
    "time",
    "error",
)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class ContextFormatter(logging.Formatter):
    """Append whichever context keys a record carries as `key=value` pairs."""

    def __init__(self, fmt: str = LOG_FORMAT, keys: tuple[str, ...] = CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self._keys = keys

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [
            f"{key}={getattr(record, key)}"
            for key in self._keys
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(pairs)}" if pairs else base


def configure_logging(level: str) -> logging.Handler:
    """Route the root logger through one stderr handler with a ContextFormatter."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler
