import logging


class _ExtraFormatter(logging.Formatter):
    """Formatter that appends extra={} fields to the log line."""
    _BASE_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__)

    def format(self, record):
        msg = super().format(record)
        extras = {k: v for k, v in record.__dict__.items()
                  if k not in self._BASE_ATTRS and k not in ("message", "asctime")}
        if extras:
            msg += f" | {extras}"
        return msg


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    # uvicorn --reload imports the app twice; keep a single stdout handler
    if any(getattr(h, "_tms_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_ExtraFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler._tms_handler = True
    root.addHandler(handler)
