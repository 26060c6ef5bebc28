import logging
import sys
from pathlib import Path
from typing import Optional


class _AppOnlyFilter(logging.Filter):
    """Keep application records; let third-party records through at WARNING+.

    uvicorn's own access/error loggers are treated as application output so
    request lines still show up on the console.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "app" or name.startswith("app."):
            return True
        if name.startswith("uvicorn"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure root logging for the server process.

    Call once, before the first request is served.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_AppOnlyFilter())
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
