from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from mcap import settings

TRANSPORT_LOGGER = "mcap.transport"

_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _level(name: str, default: int) -> int:
    return getattr(logging, (name or "").upper(), default)


def setup_logging(
    level: Optional[str] = None,
    http_level: Optional[str] = None,
    log_dir: Optional[str | Path] = None,
) -> Optional[Path]:
    """Configure root logging for the client and its CLI.

    ``level`` sets the root logger. ``http_level`` sets ``mcap.transport`` on its
    own, so per-request DEBUG lines can be enabled without the rest of the
    process going to DEBUG. Unset arguments come from ``mcap.settings``.

    When a log directory is configured, records also go to
    ``<log_dir>/YYYY-MM-DD.log`` (UTC date), and that path is returned.
    Otherwise only the console handler is installed and None is returned.
    """
    level = level or settings.MCAP_LOG_LEVEL
    http_level = http_level or settings.MCAP_HTTP_LOG_LEVEL
    if log_dir is None:
        log_dir = settings.MCAP_LOG_DIR

    root = logging.getLogger()
    root.setLevel(_level(level, logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(_FORMAT)
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(sh)

    logging.getLogger(TRANSPORT_LOGGER).setLevel(_level(http_level, logging.WARNING))

    if not log_dir:
        return None

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    log_path = path / f"{datetime.now(timezone.utc).strftime('%Y-%m-%d')}.log"
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)
    return log_path
