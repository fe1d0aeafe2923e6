from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from claude_launcher.config.models import LoggingSettings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_MARK = "_claude_launcher_handler"

logger = logging.getLogger(__name__)


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def init_logging(settings: LoggingSettings) -> None:
    """
    Configure the root logger: stderr always, plus a daily rotated file when configured.

    Calling it again replaces the handlers installed by the previous call and
    leaves any other handlers alone.
    """
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

    formatter = logging.Formatter(_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(_mark(stream_handler))

    if settings.file.path:
        log_path = Path(settings.file.path).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                log_path,
                when="midnight",
                backupCount=settings.file.rotation.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("logging.file_handler_failed path=%s error=%s", log_path, e)
            return
        file_handler.setFormatter(formatter)
        root.addHandler(_mark(file_handler))
