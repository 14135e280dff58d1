import logging
import sys
from tqdm import tqdm


class LogWithTqdm(logging.Handler):
    """
    Writes log records through `tqdm.write()` on stderr, so a warning about a
    file never tears the progress bar while a directory is being linted.
    Diagnostics themselves go to stdout and never pass through here.
    """
    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


class LintFormatter(logging.Formatter):
    """
    Formats records like compiler messages: `nestlint: warning: <message>`.
    DEBUG records also name the module and line that logged them.
    """

    def __init__(self, prog: str = "nestlint"):
        super().__init__()
        self.prog = prog

    def format(self, record: logging.LogRecord) -> str:
        text = f"{self.prog}: {record.levelname.lower()}: {record.getMessage()}"
        if record.levelno <= logging.DEBUG:
            text += f" [{record.name}:{record.lineno}]"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def _to_level(level, fallback):
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def configure_logger(general_level='WARNING', module_levels=None):
    """
    Routes all logging through one tqdm-aware handler on the root logger.

    Args:
        general_level: Root level, a name such as 'INFO' or a logging constant.
        module_levels: Optional {logger name: level} overrides (`debug.modules`).
    """
    handler = LogWithTqdm()
    handler.setFormatter(LintFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))
