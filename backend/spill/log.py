import logging
import re

import click

# Console colour per event tag, e.g. "[login] Attempt for user: bob"
TAG_COLORS = {
    'request': 'cyan',
    'login': 'yellow',
    'register': 'magenta',
    'score': 'blue',
    'success': 'green',
    'error': 'red',
}

_TAG_RE = re.compile(r'^\[(?P<tag>[a-z-]+)\]')


class EventFormatter(logging.Formatter):
    """Colours a log line by the bracketed event tag its message starts with."""

    def __init__(self, fmt='[%(asctime)s] %(levelname)s: %(message)s', color=True):
        super().__init__(fmt)
        self.color = color

    def format(self, record):
        line = super().format(record)
        if not self.color:
            return line
        match = _TAG_RE.match(record.getMessage())
        fg = TAG_COLORS.get(match.group('tag')) if match else None
        return click.style(line, fg=fg) if fg else line


class EventHandler(logging.StreamHandler):
    """Console handler installed on the app logger in place of Flask's shared one."""


def configure_logging(flask_app):
    from flask.logging import default_handler

    logger = flask_app.logger
    # Same-named apps share one logger, so drop any handler an earlier app installed
    for old in [h for h in logger.handlers if h is default_handler or isinstance(h, EventHandler)]:
        logger.removeHandler(old)

    handler = EventHandler()
    handler.setFormatter(EventFormatter(color=not flask_app.config.get('TESTING', False)))
    logger.addHandler(handler)
    logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    return handler
