from dataclasses import dataclass, field
import datetime
import logging
import os
import sys
from typing import List, Optional


@dataclass
class LoggingParams:
    debug: bool = False
    debug_module: List[str] = field(default_factory=list)

    @staticmethod
    def create(args) -> 'LoggingParams':
        return LoggingParams(
            debug=bool(args.debug),
            debug_module=args.debug_module,
        )

    @staticmethod
    def add_args(parser):
        group = parser.add_argument_group('Logging options')
        group.add_argument('--debug', action='store_true', help='enable debug logging')
        group.add_argument('--debug-module', type=str, nargs='+', default=[],
                           help='specific module(s) to enable debug logging for. Example: '
                                '--debug-module sparseset.sparse_set sparseset.fuzz')


class CustomFormatter(logging.Formatter):
    """
    Python's logging module only supports second-level precision. This class allows for finer
    precision, which matters when reading timings of short fuzz runs.
    """
    def formatTime(self, record, datefmt=None):
        dt = datetime.datetime.fromtimestamp(record.created)
        return dt.strftime(datefmt or '%Y-%m-%d %H:%M:%S.%f')


def configure_logger(*, params: Optional[LoggingParams]=None, filename=None,
                     mode='a', prefix=''):
    """
    Configures the root logger. A log level of INFO is used by default. If params.debug is True,
    then a log level of DEBUG is used instead.

    The logger prefixes each line with the current time and the log level.

    error() calls go to stderr, and everything below ERROR goes to stdout.

    If filename is provided, then the logger will additionally log to the file, using the specified
    mode: 'a' (default) or 'w'.

    Calling this function a second time replaces the handlers installed by the first call.
    """
    level = logging.DEBUG if (params and params.debug) else logging.INFO

    custom_datefmt = '%Y-%m-%d %H:%M:%S.%f'
    fmt = '%(asctime)s [%(levelname)s] %(message)s'
    if prefix:
        fmt = f'{prefix} {fmt}'
    formatter = CustomFormatter(fmt, datefmt=custom_datefmt)

    handlers: list[logging.Handler] = []
    if filename:
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(filename, mode=mode)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.ERROR)
    handlers.append(error_handler)

    non_error_handler = logging.StreamHandler(sys.stdout)
    non_error_handler.setLevel(logging.DEBUG)
    non_error_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    handlers.append(non_error_handler)

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    for h in handlers:
        h.setFormatter(formatter)
        root.addHandler(h)

    if params and params.debug_module:
        for module in params.debug_module:
            logging.getLogger(module).setLevel(logging.DEBUG)
