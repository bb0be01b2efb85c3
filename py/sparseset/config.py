"""
At the top level of the repo checkout, users can maintain a config.txt file to override the
defaults of the developer tools (e.g. the fuzzer), in the following format:

----------------------------------
# config.txt example
fuzz.length = 1000
fuzz.num_ops=  50000  # some comment

 fuzz.seed =7
----------------------------------

The Config class defined here provides an API to access those key-value pairs.
"""
import argparse
import logging
import os
from typing import Optional

from sparseset.repo_util import Repo


logger = logging.getLogger(__name__)


def decomment(line: str) -> str:
    """
    Strips pound-comments.
    """
    pound = line.find('#')
    if pound != -1:
        return line[:pound]
    return line


class Config:
    _instance = None

    def __init__(self, filename: Optional[str] = None):
        """
        If filename is not specified, config.txt at the repo root is used. A missing file results in
        an empty config.
        """
        self.filename = Repo.config_file() if filename is None else filename
        self._dict = {}
        if self.filename is None or not os.path.isfile(self.filename):
            return

        with open(self.filename, 'r') as f:
            for lineno, orig_line in enumerate(f, start=1):
                line = decomment(orig_line).strip()
                if not line:
                    continue
                eq = line.find('=')
                if eq == -1:
                    raise ValueError(f'{self.filename}:{lineno}: expected "key = value", '
                                     f'got {orig_line.rstrip()!r}')
                key = line[:eq].strip()
                value = line[eq+1:].strip()
                if key in self._dict:
                    raise ValueError(f'{self.filename}:{lineno}: duplicate key {key!r}')
                self._dict[key] = value

        logger.debug('Loaded %s config entries from %s', len(self._dict), self.filename)

    def get(self, key: str, default_value=None):
        return self._dict.get(key, default_value)

    def add_parser_argument(self, key: str, parser: argparse.ArgumentParser, *args, **kwargs):
        """
        Invokes parser.add_argument(*args, **kwargs), after first...

        - Replacing kwargs['default'] with self.get(key), if key is configured
        - Appending to kwargs['help'] info about the default value and where it came from
        """
        kwargs = dict(**kwargs)
        assert 'help' in kwargs
        help = kwargs['help']
        value = self._dict.get(key, None)
        if value is not None:
            filename = os.path.basename(self.filename)
            kwargs['default'] = value
            kwargs['help'] = f'{help} (default: {value} [{filename}:{key}])'
        elif 'default' in kwargs:
            kwargs['help'] = f'{help} (default: {kwargs["default"]})'
        if help == argparse.SUPPRESS:
            kwargs['help'] = help

        parser.add_argument(*args, **kwargs)

    @staticmethod
    def instance() -> 'Config':
        if Config._instance is None:
            Config._instance = Config()
        return Config._instance
