import os
from typing import Optional


MARKER_FILENAME = 'REPO_ROOT_MARKER'


class Repo:
    """
    Locates the root of the repo checkout, identified by a REPO_ROOT_MARKER file two levels above
    this module (py/sparseset/). When the package is installed outside of a checkout, there is no
    root, and root() returns None.
    """
    _instance = None

    @staticmethod
    def instance() -> 'Repo':
        if Repo._instance is None:
            Repo._instance = Repo()
        return Repo._instance

    def __init__(self):
        root = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))
        marker = os.path.join(root, MARKER_FILENAME)
        self._root = root if os.path.isfile(marker) else None

    @staticmethod
    def root() -> Optional[str]:
        return Repo.instance()._root

    @staticmethod
    def config_file() -> Optional[str]:
        root = Repo.root()
        return None if root is None else os.path.join(root, 'config.txt')

    @staticmethod
    def tests_dir() -> Optional[str]:
        root = Repo.root()
        return None if root is None else os.path.join(root, 'py', 'tests')
