import logging
import sys
from typing import Callable, Iterable, Hashable

_logger = logging.getLogger(__name__)

PYVERSION = sys.version_info[:2]


class _LogWrap:
    def __init__(self, fn: Callable[[], str]) -> None:
        self._fn = fn

    def __str__(self) -> str:
        return self._fn()


def _format_vertices(vertices: Iterable[Hashable]) -> str:
    return ", ".join(str(v) for v in vertices)
