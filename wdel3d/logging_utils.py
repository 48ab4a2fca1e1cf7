"""Логування для wdel3d.

Усі модулі беруть логер через get_logger(); ієрархія ``wdel3d.*`` ізольована
від кореневого логера процесу. Обробник пише в stderr: stdout у CLI
лишається порожнім.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter("%(levelname)s %(name)s: %(message)s")
_ROOT = "wdel3d"


class _StderrHandler(logging.StreamHandler):
    """Пише в той sys.stderr, що діє зараз (а не в момент створення)."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


def _ensure_root() -> logging.Logger:
    """Один обробник на логері 'wdel3d', без propagate."""
    root = logging.getLogger(_ROOT)
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    if not any(isinstance(h, _StderrHandler) for h in root.handlers):
        handler = _StderrHandler()
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.WARNING) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = "WARNING") -> None:
    """Виставити рівень для всієї родини логерів 'wdel3d'."""
    root = _ensure_root()
    root.setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Логер у просторі імен 'wdel3d'.

    Без level логер успадковує рівень від 'wdel3d' (NOTSET).
    """
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ["get_logger", "configure_logging"]
