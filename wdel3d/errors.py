"""Ієрархія помилок wdel3d.

Кожен клас також успадковує відповідний вбудований тип, тож
``except ValueError`` / ``except OSError`` продовжують працювати.
"""
from __future__ import annotations


class Wdel3dError(Exception):
    """Базова помилка пакета."""


class ConfigError(Wdel3dError, ValueError):
    pass


class DegenerateInputError(Wdel3dError, ValueError):
    """Вхід, з якого не можна побудувати перетворення в ґратку."""


class EngineError(Wdel3dError, RuntimeError):
    """Рушій тріангуляції не впорався."""


class InputFileError(Wdel3dError, OSError):
    pass


class OutputFileError(Wdel3dError, OSError):
    pass


__all__ = [
    "Wdel3dError",
    "ConfigError",
    "DegenerateInputError",
    "EngineError",
    "InputFileError",
    "OutputFileError",
]
