"""Connect-3 package (engine + agents + CLI)."""

from connect3.engine import (
    Board,
    ColumnFull,
    Connect3Config,
    Connect3Error,
    Disc,
    EngineMisuse,
    InvalidColumn,
)

__all__ = [
    "Board",
    "ColumnFull",
    "Connect3Config",
    "Connect3Error",
    "Disc",
    "EngineMisuse",
    "InvalidColumn",
]
