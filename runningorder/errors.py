"""
Error kinds raised while extracting a running order.

Every error is fatal to the parse that raised it. There is no partial result:
either a complete RunningOrder is returned or one of these is raised.
"""

from __future__ import annotations


class ParseError(Exception):
    """
    Base class for all failures of the extraction engine.
    """


class StructureMismatch(ParseError):
    """
    A marker element or one of its required descendants was not found where
    the running order markup puts it.
    """

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Unable to parse running order structure ({level}).")


class TimeFormatError(ParseError):
    """
    A day label or an event time label does not match its textual pattern.
    """

    def __init__(self, label: str, reason: str = "") -> None:
        self.label = label
        self.reason = reason
        msg = f"Unable to parse time label {label!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class DocumentParseError(ParseError):
    """
    The HTML parser could not produce a document tree at all.
    """
