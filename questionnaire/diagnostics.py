#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
This module contains the classes for collecting the warnings and the errors
found while parsing a template.
"""
import dataclasses as dc
import logging
from enum import Enum
from typing import Optional, Protocol

from questionnaire.translation import gettext as _

logger = logging.getLogger('questionnaire')

PositionType = tuple[Optional[int], Optional[int]]


class LocatorProtocol(Protocol):
    def getLineNumber(self) -> Optional[int]: ...

    def getColumnNumber(self) -> Optional[int]: ...


class Severity(Enum):
    WARNING = 'warning'
    ERROR = 'error'


def format_message(message: Optional[str],
                   line: Optional[int] = None,
                   column: Optional[int] = None) -> str:
    """
    Formats a message adding the position, if any. Negative line
    and column numbers are considered as unknown.
    """
    if message is None or not message.strip():
        message = _("Parsing problem")

    if line is not None and line >= 0:
        if column is not None and column >= 0:
            return _("{} (at line {}, column {})").format(message, line, column)
        return _("{} (at line {})").format(message, line)
    return message


@dc.dataclass(frozen=True)
class Diagnostic:
    """A warning or an error found while parsing, with its optional position."""
    severity: Severity
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        return format_message(self.message, self.line, self.column)

    @property
    def position(self) -> PositionType:
        return self.line, self.column


class DiagnosticsCollector:
    """
    Collects diagnostics into two ordered lists. Diagnostics are only added,
    never deduplicated or escalated.

    :param locator: an optional locator that provides the current position \
    when the position is not explicitly given.
    """
    locator: Optional[LocatorProtocol]

    def __init__(self, locator: Optional[LocatorProtocol] = None) -> None:
        self.locator = locator
        self.warnings: list[Diagnostic] = []
        self.errors: list[Diagnostic] = []

    def __repr__(self) -> str:
        return '%s(warnings=%d, errors=%d)' % (
            self.__class__.__name__, len(self.warnings), len(self.errors)
        )

    def __len__(self) -> int:
        return len(self.warnings) + len(self.errors)

    @property
    def position(self) -> PositionType:
        if self.locator is None:
            return None, None
        return self.locator.getLineNumber(), self.locator.getColumnNumber()

    def _add(self, severity: Severity, message: str,
             position: Optional[PositionType]) -> Diagnostic:
        line, column = self.position if position is None else position
        diagnostic = Diagnostic(severity, message, line, column)
        if severity is Severity.ERROR:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)

        logger.debug("%s: %s", severity.value, diagnostic)
        return diagnostic

    def warn(self, message: str, position: Optional[PositionType] = None) -> Diagnostic:
        return self._add(Severity.WARNING, message, position)

    def error(self, message: str, position: Optional[PositionType] = None) -> Diagnostic:
        return self._add(Severity.ERROR, message, position)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Returns all the diagnostics, errors after warnings."""
        return self.warnings + self.errors
