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
This module contains the template parser, that dispatches the events of a
template to a stack of parser states.
"""
import dataclasses as dc
import logging
from typing import Generic, Optional, TypeVar

from questionnaire.aliases import AttributesType, SourceType, StateType
from questionnaire.diagnostics import Diagnostic, DiagnosticsCollector
from questionnaire.sax import sax_parse
from questionnaire.settings import ParserSettings
from questionnaire.validators.states import RootParserState

logger = logging.getLogger('questionnaire')

T = TypeVar('T')


@dc.dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    The outcome of a parse: the assembled value, the formatted warning and
    error messages and the diagnostics they are formatted from.
    """
    value: T
    warnings: list[str]
    errors: list[str]
    diagnostics: list[Diagnostic] = dc.field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class TemplateParser(Generic[T]):
    """
    A parser that keeps a stack of frames, one for each open element. Each
    frame has the tag of the element and its state, or `None` for elements
    that are discarded with all their content.

    :param root: the bottom state, that accepts the root element.
    :param settings: the parser settings, the default settings if not provided.
    """
    stack: list[tuple[str, Optional[StateType]]]

    def __init__(self, root: RootParserState[T],
                 settings: Optional[ParserSettings] = None) -> None:
        self.root = root
        self.settings = ParserSettings() if settings is None else settings
        self.diagnostics = DiagnosticsCollector()
        self.stack = [('', root)]

    def __repr__(self) -> str:
        return '%s(root=%r, depth=%d)' % (
            self.__class__.__name__, self.root, len(self.stack) - 1
        )

    @property
    def warn_ignored_text(self) -> bool:
        return self.settings.warn_ignored_text

    def warning(self, message: str) -> None:
        self.diagnostics.warn(message)

    def error(self, message: str) -> None:
        self.diagnostics.error(message)

    def start_element(self, name: str, attributes: AttributesType) -> None:
        state = self.stack[-1][1]
        if state is None:
            self.stack.append((name, None))
            return

        child = state.state_for(self, name, attributes)
        if child is not None:
            child.begin(self, name, attributes)
        self.stack.append((name, child))

    def characters(self, text: str) -> None:
        state = self.stack[-1][1]
        if state is not None:
            state.content(self, text)

    def end_element(self, name: str) -> None:
        _tag, state = self.stack.pop()
        if state is not None:
            state.end(self, name)

    def parse(self, source: SourceType) -> ParseResult[T]:
        """Parses a source, a parser instance is intended for one parse only."""
        completed = sax_parse(source, self, self.diagnostics, self.settings)
        if not completed:
            logger.debug("Parse of %r stopped at depth %d", source, len(self.stack) - 1)

        diagnostics = self.diagnostics
        return ParseResult(
            value=self.root.result(),
            warnings=[str(d) for d in diagnostics.warnings],
            errors=[str(d) for d in diagnostics.errors],
            diagnostics=diagnostics.diagnostics,
        )
