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
A minimal incremental builder of XML fragments, used for collecting the
content of template elements that are not modeled by structured children.
"""
from collections.abc import Iterable
from typing import Optional

XML_ESCAPES = {
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
    '&': '&amp;',
}

WHITESPACE_CHARS = frozenset(' \n\t\r')

# Whitespace states
WHITESPACE_NONE = 0
WHITESPACE_PENDING = 1
WHITESPACE_SKIP = 2


def xml_escape(text: str) -> str:
    """Escapes the five XML special characters of a text."""
    return ''.join(XML_ESCAPES.get(c, c) for c in text)


class XmlBuilder:
    """
    Builds an XML fragment from a sequence of start tag, content and end tag calls.
    Whitespace runs of the content are collapsed into a single space. Whitespace
    after a start tag is dropped, whitespace at the end of the fragment is not
    written.
    """
    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._tags: list[str] = []
        self._whitespace = WHITESPACE_SKIP

    def __str__(self) -> str:
        return self.characters

    @property
    def characters(self) -> str:
        return ''.join(self._chunks)

    @property
    def level(self) -> int:
        return len(self._tags)

    def is_empty(self) -> bool:
        return not any(self._chunks)

    def _append_pending_space(self) -> None:
        if self._whitespace == WHITESPACE_PENDING:
            self._whitespace = WHITESPACE_NONE
            self._chunks.append(' ')

    def begin_tag(self, tag: str, attributes: Optional[Iterable[tuple[str, str]]] = None) -> None:
        self._append_pending_space()
        self._chunks.append(f'<{tag}')
        self._tags.append(tag)
        if attributes is not None:
            for name, value in attributes:
                self._chunks.append(f' {name}="{xml_escape(value)}"')
        self._chunks.append('>')
        self._whitespace = WHITESPACE_SKIP

    def end_tag(self) -> None:
        tag = self._tags.pop()
        self._append_pending_space()
        self._chunks.append(f'</{tag}>')
        self._whitespace = WHITESPACE_NONE

    def content(self, text: str, escape: bool = True) -> None:
        whitespace = self._whitespace
        chunk: list[str] = []
        for c in text:
            if c in WHITESPACE_CHARS:
                if whitespace == WHITESPACE_NONE:
                    whitespace = WHITESPACE_PENDING
            else:
                if whitespace == WHITESPACE_PENDING:
                    chunk.append(' ')
                whitespace = WHITESPACE_NONE
                chunk.append(XML_ESCAPES.get(c, c) if escape else c)

        self._chunks.append(''.join(chunk))
        self._whitespace = whitespace
