#
# Copyright (c), 2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
This module contains the adapter between the SAX expat reader of the standard
library and the template parser. The adapter feeds element open, text and
element close events to a sink and converts fatal parse failures into a single
error diagnostic.
"""
import io
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol
from xml.sax import SAXParseException, handler, xmlreader
from xml.sax import expatreader  # type: ignore[attr-defined, unused-ignore]
from pyexpat import XMLParserType

from questionnaire.aliases import AttributesType, SourceType
from questionnaire.diagnostics import DiagnosticsCollector
from questionnaire.exceptions import QuestionnaireTypeError, \
    QuestionnaireResourceError, QuestionnaireResourceForbidden, \
    QuestionnaireResourceOSError, QuestionnaireLimitExceeded
from questionnaire.settings import ParserSettings
from questionnaire.translation import gettext as _

logger = logging.getLogger('questionnaire')

QUESTIONNAIRE_FPI = '-//UNIBZ//Vincent Questionnaire Template 1.0//EN'
QUESTIONNAIRE_FPI_URL = 'vincent://questionnaire.dtd'
SCHEMAS_DIR = os.path.join(os.path.dirname(__file__), 'schemas/')
QUESTIONNAIRE_DTD = os.path.join(SCHEMAS_DIR, 'questionnaire.dtd')

UNKNOWN_TAG = 'unknown'


class EventSink(Protocol):
    """The receiver of the events of a template."""

    def start_element(self, name: str, attributes: AttributesType) -> None: ...

    def characters(self, text: str) -> None: ...

    def end_element(self, name: str) -> None: ...


def questionnaire_dtd_source() -> xmlreader.InputSource:
    """Returns an input source for the bundled questionnaire DTD."""
    with open(QUESTIONNAIRE_DTD, 'rb') as fp:
        data = fp.read()

    source = xmlreader.InputSource(QUESTIONNAIRE_FPI_URL)
    source.setPublicId(QUESTIONNAIRE_FPI)
    source.setByteStream(io.BytesIO(data))
    source.setEncoding('UTF-8')
    return source


def resolve_entity(public_id: Optional[str], system_id: Optional[str]) \
        -> Optional[xmlreader.InputSource]:
    """
    Resolves the identifiers of the questionnaire document type to the bundled
    DTD. Returns `None` for any other entity.
    """
    if public_id == QUESTIONNAIRE_FPI or system_id == QUESTIONNAIRE_FPI_URL:
        return questionnaire_dtd_source()
    return None


class SafeExpatParser(expatreader.ExpatParser):  # type: ignore[misc, unused-ignore]
    _parser: XMLParserType

    def forbid_entity_declaration(self, name, is_parameter_entity,  # type: ignore
                                  value, base, sysid, pubid, notation_name):
        raise QuestionnaireResourceForbidden(f"Entities are forbidden (entity_name={name!r})")

    def forbid_unparsed_entity_declaration(self, name, base,  # type: ignore
                                           sysid, pubid, notation_name):
        raise QuestionnaireResourceForbidden(
            f"Unparsed entities are forbidden (entity_name={name!r})"
        )

    def forbid_external_entity_reference(self, context, base, sysid, pubid):  # type: ignore
        if context is None and resolve_entity(pubid, sysid) is not None:
            return 1  # the questionnaire DTD is not loaded
        raise QuestionnaireResourceForbidden(
            f"External references are forbidden (system_id={sysid!r}, public_id={pubid!r})"
        )

    def reset(self) -> None:
        super().reset()
        self._parser.EntityDeclHandler = self.forbid_entity_declaration
        self._parser.UnparsedEntityDeclHandler = self.forbid_unparsed_entity_declaration
        self._parser.ExternalEntityRefHandler = self.forbid_external_entity_reference


class TemplateLocator:
    """
    Wraps the locator of the SAX reader, giving 1-based column numbers.
    Before the start and after the end of the parse the position is unknown.
    """
    _locator: Optional[xmlreader.Locator] = None

    def __repr__(self) -> str:
        return '%s(line=%r, column=%r)' % (
            self.__class__.__name__, self.getLineNumber(), self.getColumnNumber()
        )

    def getLineNumber(self) -> Optional[int]:
        if self._locator is None:
            return None
        return self._locator.getLineNumber()

    def getColumnNumber(self) -> Optional[int]:
        if self._locator is None:
            return None
        column: Optional[int] = self._locator.getColumnNumber()
        return None if column is None else column + 1


class TemplateHandler(handler.ContentHandler, handler.ErrorHandler, handler.EntityResolver):
    """
    A SAX handler that forwards the events to a sink, checking the depth
    and the number of the elements.

    :param sink: the receiver of the events.
    :param settings: the parser settings.
    """
    def __init__(self, sink: EventSink, settings: ParserSettings) -> None:
        super().__init__()
        self.sink = sink
        self.locator = TemplateLocator()
        self.max_depth = settings.effective_max_depth
        self.max_elements = settings.effective_max_elements
        self.depth = 0
        self.elements = 0

    def setDocumentLocator(self, locator: xmlreader.Locator) -> None:
        self.locator._locator = locator

    def startElement(self, name: str, attrs: xmlreader.AttributesImpl) -> None:
        self.depth += 1
        self.elements += 1
        if self.depth > self.max_depth:
            msg = _("Maximum depth of {} elements exceeded")
            raise QuestionnaireLimitExceeded(msg.format(self.max_depth))
        elif self.elements > self.max_elements:
            msg = _("Maximum number of {} elements exceeded")
            raise QuestionnaireLimitExceeded(msg.format(self.max_elements))

        self.sink.start_element(name or UNKNOWN_TAG, dict(attrs.items()))

    def endElement(self, name: str) -> None:
        self.depth -= 1
        self.sink.end_element(name or UNKNOWN_TAG)

    def characters(self, content: str) -> None:
        self.sink.characters(content)

    def fatalError(self, exception: SAXParseException) -> None:
        raise exception

    def resolveEntity(self, publicId: Optional[str], systemId: str) -> Any:
        source = resolve_entity(publicId, systemId)
        if source is not None:
            return source
        return super().resolveEntity(publicId, systemId)


def create_reader(settings: ParserSettings) -> xmlreader.XMLReader:
    """Creates a non-validating and namespace-less SAX reader."""
    reader: xmlreader.XMLReader
    if settings.defuse:
        reader = SafeExpatParser()
    else:
        reader = expatreader.create_parser()

    reader.setFeature(handler.feature_namespaces, False)
    reader.setFeature(handler.feature_external_ges, False)
    return reader


def get_input_source(source: Any) -> xmlreader.InputSource:
    """
    Returns an input source for XML data provided as bytes, as a string that
    starts with a markup character or as a binary file-like object.
    """
    input_source = xmlreader.InputSource()
    if isinstance(source, bytes):
        input_source.setByteStream(io.BytesIO(source))
    elif isinstance(source, str):
        input_source.setCharacterStream(io.StringIO(source))
    elif hasattr(source, 'read'):
        input_source.setByteStream(source)
        name = getattr(source, 'name', None)
        if isinstance(name, str):
            input_source.setSystemId(name)
    else:
        msg = _("invalid type {!r} for a template source").format(type(source))
        raise QuestionnaireTypeError(msg)
    return input_source


def is_xml_data(source: Any) -> bool:
    return isinstance(source, bytes) or \
        isinstance(source, str) and source.lstrip().startswith('<')


def sax_parse(source: SourceType,
              sink: EventSink,
              diagnostics: DiagnosticsCollector,
              settings: ParserSettings) -> bool:
    """
    Parses a template source, feeding the events to a sink. A fatal failure
    stops the parse and is reported as a single error diagnostic.

    :param source: XML data, a file path or a binary file-like object.
    :param sink: the receiver of the events.
    :param diagnostics: the collector, bound to the locator of the parse.
    :param settings: the parser settings.
    :return: `True` if the whole source has been parsed, `False` otherwise.
    """
    content_handler = TemplateHandler(sink, settings)
    diagnostics.locator = content_handler.locator

    reader = create_reader(settings)
    reader.setContentHandler(content_handler)
    reader.setErrorHandler(content_handler)
    reader.setEntityResolver(content_handler)

    try:
        if is_xml_data(source) or hasattr(source, 'read'):
            reader.parse(get_input_source(source))
        elif isinstance(source, (str, Path)):
            try:
                with open(source, 'rb') as fp:
                    input_source = get_input_source(fp)
                    input_source.setSystemId(str(source))
                    reader.parse(input_source)
            except OSError as err:
                raise QuestionnaireResourceOSError(err) from err
        else:
            msg = _("invalid type {!r} for a template source").format(type(source))
            raise QuestionnaireTypeError(msg)

    except SAXParseException as err:
        logger.debug("Fatal error parsing %r: %s", source, err)
        line = err.getLineNumber()
        column = err.getColumnNumber()
        diagnostics.error(
            err.getMessage(),
            (line, None if column is None or column < 0 else column + 1)
        )
        return False
    except QuestionnaireResourceError as err:
        logger.debug("Fatal error parsing %r: %s", source, err)
        diagnostics.error(str(err))
        return False
    finally:
        diagnostics.locator = None
    return True
