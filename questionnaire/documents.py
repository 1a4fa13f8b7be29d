#
# Copyright (c), 2016-2020, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
import dataclasses as dc
import logging
from collections.abc import Iterator
from typing import Any, Optional

from questionnaire.aliases import SourceType
from questionnaire.diagnostics import Diagnostic, Severity
from questionnaire.parser import ParseResult, TemplateParser
from questionnaire.settings import ParserSettings, check_settings
from questionnaire.template import QuestionnaireTemplate
from questionnaire.utils.logger import logged
from questionnaire.validators import questionnaire_root_state

__all__ = ('parse_template', 'is_valid', 'iter_errors', 'get_settings')

logger = logging.getLogger('questionnaire')


def get_settings(settings: Optional[ParserSettings] = None, **kwargs: Any) -> ParserSettings:
    """
    Get the parser settings from an optional instance and keyword arguments.
    Keyword arguments that are settings fields override the instance values,
    other keyword arguments are ignored.
    """
    if settings is None:
        return ParserSettings.get_settings(**kwargs)

    settings = check_settings(settings)
    names = {f.name for f in dc.fields(settings)}
    options = {k: v for k, v in kwargs.items() if k in names}
    return dc.replace(settings, **options) if options else settings


@logged
def parse_template(source: SourceType,
                   settings: Optional[ParserSettings] = None,
                   **kwargs: Any) -> ParseResult[QuestionnaireTemplate]:
    """
    Parses a questionnaire template. Problems found in the template never
    raise: they are reported by the diagnostics of the result, whose value
    is always a template, assembled from defaults where the source is wrong.

    :param source: the template source, as XML data (bytes or a string \
    that starts with a markup character), a file path or a binary file-like \
    object.
    :param settings: optional parser settings.
    :param kwargs: parser settings as keyword arguments, that override the \
    provided settings. The keyword argument *loglevel* sets the logging level \
    for the call.
    :return: a `ParseResult` instance.
    """
    parser = TemplateParser(questionnaire_root_state(), get_settings(settings, **kwargs))
    logger.debug("Parse template %r with %r", source, parser.settings)

    result = parser.parse(source)
    logger.info("Parsed template %r: %d warning(s), %d error(s)",
                source, len(result.warnings), len(result.errors))
    return result


def is_valid(source: SourceType,
             settings: Optional[ParserSettings] = None,
             **kwargs: Any) -> bool:
    """
    Returns `True` if the template has no errors, warnings are allowed.
    Takes the same arguments of the function :meth:`parse_template`.
    """
    return not parse_template(source, settings, **kwargs).errors


def iter_errors(source: SourceType,
                settings: Optional[ParserSettings] = None,
                **kwargs: Any) -> Iterator[Diagnostic]:
    """
    Creates an iterator for the errors of a template, in document order.
    Takes the same arguments of the function :meth:`parse_template`.
    """
    result = parse_template(source, settings, **kwargs)
    for diagnostic in result.diagnostics:
        if diagnostic.severity is Severity.ERROR:
            yield diagnostic
