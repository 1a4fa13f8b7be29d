#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from . import limits
from . import translation
from .exceptions import QuestionnaireException, QuestionnaireTypeError, \
    QuestionnaireValueError, QuestionnaireRuntimeError, QuestionnaireResourceError, \
    QuestionnaireResourceForbidden, QuestionnaireLimitExceeded
from .diagnostics import Severity, Diagnostic, DiagnosticsCollector
from .settings import ParserSettings
from .template import InputType, Title, Text, Option, Category, FreeText, OneOf, \
    Scale, TimeProgression, Info, Question, Section, QuestionnaireTemplate, \
    TemplateLang, main_title, main_text, full_title
from .parser import ParseResult, TemplateParser
from .documents import parse_template, is_valid, iter_errors
from .utils.logger import set_logging_level

__version__ = '1.0.0'
__author__ = "Davide Brunato"
__contact__ = "brunato@sissa.it"
__copyright__ = "Copyright 2016-2024, SISSA"
__license__ = "MIT"
__status__ = "Production/Stable"

__all__ = [
    'limits', 'translation', 'QuestionnaireException', 'QuestionnaireTypeError',
    'QuestionnaireValueError', 'QuestionnaireRuntimeError', 'QuestionnaireResourceError',
    'QuestionnaireResourceForbidden', 'QuestionnaireLimitExceeded', 'Severity',
    'Diagnostic', 'DiagnosticsCollector', 'ParserSettings', 'InputType', 'Title',
    'Text', 'Option', 'Category', 'FreeText', 'OneOf', 'Scale', 'TimeProgression',
    'Info', 'Question', 'Section', 'QuestionnaireTemplate', 'TemplateLang',
    'main_title', 'main_text', 'full_title', 'ParseResult', 'TemplateParser',
    'parse_template', 'is_valid', 'iter_errors', 'set_logging_level',
]
