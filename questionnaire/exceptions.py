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
This module contains the exception classes for the package. Problems found in
a template document are never raised: they are collected as diagnostics. The
exceptions are raised for errors in the schema declarations or in arguments.
"""


class QuestionnaireException(Exception):
    """The base exception that let you catch all the errors generated by the library."""


class QuestionnaireAttributeError(QuestionnaireException, AttributeError):
    pass


class QuestionnaireTypeError(QuestionnaireException, TypeError):
    pass


class QuestionnaireValueError(QuestionnaireException, ValueError):
    pass


class QuestionnaireRuntimeError(QuestionnaireException, RuntimeError):
    pass


class QuestionnaireResourceError(QuestionnaireException):
    """
    A generic error on a template source, raised by the SAX adapter and always
    converted to a fatal diagnostic by the parser.
    """


class QuestionnaireResourceForbidden(QuestionnaireResourceError):
    """Raised when the parsing of a template is forbidden for safety reasons."""


class QuestionnaireResourceOSError(QuestionnaireResourceError, OSError):
    pass


class QuestionnaireLimitExceeded(QuestionnaireResourceError):
    """Raised when a template exceeds a limit set by the package or by settings."""
