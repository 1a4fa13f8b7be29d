#
# Copyright (c), 2016-2020, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Package protection limits. Values can be changed after import to set different limits."""
import sys
from types import ModuleType
from typing import Any

from questionnaire.translation import gettext as _
from questionnaire.exceptions import QuestionnaireTypeError, QuestionnaireValueError


class LimitsModule(ModuleType):
    def __setattr__(self, attr: str, value: Any) -> None:
        if attr not in ('MAX_XML_DEPTH', 'MAX_XML_ELEMENTS'):
            pass
        elif not isinstance(value, int) or isinstance(value, bool):
            raise QuestionnaireTypeError(_('Value {!r} is not an int').format(value))
        elif value < 1:
            raise QuestionnaireValueError(_('{} limit must be at least 1').format(attr))

        super().__setattr__(attr, value)


sys.modules[__name__].__class__ = LimitsModule


MAX_XML_DEPTH = 1000
"""
Maximum depth of a template document. The parse is stopped with a fatal
error if this limit is exceeded. Used when settings don't provide a value.
"""

MAX_XML_ELEMENTS = 10 ** 5
"""
Maximum number of elements allowed in a template document. The parse is
stopped with a fatal error if this limit is exceeded.
"""
