#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
import dataclasses as dc
from typing import Any

from questionnaire import limits
from questionnaire.arguments import BooleanOption, PositiveIntOption
from questionnaire.exceptions import QuestionnaireTypeError
from questionnaire.translation import gettext as _


@dc.dataclass
class ParserSettings:
    """Settings for parsing templates."""

    defuse: BooleanOption = BooleanOption(default=True)
    """
    If `True` entity declarations and external entity references are forbidden
    and stop the parse with a fatal error.
    """

    max_depth: PositiveIntOption = PositiveIntOption(default=None)
    """
    Maximum depth of the elements of a template. If `None` the package
    limit `questionnaire.limits.MAX_XML_DEPTH` is used.
    """

    max_elements: PositiveIntOption = PositiveIntOption(default=None)
    """
    Maximum number of elements of a template. If `None` the package
    limit `questionnaire.limits.MAX_XML_ELEMENTS` is used.
    """

    warn_ignored_text: BooleanOption = BooleanOption(default=True)
    """
    If `True` a warning is reported for each text chunk found in an element
    that doesn't accept text content. Whitespace is always ignored silently.
    """

    @classmethod
    def get_settings(cls, **kwargs: Any) -> 'ParserSettings':
        """Builds settings from keyword arguments, ignoring unknown keys."""
        names = {f.name for f in dc.fields(cls)}
        return cls(**{k: v for k, v in kwargs.items() if k in names})

    @property
    def effective_max_depth(self) -> int:
        return limits.MAX_XML_DEPTH if self.max_depth is None else self.max_depth

    @property
    def effective_max_elements(self) -> int:
        return limits.MAX_XML_ELEMENTS if self.max_elements is None else self.max_elements


def check_settings(settings: Any) -> ParserSettings:
    if not isinstance(settings, ParserSettings):
        msg = _("invalid type {!r} for settings, must be a {!r}")
        raise QuestionnaireTypeError(msg.format(type(settings), ParserSettings))
    return settings
