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
This module contains the typed attribute properties of template elements.

Properties are declared in the body of a parser state class and are bound
once, when the element is opened. A binding never fails: an invalid or a
missing value is replaced by the declared default and reported with a
warning or an error.
"""
import math
import re
from datetime import timedelta
from enum import Enum
from typing import Any, Generic, Optional, TYPE_CHECKING, TypeVar, Union, overload

from elementpath import datatypes

from questionnaire.aliases import AttributesType
from questionnaire.exceptions import QuestionnaireAttributeError, QuestionnaireValueError
from questionnaire.translation import gettext as _
from questionnaire.utils.misc import join_items

if TYPE_CHECKING:
    from .states import AttributeParserState, ParserContext

T = TypeVar('T')
E = TypeVar('E', bound=Enum)

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


def get_attribute(attributes: AttributesType, name: str) -> Optional[str]:
    """
    Gets an attribute value by exact name or, when missing, by matching
    the local part of a prefixed attribute name.
    """
    try:
        return attributes[name]
    except KeyError:
        for key, value in attributes.items():
            if key.rpartition(':')[2] == name:
                return value
        return None


def bool_to_string(value: Any) -> str:
    return str(value).lower() if isinstance(value, bool) else str(value)


class AttributeProperty(Generic[T]):
    """
    Base class for typed attribute properties.

    :param name: the name of the attribute.
    :param default: the value used when the attribute is missing or invalid.
    :param required: if `True` a missing attribute is reported as an error.
    """
    attr_name: str

    def __init__(self, name: str, default: T, required: bool = False) -> None:
        self.name = name
        self.default = default
        self.required = required

    def __repr__(self) -> str:
        return '%s(%r, default=%r)' % (self.__class__.__name__, self.name, self.default)

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.attr_name = name

    @overload
    def __get__(self, instance: None, owner: type[Any]) -> 'AttributeProperty[T]': ...

    @overload
    def __get__(self, instance: 'AttributeParserState[Any]', owner: type[Any]) -> T: ...

    def __get__(self, instance: Optional['AttributeParserState[Any]'], owner: type[Any]) \
            -> Union['AttributeProperty[T]', T]:
        if instance is None:
            return self
        try:
            return instance.values[self.attr_name]
        except KeyError:
            return self.default  # not bound yet

    def __set__(self, instance: 'AttributeParserState[Any]', value: Any) -> None:
        msg = _("can't set bound attribute property {!r}")
        raise QuestionnaireAttributeError(msg.format(self.name))

    def bind(self, ctx: 'ParserContext', attributes: AttributesType) -> T:
        """Returns the value of the property for the given attributes."""
        text = get_attribute(attributes, self.name)
        if text is None:
            if self.required:
                ctx.error(_("Missing required parameter {!r}").format(self.name))
            return self.default
        return self.coerce(ctx, text)

    def coerce(self, ctx: 'ParserContext', text: str) -> T:
        raise NotImplementedError()

    def ignore_blank(self, ctx: 'ParserContext') -> T:
        ctx.warning(_("Blank attribute {!r} is ignored").format(self.name))
        return self.default


class StringProperty(AttributeProperty[str]):

    def coerce(self, ctx: 'ParserContext', text: str) -> str:
        if not text.strip():
            return self.ignore_blank(ctx)
        return text


class BoolProperty(AttributeProperty[bool]):

    def coerce(self, ctx: 'ParserContext', text: str) -> bool:
        value = text.lower()
        if value in ('true', 'yes'):
            return True
        elif value in ('false', 'no'):
            return False

        msg = _("Expected 'true' or 'false' for attribute {!r}, but got {!r}. "
                "Using default: {}.")
        ctx.warning(msg.format(self.name, text, bool_to_string(self.default)))
        return self.default


class IntProperty(AttributeProperty[int]):
    """
    An integer property, out of range values are clamped to the nearest bound.

    :param min_value: the optional lower bound.
    :param max_value: the optional upper bound.
    """
    def __init__(self, name: str, default: int,
                 min_value: Optional[int] = None,
                 max_value: Optional[int] = None,
                 required: bool = False) -> None:
        if min_value is not None and max_value is not None and min_value > max_value:
            raise QuestionnaireValueError(_("min_value must be lesser or equal than max_value"))
        super().__init__(name, default, required)
        self.min_value = min_value
        self.max_value = max_value

    def coerce(self, ctx: 'ParserContext', text: str) -> int:
        if INTEGER_PATTERN.fullmatch(text) is None:
            msg = _("Expected number for attribute {!r}, but got {!r}. Using default: {}")
            ctx.warning(msg.format(self.name, text, self.default))
            return self.default

        number = int(text)

        if self.min_value is not None and number < self.min_value:
            msg = _("Number for attribute {!r} can't be lesser than {}, using {}")
            ctx.warning(msg.format(self.name, self.min_value, self.min_value))
            return self.min_value
        elif self.max_value is not None and number > self.max_value:
            msg = _("Number for attribute {!r} can't be greater than {}, using {}")
            ctx.warning(msg.format(self.name, self.max_value, self.max_value))
            return self.max_value
        return number


class EnumProperty(AttributeProperty[E]):
    """
    An enumeration property. The attribute value is normalized to upper
    case, with spaces and dashes replaced by underscores, and then matched
    against the names of the enumeration members.
    """
    def __init__(self, name: str, default: E, required: bool = False) -> None:
        super().__init__(name, default, required)
        self.enum_class = type(default)

    @staticmethod
    def normalize(text: str) -> str:
        return text.strip().upper().replace(' ', '_').replace('-', '_')

    def coerce(self, ctx: 'ParserContext', text: str) -> E:
        try:
            return self.enum_class[self.normalize(text)]
        except KeyError:
            values = join_items((m.name.lower() for m in self.enum_class),
                                "'", "'", last_separator=' and ')
            msg = _("Invalid value {!r} of attribute {}. Possible values are: {}")
            ctx.error(msg.format(text, self.name, values))
            return self.default


class DurationProperty(AttributeProperty[timedelta]):
    """
    A duration property, expressed in seconds by a floating point number.

    :param minimum: the minimum duration, shorter values are replaced by it.
    """
    def __init__(self, name: str, minimum: timedelta, default: timedelta,
                 required: bool = False) -> None:
        super().__init__(name, default, required)
        self.minimum = minimum

    def coerce(self, ctx: 'ParserContext', text: str) -> timedelta:
        if not text.strip():
            return self.ignore_blank(ctx)

        try:
            number = float(text)
        except ValueError:
            msg = _("Expected number for attribute {!r}, but got {!r}. Using default: {}")
            ctx.warning(msg.format(self.name, text, self.default.total_seconds()))
            return self.default

        if not math.isfinite(number):
            ctx.warning(_("Non finite attribute {!r} is ignored").format(self.name))
            return self.default

        if number < self.minimum.total_seconds():
            msg = _("Duration specified in attribute {!r} is too short ({}s), minimum is {}s")
            ctx.warning(msg.format(self.name, number, self.minimum.total_seconds()))
            return self.minimum

        try:
            return timedelta(seconds=number)
        except OverflowError:
            msg = _("Duration specified in attribute {!r} is too long ({}s). Using default: {}s")
            ctx.warning(msg.format(self.name, number, self.default.total_seconds()))
            return self.default


def canonical_language(text: str) -> str:
    """
    Returns the canonical form of a language tag: the language subtag in
    lower case, the script subtag capitalized and the region in upper case.
    Underscores are accepted as subtag separators.
    """
    subtags = text.strip().replace('_', '-').split('-')
    chunks = [subtags[0].lower()]
    for subtag in subtags[1:]:
        if len(subtag) == 2 or len(subtag) == 3 and subtag.isdigit():
            chunks.append(subtag.upper())
        elif len(subtag) == 4 and subtag.isalpha():
            chunks.append(subtag.capitalize())
        else:
            chunks.append(subtag.lower())
    return '-'.join(chunks)


class LangProperty(AttributeProperty[Optional[str]]):
    """A language tag property, validated as an xs:language value."""

    def coerce(self, ctx: 'ParserContext', text: str) -> Optional[str]:
        if not text.strip():
            return self.ignore_blank(ctx)

        language = canonical_language(text)
        if not datatypes.Language.is_valid(language):
            ctx.warning(_("Language {!r} is invalid").format(text))
            return self.default
        return language
