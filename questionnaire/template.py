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
This module contains the object model of a questionnaire template. The nodes
are immutable and are compared by value. Question types are a closed union:
consumers dispatch on them with `functools.singledispatch`.
"""
import dataclasses as dc
from collections.abc import Iterator, Sequence
from datetime import timedelta
from enum import Enum
from functools import singledispatch
from typing import Optional, Union
from xml.etree.ElementTree import Element, SubElement, ParseError, fromstring

from elementpath.etree import etree_tostring

from questionnaire.translation import gettext as _
from questionnaire.exceptions import QuestionnaireTypeError

__all__ = ['TemplateNode', 'InputType', 'Title', 'Text', 'Option', 'Category', 'FreeText', 'OneOf',
           'Scale', 'TimeProgression', 'Info', 'Question', 'Section',
           'QuestionnaireTemplate', 'TimeVariable', 'QuestionType', 'SectionContent',
           'iter_question_ids', 'to_element', 'TemplateLang', 'main_title',
           'main_text', 'full_title']


class TemplateNode:
    """
    Base class of the nodes with sequence fields. The sequences are stored as
    tuples, so the nodes are deeply immutable and hashable.
    """
    def __post_init__(self) -> None:
        for field in dc.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if isinstance(value, list):
                object.__setattr__(self, field.name, tuple(value))


class InputType(Enum):
    SENTENCE = 'sentence'
    PARAGRAPH = 'paragraph'
    NUMBER = 'number'

    SENTENCE_CASE = 'sentence'  # alias of SENTENCE


@dc.dataclass(frozen=True)
class Title:
    text: str
    language: Optional[str] = None
    always: bool = False


@dc.dataclass(frozen=True)
class Text:
    text: str
    language: Optional[str] = None


@dc.dataclass(frozen=True)
class Option(TemplateNode):
    value: str
    has_detail: bool
    detail_type: InputType
    titles: Sequence[Title]
    detail: Sequence[Text]


@dc.dataclass(frozen=True)
class Category(TemplateNode):
    titles: Sequence[Title]
    options: Sequence[Option]


@dc.dataclass(frozen=True)
class FreeText(TemplateNode):
    input_type: InputType
    placeholder: Sequence[Text]
    default: Sequence[Text]


@dc.dataclass(frozen=True)
class OneOf(TemplateNode):
    categories: Sequence[Category]


@dc.dataclass(frozen=True)
class Scale(TemplateNode):
    min: int
    max: int
    min_label: Sequence[Title]
    max_label: Sequence[Title]


TimeVariable = Union[OneOf, Scale]
"""Question types that can be presented repeatedly by a time progression."""


@dc.dataclass(frozen=True)
class TimeProgression:
    interval: timedelta
    repeats: int
    base: TimeVariable


QuestionType = Union[FreeText, OneOf, Scale, TimeProgression]


@dc.dataclass(frozen=True)
class Info(TemplateNode):
    titles: Sequence[Title]
    texts: Sequence[Text]


@dc.dataclass(frozen=True)
class Question(TemplateNode):
    id: str
    required: bool
    titles: Sequence[Title]
    texts: Sequence[Text]
    type: QuestionType


SectionContent = Union[Info, Question]


@dc.dataclass(frozen=True)
class Section(TemplateNode):
    titles: Sequence[Title]
    content: Sequence[SectionContent]

    @property
    def question_ids(self) -> list[str]:
        """The identifiers of the answers collected by the section."""
        return [qid for q in self.iter_questions() for qid in iter_question_ids(q.type, q.id)]

    @property
    def required_question_ids(self) -> set[str]:
        return {qid for q in self.iter_questions() if q.required
                for qid in iter_question_ids(q.type, q.id)}

    def iter_questions(self) -> Iterator[Question]:
        for item in self.content:
            if isinstance(item, Question):
                yield item


@dc.dataclass(frozen=True)
class QuestionnaireTemplate(TemplateNode):
    default_language: Optional[str]
    titles: Sequence[Title]
    sections: Sequence[Section]

    def __str__(self) -> str:
        return self.to_xml()

    @property
    def default_lang(self) -> Optional[str]:
        return self.default_language

    def collect_question_ids(self) -> list[str]:
        """Returns the identifiers of all the answers collected by the questionnaire."""
        return [qid for section in self.sections for qid in section.question_ids]

    def to_xml(self) -> str:
        """Serializes the template to an XML string that parses to an equal template."""
        return etree_tostring(to_element(self))


###
# Question identifiers

@singledispatch
def iter_question_ids(question_type: QuestionType, base_id: str) -> Iterator[str]:
    """Yields the identifiers of the answers of a question type."""
    raise QuestionnaireTypeError(_("unknown question type {!r}").format(question_type))


@iter_question_ids.register
def _freetext_question_ids(question_type: FreeText, base_id: str) -> Iterator[str]:
    yield base_id


@iter_question_ids.register
def _scale_question_ids(question_type: Scale, base_id: str) -> Iterator[str]:
    yield base_id


@iter_question_ids.register
def _oneof_question_ids(question_type: OneOf, base_id: str) -> Iterator[str]:
    yield base_id
    if any(option.has_detail for category in question_type.categories
           for option in category.options):
        yield f'{base_id}-detail'


@iter_question_ids.register
def _timeprogression_question_ids(question_type: TimeProgression,
                                  base_id: str) -> Iterator[str]:
    for k in range(question_type.repeats):
        yield from iter_question_ids(question_type.base, f'{k}-{base_id}')


###
# Serialization to ElementTree

def _set_fragment(elem: Element, fragment: str) -> None:
    # Titles and texts contain XML fragments, inserted without escaping.
    try:
        wrapper = fromstring(f'<fragment>{fragment}</fragment>')
    except ParseError:
        elem.text = fragment
    else:
        elem.text = wrapper.text
        elem.extend(list(wrapper))


def _set_language(elem: Element, language: Optional[str]) -> None:
    if language is not None:
        elem.set('lang', language)


def _format_bool(value: bool) -> str:
    return 'true' if value else 'false'


@singledispatch
def to_element(obj: object, parent: Optional[Element] = None, tag: Optional[str] = None) \
        -> Element:
    """
    Builds the ElementTree representation of a template node.

    :param obj: the template node.
    :param parent: an optional parent element, the new element is appended to it.
    :param tag: an optional tag that overrides the default tag of the node.
    """
    raise QuestionnaireTypeError(_("can't serialize {!r}").format(obj))


def _new_element(parent: Optional[Element], tag: str, **attrib: str) -> Element:
    if parent is None:
        return Element(tag, attrib)
    return SubElement(parent, tag, attrib)


@to_element.register
def _title_to_element(obj: Title, parent: Optional[Element] = None,
                      tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'title')
    _set_language(elem, obj.language)
    if obj.always:
        elem.set('always', 'true')
    _set_fragment(elem, obj.text)
    return elem


@to_element.register
def _text_to_element(obj: Text, parent: Optional[Element] = None,
                     tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'text')
    _set_language(elem, obj.language)
    _set_fragment(elem, obj.text)
    return elem


@to_element.register
def _option_to_element(obj: Option, parent: Optional[Element] = None,
                       tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'option', value=obj.value,
                        detail=_format_bool(obj.has_detail))
    elem.set('detail-type', obj.detail_type.name.lower())
    for title in obj.titles:
        to_element(title, elem)
    for text in obj.detail:
        to_element(text, elem, 'detail')
    return elem


@to_element.register
def _category_to_element(obj: Category, parent: Optional[Element] = None,
                         tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'category')
    for title in obj.titles:
        to_element(title, elem)
    for option in obj.options:
        to_element(option, elem)
    return elem


@to_element.register
def _freetext_to_element(obj: FreeText, parent: Optional[Element] = None,
                         tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'free-text', type=obj.input_type.name.lower())
    for text in obj.placeholder:
        to_element(text, elem, 'placeholder')
    for text in obj.default:
        to_element(text, elem, 'default')
    return elem


@to_element.register
def _oneof_to_element(obj: OneOf, parent: Optional[Element] = None,
                      tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'one-of')
    for category in obj.categories:
        to_element(category, elem)
    return elem


@to_element.register
def _scale_to_element(obj: Scale, parent: Optional[Element] = None,
                      tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'scale', min=str(obj.min), max=str(obj.max))
    if obj.min_label:
        label = SubElement(elem, 'min')
        for title in obj.min_label:
            to_element(title, label)
    if obj.max_label:
        label = SubElement(elem, 'max')
        for title in obj.max_label:
            to_element(title, label)
    return elem


@to_element.register
def _timeprogression_to_element(obj: TimeProgression,
                                parent: Optional[Element] = None,
                                tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'time-progression',
                        interval=str(obj.interval.total_seconds()),
                        repeats=str(obj.repeats))
    to_element(obj.base, elem)
    return elem


@to_element.register
def _info_to_element(obj: Info, parent: Optional[Element] = None,
                     tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'info')
    for title in obj.titles:
        to_element(title, elem)
    for text in obj.texts:
        to_element(text, elem)
    return elem


@to_element.register
def _question_to_element(obj: Question, parent: Optional[Element] = None,
                         tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'question', id=obj.id,
                        required=_format_bool(obj.required))
    for title in obj.titles:
        to_element(title, elem)
    for text in obj.texts:
        to_element(text, elem)
    to_element(obj.type, elem)
    return elem


@to_element.register
def _section_to_element(obj: Section, parent: Optional[Element] = None,
                        tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'section')
    for title in obj.titles:
        to_element(title, elem)
    for item in obj.content:
        to_element(item, elem)
    return elem


@to_element.register
def _questionnairetemplate_to_element(obj: QuestionnaireTemplate,
                                      parent: Optional[Element] = None,
                                      tag: Optional[str] = None) -> Element:
    elem = _new_element(parent, tag or 'questionnaire')
    if obj.default_language is not None:
        elem.set('default-lang', obj.default_language)
    for title in obj.titles:
        to_element(title, elem)
    for section in obj.sections:
        to_element(section, elem)
    return elem


###
# Localized text selection

@dc.dataclass(frozen=True)
class TemplateLang:
    """
    The languages for presenting a template.

    :param default: the language of the titles and texts without a language.
    :param preferred: the languages preferred by the reader, in order of preference.
    """
    default: str
    preferred: Sequence[str] = ()

    def best_match(self, supported: Sequence[str]) -> str:
        """
        Returns the supported language that best matches the preferred languages:
        an exact match first, then a match of the primary language subtag, else
        the default language.
        """
        lower_supported = [s.lower() for s in supported]
        for language in self.preferred:
            if language.lower() in lower_supported:
                return supported[lower_supported.index(language.lower())]

        for language in self.preferred:
            primary = language.lower().replace('_', '-').split('-')[0]
            for k, s in enumerate(lower_supported):
                if s.split('-')[0] == primary:
                    return supported[k]
        return self.default


def _main_item(items: Sequence[Union[Title, Text]], languages: TemplateLang) \
        -> Optional[Union[Title, Text]]:
    if not items:
        return None
    best = languages.best_match([item.language or languages.default for item in items])
    for item in items:
        if (item.language or languages.default) == best:
            return item
    return items[0]


def main_title(titles: Sequence[Title], languages: TemplateLang) -> Optional[str]:
    """Returns the text of the title that best fits the languages, `None` if no titles."""
    title = _main_item(titles, languages)
    return None if title is None else title.text


def main_text(texts: Sequence[Text], languages: TemplateLang) -> Optional[str]:
    """Returns the text that best fits the languages, `None` if no texts."""
    text = _main_item(texts, languages)
    return None if text is None else text.text


def full_title(titles: Sequence[Title], languages: TemplateLang) \
        -> Optional[tuple[str, list[str]]]:
    """
    Returns the main title together with the titles marked to be always
    shown, if they differ from the main title. `None` if there are no titles.
    """
    main = main_title(titles, languages)
    if main is None:
        return None
    return main, [t.text for t in titles if t.always and t.text != main]
