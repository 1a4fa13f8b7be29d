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
This module contains the parser states of the elements of a questionnaire
template. Each state declares its attribute properties and the ordered parts
of its content and builds a template node when the element is closed.
"""
from datetime import timedelta
from typing import Optional, Union

from questionnaire.exceptions import QuestionnaireRuntimeError
from questionnaire.translation import gettext as _
from questionnaire.template import InputType, Title, Text, Option, Category, \
    FreeText, OneOf, Scale, TimeProgression, Info, Question, Section, \
    QuestionnaireTemplate, TimeVariable, QuestionType, SectionContent

from .particles import tag, group
from .properties import StringProperty, BoolProperty, IntProperty, \
    EnumProperty, DurationProperty, LangProperty
from .states import SequenceParserState, FallbackVerbatim, RootParserState

QUESTIONNAIRE_TAG = 'questionnaire'

DEFAULT_LANGUAGE = 'en'
MAX_SCALE_VALUE = 7
MIN_INTERVAL = timedelta(seconds=1)
DEFAULT_INTERVAL = timedelta(seconds=10)
MAX_REPEATS = 1000


class TitleParserState(SequenceParserState[Title]):
    lang = LangProperty('lang', None)
    always = BoolProperty('always', False)
    text = FallbackVerbatim(exclusive=True)

    def result(self) -> Title:
        return Title(self.text or '', self.lang, self.always)


class TextParserState(SequenceParserState[Text]):
    lang = LangProperty('lang', None)
    text = FallbackVerbatim(exclusive=True)

    def result(self) -> Text:
        return Text(self.text or '', self.lang)


class InfoParserState(SequenceParserState[Info]):
    titles = tag('title', builder=TitleParserState)
    texts = tag('text', builder=TextParserState)

    def result(self) -> Info:
        return Info(self.titles, self.texts)


class OptionParserState(SequenceParserState[Option]):
    value = StringProperty('value', '')
    detail_enabled = BoolProperty('detail', False)
    detail_type = EnumProperty('detail-type', InputType.SENTENCE)

    titles = tag('title', min_occurs=1, builder=TitleParserState)
    detail_prompt = tag('detail', builder=TextParserState)
    title_fallback = FallbackVerbatim(exclusive=True)

    def result(self) -> Option:
        titles = self.titles
        if not titles and self.title_fallback is not None:
            titles = [Title(self.title_fallback)]

        value = self.value
        if not value.strip():
            value = next((t.text for t in titles if t.language is None), None) \
                or next((t.text for t in titles), None) \
                or 'invalid-value'

        return Option(value, self.detail_enabled, self.detail_type,
                      titles, self.detail_prompt)


class CategoryParserState(SequenceParserState[Category]):
    titles = tag('title', builder=TitleParserState)
    options = tag('option', min_occurs=1, builder=OptionParserState)

    def result(self) -> Category:
        return Category(self.titles, self.options)


class OneOfParserState(SequenceParserState[OneOf]):
    categories = group({
        'category': CategoryParserState,
        'option': OptionParserState,
    }, min_occurs=1, exclusive=True)

    def result(self) -> OneOf:
        categories: list[Category] = []
        options: list[Option] = []

        item: Union[Category, Option]
        for item in self.categories:
            if isinstance(item, Category):
                categories.append(item)
            elif isinstance(item, Option):
                options.append(item)
            else:
                msg = _("unexpected item {!r} in one-of content").format(item)
                raise QuestionnaireRuntimeError(msg)

        if options:
            categories.append(Category([], options))
        return OneOf(categories)


class FreeTextParserState(SequenceParserState[FreeText]):
    input_type = EnumProperty('type', InputType.SENTENCE)

    placeholder = tag('placeholder', builder=TextParserState)
    default = tag('default', max_occurs=1, builder=TextParserState)

    def result(self) -> FreeText:
        return FreeText(self.input_type, self.placeholder, self.default)


class ScaleLabelParserState(SequenceParserState[Optional[list[Title]]]):
    """The label of a scale bound, as titles or as plain fallback content."""
    titles = tag('title', builder=TitleParserState)
    fallback = FallbackVerbatim(exclusive=True)

    def result(self) -> Optional[list[Title]]:
        if self.titles:
            return self.titles

        fallback = (self.fallback or '').strip()
        if not fallback:
            return None
        return [Title(fallback)]


class ScaleParserState(SequenceParserState[Scale]):
    min_value = IntProperty('min', 1)
    max_value = IntProperty('max', MAX_SCALE_VALUE, max_value=MAX_SCALE_VALUE)

    min_label = tag('min', max_occurs=1, builder=ScaleLabelParserState)
    max_label = tag('max', max_occurs=1, builder=ScaleLabelParserState)

    def result(self) -> Scale:
        return Scale(
            self.min_value,
            self.max_value,
            [t for label in self.min_label if label for t in label],
            [t for label in self.max_label if label for t in label],
        )


class TimeProgressionParserState(SequenceParserState[TimeProgression]):
    interval = DurationProperty('interval', MIN_INTERVAL, DEFAULT_INTERVAL, required=True)
    repeats = IntProperty('repeats', 10, min_value=2, max_value=MAX_REPEATS,
                          required=True)

    base = group({
        'one-of': OneOfParserState,
        'scale': ScaleParserState,
    }, min_occurs=1, max_occurs=1)

    def result(self) -> TimeProgression:
        base: list[TimeVariable] = self.base
        return TimeProgression(
            self.interval,
            self.repeats,
            base[0] if base else Scale(1, 3, [], []),
        )


class QuestionParserState(SequenceParserState[Question]):
    id = StringProperty('id', 'invalid-id', required=True)
    required = BoolProperty('required', True)

    titles = tag('title', builder=TitleParserState)
    texts = tag('text', builder=TextParserState)
    body = group({
        'one-of': OneOfParserState,
        'free-text': FreeTextParserState,
        'scale': ScaleParserState,
        'time-progression': TimeProgressionParserState,
    }, min_occurs=1, max_occurs=1)

    def result(self) -> Question:
        body: list[QuestionType] = self.body
        question_type = body[0] if body else FreeText(InputType.SENTENCE, [], [])
        return Question(self.id, self.required, self.titles, self.texts, question_type)


class SectionParserState(SequenceParserState[Section]):
    titles = tag('title', min_occurs=1, builder=TitleParserState)
    items = group({
        'info': InfoParserState,
        'question': QuestionParserState,
    }, min_occurs=1)

    def result(self) -> Section:
        content: list[SectionContent] = self.items
        return Section(self.titles, content)


class QuestionnaireParserState(SequenceParserState[QuestionnaireTemplate]):
    default_lang = LangProperty('default-lang', DEFAULT_LANGUAGE)

    titles = tag('title', min_occurs=1, builder=TitleParserState)
    sections = tag('section', min_occurs=1, builder=SectionParserState)

    def result(self) -> QuestionnaireTemplate:
        return QuestionnaireTemplate(self.default_lang, self.titles, self.sections)


def questionnaire_root_state() -> RootParserState[QuestionnaireTemplate]:
    """Returns a new bottom state for parsing a questionnaire template."""
    return RootParserState(QUESTIONNAIRE_TAG, QuestionnaireParserState())


__all__ = ['QUESTIONNAIRE_TAG', 'TitleParserState', 'TextParserState',
           'InfoParserState', 'OptionParserState', 'CategoryParserState',
           'OneOfParserState', 'FreeTextParserState', 'ScaleLabelParserState',
           'ScaleParserState', 'TimeProgressionParserState', 'QuestionParserState',
           'SectionParserState', 'QuestionnaireParserState', 'questionnaire_root_state']
