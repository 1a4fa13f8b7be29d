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
Parser states, content parts and attribute properties of questionnaire templates.
"""
from .particles import Part, tag, group
from .properties import get_attribute, AttributeProperty, StringProperty, \
    BoolProperty, IntProperty, EnumProperty, DurationProperty, LangProperty
from .states import ParserContext, ParserState, VerbatimParserState, \
    FallbackVerbatim, AttributeParserState, SequenceParserState, RootParserState
from .elements import QUESTIONNAIRE_TAG, TitleParserState, TextParserState, \
    InfoParserState, OptionParserState, CategoryParserState, OneOfParserState, \
    FreeTextParserState, ScaleLabelParserState, ScaleParserState, \
    TimeProgressionParserState, QuestionParserState, SectionParserState, \
    QuestionnaireParserState, questionnaire_root_state

__all__ = ['Part', 'tag', 'group', 'get_attribute', 'AttributeProperty',
           'StringProperty', 'BoolProperty', 'IntProperty', 'EnumProperty',
           'DurationProperty', 'LangProperty', 'ParserContext', 'ParserState',
           'VerbatimParserState', 'FallbackVerbatim', 'AttributeParserState',
           'SequenceParserState', 'RootParserState', 'QUESTIONNAIRE_TAG',
           'TitleParserState', 'TextParserState', 'InfoParserState',
           'OptionParserState', 'CategoryParserState', 'OneOfParserState',
           'FreeTextParserState', 'ScaleLabelParserState', 'ScaleParserState',
           'TimeProgressionParserState', 'QuestionParserState',
           'SectionParserState', 'QuestionnaireParserState',
           'questionnaire_root_state']
