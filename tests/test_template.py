#!/usr/bin/env python
#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests concerning the object model of questionnaire templates"""
import unittest
import dataclasses as dc
from datetime import timedelta
from xml.etree.ElementTree import Element

from questionnaire.exceptions import QuestionnaireTypeError
from questionnaire.template import InputType, Title, Text, Option, Category, \
    FreeText, OneOf, Scale, TimeProgression, Info, Question, Section, \
    QuestionnaireTemplate, iter_question_ids, to_element, TemplateLang, \
    main_title, main_text, full_title


def option(value, has_detail=False):
    return Option(value, has_detail, InputType.SENTENCE, [Title(value.title())], [])


class TestTemplateNodes(unittest.TestCase):

    def test_value_semantics(self):
        self.assertEqual(Title('A'), Title('A', None, False))
        self.assertNotEqual(Title('A'), Title('A', 'en'))
        self.assertEqual(Scale(1, 7, [], []), Scale(1, 7, [], []))

        with self.assertRaises(dc.FrozenInstanceError):
            Title('A').text = 'B'  # noqa

    def test_deep_immutability(self):
        template = QuestionnaireTemplate('en', [Title('T')], [
            Section([Title('S')], [Question('q1', True, [], [], OneOf([
                Category([], [option('a')])
            ]))])
        ])
        self.assertIsInstance(template.titles, tuple)
        self.assertIsInstance(template.sections, tuple)
        self.assertIsInstance(template.sections[0].content[0].type.categories, tuple)
        self.assertEqual(template.sections[0].titles, (Title('S'),))

        with self.assertRaises(AttributeError):
            template.sections.clear()  # noqa

        self.assertEqual(hash(template), hash(QuestionnaireTemplate('en', (Title('T'),), [
            Section([Title('S')], [Question('q1', True, [], [], OneOf([
                Category([], [option('a')])
            ]))])
        ])))
        self.assertEqual(len({Scale(1, 7, [], []), Scale(1, 7, (), ())}), 1)

    def test_input_type(self):
        self.assertEqual([t.name for t in InputType], ['SENTENCE', 'PARAGRAPH', 'NUMBER'])
        self.assertIs(InputType['SENTENCE_CASE'], InputType.SENTENCE)
        self.assertIs(InputType('number'), InputType.NUMBER)


class TestQuestionIdentifiers(unittest.TestCase):

    def test_iter_question_ids(self):
        self.assertEqual(list(iter_question_ids(FreeText(InputType.SENTENCE, [], []), 'q')),
                         ['q'])
        self.assertEqual(list(iter_question_ids(Scale(1, 7, [], []), 'q')), ['q'])

        one_of = OneOf([Category([], [option('a'), option('b')])])
        self.assertEqual(list(iter_question_ids(one_of, 'q')), ['q'])

        one_of = OneOf([Category([], [option('a')]), Category([], [option('b', True)])])
        self.assertEqual(list(iter_question_ids(one_of, 'q')), ['q', 'q-detail'])

        progression = TimeProgression(timedelta(seconds=5), 2, one_of)
        self.assertEqual(list(iter_question_ids(progression, 'q')),
                         ['0-q', '0-q-detail', '1-q', '1-q-detail'])

    def test_unknown_question_type(self):
        with self.assertRaises(QuestionnaireTypeError):
            list(iter_question_ids(Info([], []), 'q'))

    def test_section_question_ids(self):
        section = Section([Title('S')], [
            Info([Title('Welcome')], []),
            Question('q1', True, [], [], Scale(1, 7, [], [])),
            Question('q2', False, [], [], OneOf([Category([], [option('a', True)])])),
            Question('q3', True, [], [], TimeProgression(
                timedelta(seconds=1), 2, Scale(1, 3, [], [])
            )),
        ])
        self.assertEqual([q.id for q in section.iter_questions()], ['q1', 'q2', 'q3'])
        self.assertEqual(section.question_ids, ['q1', 'q2', 'q2-detail', '0-q3', '1-q3'])
        self.assertEqual(section.required_question_ids, {'q1', '0-q3', '1-q3'})

        template = QuestionnaireTemplate('en', [Title('T')], [section, section])
        self.assertEqual(len(template.collect_question_ids()), 10)


class TestSerialization(unittest.TestCase):

    def test_to_element(self):
        elem = to_element(Title('Hello <b>World</b> &amp; all', 'it', True))
        self.assertIsInstance(elem, Element)
        self.assertEqual(elem.tag, 'title')
        self.assertEqual(elem.attrib, {'lang': 'it', 'always': 'true'})
        self.assertEqual(elem.text, 'Hello ')
        self.assertEqual(elem[0].tag, 'b')
        self.assertEqual(elem[0].tail, ' & all')

        elem = to_element(Text('a < b'), tag='placeholder')
        self.assertEqual(elem.tag, 'placeholder')
        self.assertEqual(elem.text, 'a < b')

        parent = Element('scale')
        elem = to_element(Title('Bad'), parent)
        self.assertIs(parent[0], elem)

        with self.assertRaises(QuestionnaireTypeError):
            to_element('title')

    def test_to_xml(self):
        template = QuestionnaireTemplate('en', [Title('T')], [
            Section([Title('S')], [
                Info([], [Text('Intro')]),
                Question('q1', False, [Title('Q')], [], FreeText(
                    InputType.PARAGRAPH, [Text('Write')], []
                )),
                Question('q2', True, [], [], TimeProgression(
                    timedelta(seconds=1.5), 2, Scale(0, 5, [Title('No')], [])
                )),
            ])
        ])
        self.assertEqual(template.to_xml(), (
            '<questionnaire default-lang="en"><title>T</title><section><title>S</title>'
            '<info><text>Intro</text></info>'
            '<question id="q1" required="false"><title>Q</title>'
            '<free-text type="paragraph"><placeholder>Write</placeholder></free-text>'
            '</question>'
            '<question id="q2" required="true">'
            '<time-progression interval="1.5" repeats="2">'
            '<scale min="0" max="5"><min><title>No</title></min></scale>'
            '</time-progression></question>'
            '</section></questionnaire>'
        ))
        self.assertEqual(str(template), template.to_xml())

        elem = to_element(option('other', True))
        self.assertEqual(elem.attrib, {'value': 'other', 'detail': 'true',
                                       'detail-type': 'sentence'})


class TestLocalizedText(unittest.TestCase):

    def setUp(self):
        self.titles = [Title('Wine'), Title('Vino', 'it'), Title('Wein', 'de-AT', True)]

    def test_best_match(self):
        languages = TemplateLang('en', ['it', 'en'])
        self.assertEqual(languages.best_match(['en', 'it']), 'it')
        self.assertEqual(languages.best_match(['EN', 'de']), 'EN')

        languages = TemplateLang('en', ['de-DE', 'fr'])
        self.assertEqual(languages.best_match(['en', 'de-AT']), 'de-AT')
        self.assertEqual(languages.best_match(['es']), 'en')
        self.assertEqual(TemplateLang('en').best_match(['it']), 'en')

    def test_main_title(self):
        self.assertEqual(main_title(self.titles, TemplateLang('en', ['it'])), 'Vino')
        self.assertEqual(main_title(self.titles, TemplateLang('en', ['en'])), 'Wine')
        self.assertEqual(main_title(self.titles, TemplateLang('en', ['de_CH'])), 'Wein')
        self.assertEqual(main_title(self.titles, TemplateLang('en', ['ja'])), 'Wine')
        self.assertEqual(main_title(self.titles[1:], TemplateLang('en', ['ja'])), 'Vino')
        self.assertIsNone(main_title([], TemplateLang('en')))

    def test_main_text(self):
        texts = [Text('Hi', 'en'), Text('Ciao', 'it')]
        self.assertEqual(main_text(texts, TemplateLang('it', ['it'])), 'Ciao')
        self.assertEqual(main_text(texts, TemplateLang('it')), 'Ciao')
        self.assertIsNone(main_text([], TemplateLang('it')))

    def test_full_title(self):
        self.assertEqual(full_title(self.titles, TemplateLang('en', ['it'])),
                         ('Vino', ['Wein']))
        self.assertEqual(full_title(self.titles, TemplateLang('en', ['de'])), ('Wein', []))
        self.assertIsNone(full_title([], TemplateLang('en')))


if __name__ == '__main__':
    unittest.main()
