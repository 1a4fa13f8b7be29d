#!/usr/bin/env python
#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests on settings, arguments and limits"""
import unittest
import dataclasses as dc

from questionnaire import limits
from questionnaire.arguments import Argument, Option, BooleanOption, PositiveIntOption
from questionnaire.exceptions import QuestionnaireAttributeError, \
    QuestionnaireTypeError, QuestionnaireValueError
from questionnaire.settings import ParserSettings, check_settings


class TestArguments(unittest.TestCase):

    def test_argument_descriptor(self):
        class Foo:
            arg = Argument()

            def __init__(self, arg):
                self.arg = arg

        foo = Foo(10)
        self.assertEqual(foo.arg, 10)
        self.assertEqual(str(Foo.__dict__['arg']), "argument 'arg'")

        with self.assertRaises(QuestionnaireAttributeError):
            foo.arg = 20
        with self.assertRaises(QuestionnaireAttributeError):
            del foo.arg
        with self.assertRaises(QuestionnaireAttributeError):
            _ = Foo.arg

    def test_option_descriptor(self):
        class Foo:
            opt = Option(default=1)

        self.assertEqual(Foo.opt, 1)
        self.assertEqual(Foo().opt, 1)
        self.assertEqual(str(Foo.__dict__['opt']), "optional argument 'opt'")

    def test_boolean_option(self):
        class Foo:
            flag = BooleanOption(default=False)

            def __init__(self, flag):
                self.flag = flag

        self.assertTrue(Foo(True).flag)
        with self.assertRaises(QuestionnaireTypeError):
            Foo(1)

    def test_positive_int_option(self):
        class Foo:
            limit = PositiveIntOption(default=None)

            def __init__(self, limit):
                self.limit = limit

        self.assertIsNone(Foo(None).limit)
        self.assertEqual(Foo(1).limit, 1)

        with self.assertRaises(QuestionnaireValueError):
            Foo(0)
        with self.assertRaises(QuestionnaireTypeError):
            Foo('10')
        with self.assertRaises(QuestionnaireTypeError):
            Foo(True)


class TestParserSettings(unittest.TestCase):

    def test_defaults(self):
        settings = ParserSettings()
        self.assertTrue(settings.defuse)
        self.assertIsNone(settings.max_depth)
        self.assertIsNone(settings.max_elements)
        self.assertTrue(settings.warn_ignored_text)
        self.assertEqual(settings.effective_max_depth, limits.MAX_XML_DEPTH)
        self.assertEqual(settings.effective_max_elements, limits.MAX_XML_ELEMENTS)

    def test_custom_settings(self):
        settings = ParserSettings(max_depth=5, max_elements=20, warn_ignored_text=False)
        self.assertEqual(settings.effective_max_depth, 5)
        self.assertEqual(settings.effective_max_elements, 20)
        self.assertFalse(settings.warn_ignored_text)

        other = dc.replace(settings, defuse=False)
        self.assertFalse(other.defuse)
        self.assertEqual(other.max_depth, 5)

    def test_invalid_settings(self):
        with self.assertRaises(QuestionnaireTypeError):
            ParserSettings(defuse='yes')
        with self.assertRaises(QuestionnaireValueError):
            ParserSettings(max_depth=0)
        with self.assertRaises(QuestionnaireTypeError):
            ParserSettings(max_elements=1.5)

    def test_get_settings(self):
        settings = ParserSettings.get_settings(max_depth=10, unknown=True)
        self.assertEqual(settings.max_depth, 10)
        self.assertTrue(settings.defuse)

    def test_immutable_settings(self):
        settings = ParserSettings()
        with self.assertRaises(QuestionnaireAttributeError):
            settings.defuse = False

    def test_check_settings(self):
        settings = ParserSettings()
        self.assertIs(check_settings(settings), settings)
        with self.assertRaises(QuestionnaireTypeError):
            check_settings({'defuse': True})


class TestLimits(unittest.TestCase):

    def test_set_limits(self):
        max_depth = limits.MAX_XML_DEPTH
        try:
            limits.MAX_XML_DEPTH = 10
            self.assertEqual(limits.MAX_XML_DEPTH, 10)
            self.assertEqual(ParserSettings().effective_max_depth, 10)
        finally:
            limits.MAX_XML_DEPTH = max_depth

    def test_invalid_limits(self):
        with self.assertRaises(QuestionnaireTypeError):
            limits.MAX_XML_DEPTH = '10'
        with self.assertRaises(QuestionnaireTypeError):
            limits.MAX_XML_ELEMENTS = True
        with self.assertRaises(QuestionnaireValueError):
            limits.MAX_XML_ELEMENTS = 0


if __name__ == '__main__':
    unittest.main()
