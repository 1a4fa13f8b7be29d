#!/usr/bin/env python
#
# Copyright (c), 2016-2020, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests of console scripts."""
import unittest
from unittest.mock import patch
import argparse
import io
import logging
import pathlib
import os
import sys

import questionnaire
from questionnaire import translation
from questionnaire.cli import get_loglevel, positive_int, validate

WORK_DIRECTORY = os.getcwd()


class TestConsoleScripts(unittest.TestCase):
    ctx = None

    def run_validate(self, *args):
        with patch.object(sys, 'argv', ['questionnaire-validate'] + list(args)):
            with self.assertRaises(SystemExit) as self.ctx:
                validate()

    def setUp(self):
        templates_dir = pathlib.Path(__file__).parent.joinpath('test_cases/templates/')
        os.chdir(str(templates_dir))

    def tearDown(self):
        os.chdir(WORK_DIRECTORY)

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_01(self, mock_out, mock_err):
        self.run_validate()
        self.assertEqual(mock_out.getvalue(), '')
        self.assertIn("the following arguments are required", mock_err.getvalue())
        self.assertEqual('2', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_02(self, mock_out, mock_err):
        self.run_validate('wine-tasting.xml')
        self.assertEqual(mock_err.getvalue(), '')
        self.assertEqual("wine-tasting.xml is valid\n", mock_out.getvalue())
        self.assertEqual('0', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_03(self, mock_out, mock_err):
        self.run_validate('invalid.xml')
        self.assertEqual(mock_out.getvalue(), '')
        output = mock_err.getvalue().splitlines()
        self.assertEqual(output[0], "invalid.xml is not valid")
        self.assertEqual(len(output), 4)
        self.assertTrue(output[1].startswith("invalid.xml: error: Expected 1 more <title> tag"))
        self.assertEqual('1', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_04(self, mock_out, mock_err):
        self.run_validate('minimal.xml', 'invalid.xml', 'malformed.xml', 'warnings.xml')
        self.assertEqual("minimal.xml is valid\nwarnings.xml is valid\n", mock_out.getvalue())
        self.assertIn("invalid.xml is not valid\n", mock_err.getvalue())
        self.assertIn("malformed.xml is not valid\n", mock_err.getvalue())
        self.assertIn("malformed.xml: error: mismatched tag", mock_err.getvalue())
        self.assertNotIn("warning", mock_err.getvalue())
        self.assertEqual('2', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_05(self, mock_out, mock_err):
        self.run_validate('-v', 'warnings.xml')
        self.assertEqual("warnings.xml is valid\n", mock_out.getvalue())
        output = mock_err.getvalue().splitlines()
        self.assertEqual(len(output), 2)
        self.assertTrue(output[0].startswith("warnings.xml: warning: Text ignored"))
        self.assertEqual('0', str(self.ctx.exception))

        mock_err.seek(0)
        mock_err.truncate()
        self.run_validate('-v', '--no-text-warnings', 'warnings.xml')
        self.assertEqual(len(mock_err.getvalue().splitlines()), 1)

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_06(self, mock_out, mock_err):
        self.run_validate('missing.xml')
        self.assertEqual(mock_out.getvalue(), '')
        self.assertIn("missing.xml is not valid\n", mock_err.getvalue())
        self.assertIn("No such file or directory", mock_err.getvalue())
        self.assertEqual('1', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_07(self, mock_out, mock_err):
        self.run_validate('--dump', 'minimal.xml')
        self.assertEqual(mock_err.getvalue(), '')
        output = mock_out.getvalue().splitlines()
        self.assertEqual(output[0], "minimal.xml is valid")
        self.assertTrue(output[1].startswith('<questionnaire default-lang="en">'))
        self.assertIn('<question id="q1" required="true">', output[1])
        self.assertEqual('0', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_08(self, mock_out, mock_err):
        self.run_validate('--max-depth', '2', 'minimal.xml')
        self.assertIn("Maximum depth of 2 elements exceeded", mock_err.getvalue())
        self.assertEqual('1', str(self.ctx.exception))

        self.run_validate('--max-elements', '0', 'minimal.xml')
        self.assertIn("'0' is not a positive integer", mock_err.getvalue())
        self.assertEqual('2', str(self.ctx.exception))

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_09(self, mock_out, mock_err):
        with open('entities.xml', 'w') as fp:
            fp.write('<!DOCTYPE questionnaire [<!ENTITY t "Demo">]>\n'
                     '<questionnaire><title>&t;</title><section><title>S</title>'
                     '<info/></section></questionnaire>')
        try:
            self.run_validate('entities.xml')
            self.assertIn("entities.xml: error: Entities are forbidden", mock_err.getvalue())
            self.assertEqual('1', str(self.ctx.exception))

            self.run_validate('--no-defuse', 'entities.xml')
            self.assertEqual("entities.xml is valid\n", mock_out.getvalue())
            self.assertEqual('0', str(self.ctx.exception))
        finally:
            os.unlink('entities.xml')

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_validate_command_10(self, mock_out, mock_err):
        self.run_validate('--lang', 'it', 'invalid.xml')
        self.assertIn("invalid.xml: error: Atteso ancora 1 tag <title> (alla riga",
                      mock_err.getvalue())
        self.assertEqual('1', str(self.ctx.exception))
        self.assertIsNone(translation.get_language())

        mock_err.seek(0)
        mock_err.truncate()
        self.run_validate('--lang', 'xx', 'invalid.xml')
        self.assertIn("invalid.xml: error: Expected 1 more <title> tag", mock_err.getvalue())

    @patch('sys.stderr', new_callable=io.StringIO)
    @patch('sys.stdout', new_callable=io.StringIO)
    def test_version(self, mock_out, mock_err):
        self.run_validate('--version')
        self.assertTrue(mock_out.getvalue().endswith(" {}\n".format(questionnaire.__version__)))
        self.assertEqual('0', str(self.ctx.exception))

    def test_get_loglevel(self):
        self.assertEqual(get_loglevel(0), logging.ERROR)
        self.assertEqual(get_loglevel(1), logging.ERROR)
        self.assertEqual(get_loglevel(2), logging.WARNING)
        self.assertEqual(get_loglevel(3), logging.INFO)
        self.assertEqual(get_loglevel(4), logging.DEBUG)

    def test_positive_int(self):
        self.assertEqual(positive_int('10'), 10)
        with self.assertRaises(argparse.ArgumentTypeError):
            positive_int('ten')
        with self.assertRaises(argparse.ArgumentTypeError):
            positive_int('-1')


if __name__ == '__main__':
    unittest.main()
