#
# Copyright (c), 2016-2020, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
# mypy: ignore-errors
"""Command Line Interface"""
import sys
import os
import argparse
import logging

import questionnaire
from questionnaire import parse_template, translation, ParserSettings

PROGRAM_NAME = os.path.basename(sys.argv[0])

MAX_EXIT_STATUS = 255


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("%r is not an integer" % value) from None

    if number < 1:
        raise argparse.ArgumentTypeError("%r is not a positive integer" % value)
    return number


def get_loglevel(verbosity):
    if verbosity <= 1:
        return logging.ERROR
    elif verbosity == 2:
        return logging.WARNING
    elif verbosity == 3:
        return logging.INFO
    else:
        return logging.DEBUG


def validate_files(args, settings, loglevel):
    tot_invalid = 0
    for filepath in args.files:
        try:
            result = parse_template(filepath, settings, loglevel=loglevel)
        except questionnaire.QuestionnaireException as err:
            tot_invalid += 1
            sys.stderr.write(f"{filepath}: {err}\n")
            continue

        if args.verbosity > 0:
            for warning in result.warnings:
                sys.stderr.write(f"{filepath}: warning: {warning}\n")

        if not result.errors:
            sys.stdout.write(f"{filepath} is valid\n")
        else:
            tot_invalid += 1
            sys.stderr.write(f"{filepath} is not valid\n")
            for error in result.errors:
                sys.stderr.write(f"{filepath}: error: {error}\n")

        if args.dump:
            sys.stdout.write(f"{result.value.to_xml()}\n")

    return tot_invalid


def validate():
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=True,
                                     description="validate a set of questionnaire templates.")
    parser.usage = "%(prog)s [OPTION]... [FILE]...\n" \
                   "Try '%(prog)s --help' for more information."
    parser.add_argument('-v', dest='verbosity', action='count', default=0,
                        help="increase output verbosity, warnings are "
                             "reported from the first level.")
    parser.add_argument('--dump', action='store_true', default=False,
                        help="write the parsed templates to standard output.")
    parser.add_argument('--no-defuse', dest='defuse', action='store_false', default=True,
                        help="allow entity declarations in templates.")
    parser.add_argument('--max-depth', type=positive_int, default=None, metavar='N',
                        help="maximum depth of the elements of a template.")
    parser.add_argument('--max-elements', type=positive_int, default=None, metavar='N',
                        help="maximum number of elements of a template.")
    parser.add_argument('--no-text-warnings', dest='warn_ignored_text',
                        action='store_false', default=True,
                        help="don't report text found in elements without text content.")
    parser.add_argument('--lang', metavar='LANGUAGE', default=None,
                        help="the language of the diagnostics, if a catalog is available.")
    parser.add_argument('--version', action='version',
                        version="%(prog)s {}".format(questionnaire.__version__))
    parser.add_argument('files', metavar='[TEMPLATE_FILE ...]', nargs='+',
                        help="template files to be validated.")

    args = parser.parse_args()

    settings = ParserSettings(
        defuse=args.defuse,
        max_depth=args.max_depth,
        max_elements=args.max_elements,
        warn_ignored_text=args.warn_ignored_text,
    )
    loglevel = get_loglevel(args.verbosity)
    if args.lang is not None:
        translation.activate([args.lang])

    try:
        tot_invalid = validate_files(args, settings, loglevel)
    finally:
        if args.lang is not None:
            translation.deactivate()

    sys.exit(min(tot_invalid, MAX_EXIT_STATUS))
