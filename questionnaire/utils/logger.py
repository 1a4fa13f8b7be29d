#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Logging helpers of the package, that logs to the 'questionnaire' logger."""
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any, TypeVar, Union

from questionnaire.exceptions import QuestionnaireValueError
from questionnaire.translation import gettext as _

logger = logging.getLogger('questionnaire')

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}

RT = TypeVar('RT')


def get_loglevel(level: Union[str, int]) -> int:
    """Returns the numeric logging level for a level name or number."""
    if isinstance(level, int):
        return level

    try:
        return LOG_LEVELS[level.strip().upper()]
    except (KeyError, AttributeError):
        raise QuestionnaireValueError(_("{!r} is not a valid loglevel").format(level)) from None


def set_logging_level(level: Union[str, int]) -> None:
    """Sets the logging level of the package logger."""
    logger.setLevel(get_loglevel(level))


@contextmanager
def logging_level(level: Union[str, int]) -> Iterator[None]:
    """Sets the logging level of the package logger for the duration of a block."""
    previous = logger.level
    logger.setLevel(get_loglevel(level))
    try:
        yield
    finally:
        logger.setLevel(previous)


def logged(func: Callable[..., RT]) -> Callable[..., RT]:
    """
    Adds an optional *loglevel* keyword argument to the decorated function,
    that sets the logging level of the package during the call.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> RT:
        loglevel = kwargs.pop('loglevel', None)
        if loglevel is None:
            return func(*args, **kwargs)

        with logging_level(loglevel):
            return func(*args, **kwargs)

    return wrapper
