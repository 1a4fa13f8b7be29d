#
# Copyright (c), 2016-2021, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from collections.abc import Mapping
from typing import Any, Generic, Optional, TYPE_CHECKING, TypeVar, Union, overload

from questionnaire.exceptions import QuestionnaireValueError, QuestionnaireTypeError
from questionnaire.aliases import StateFactoryType, StateType
from questionnaire.translation import gettext as _

if TYPE_CHECKING:
    from .states import SequenceParserState

T = TypeVar('T')


class Part(Generic[T]):
    """
    A rule for one position in the ordered sequence of the children of an element.
    A part accepts a set of alternative tags, each one with its own state factory,
    and counts the occurrences of accepted children.

    Instances declared in the body of a `SequenceParserState` subclass are
    templates: each state instance works on its own copies. Accessing the
    attribute from a state instance returns the results of the children
    matched by the part.

    :param builders: a mapping from tag names to parser state factories.
    :param min_occurs: the minimum number of occurrences. Defaults to 0.
    :param max_occurs: the maximum number of occurrences, `None` means unbounded.
    :param exclusive: if `True` the part commits to the first accepted tag, \
    subsequent occurrences must have the same tag.
    """
    name: Optional[str] = None
    states: list[StateType]
    committed: Optional[int]

    def __init__(self, builders: Mapping[str, StateFactoryType],
                 min_occurs: int = 0,
                 max_occurs: Optional[int] = None,
                 exclusive: bool = False) -> None:
        if not builders:
            raise QuestionnaireValueError(_("a part must accept at least one tag"))
        elif not isinstance(min_occurs, int) or \
                max_occurs is not None and not isinstance(max_occurs, int):
            raise QuestionnaireTypeError(_("occurrence limits must be integers"))
        elif min_occurs < 0:
            raise QuestionnaireValueError(_("minOccurs value must be a non negative integer"))
        elif max_occurs is not None and max_occurs < min_occurs:
            raise QuestionnaireValueError(_("minOccurs must be lesser or equal than maxOccurs"))

        self.builders = dict(builders)
        self.tags = tuple(builders)
        self._lower_tags = tuple(t.lower() for t in self.tags)
        self.min_occurs = min_occurs
        self.max_occurs = max_occurs
        self.exclusive = exclusive
        self.states = []
        self.committed = None

    def __repr__(self) -> str:
        return '%s(tags=%r, occurs=%r, exclusive=%r)' % (
            self.__class__.__name__, self.tags, self.occurs, self.exclusive
        )

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type[Any]) -> 'Part[T]': ...

    @overload
    def __get__(self, instance: 'SequenceParserState[Any]', owner: type[Any]) -> list[T]: ...

    def __get__(self, instance: Optional['SequenceParserState[Any]'], owner: type[Any]) \
            -> Union['Part[T]', list[T]]:
        if instance is None:
            return self
        return instance.get_part(self).results()

    def copy(self) -> 'Part[T]':
        """Returns a new part with the same declaration and no occurrences."""
        part: Part[T] = Part(self.builders, self.min_occurs, self.max_occurs, self.exclusive)
        part.name = self.name
        return part

    @property
    def occurs(self) -> tuple[int, Optional[int]]:
        return self.min_occurs, self.max_occurs

    @property
    def count(self) -> int:
        return len(self.states)

    def tag_index(self, tag: str) -> int:
        try:
            return self._lower_tags.index(tag.lower())
        except ValueError:
            return -1

    def possible_tags(self) -> list[str]:
        """The tags that are still admitted by the part."""
        if self.committed is None:
            return list(self.tags)
        return [self.tags[self.committed]]

    def match(self, tag: str) -> bool:
        """
        Returns `True` if the tag is accepted by the part, regardless of the
        occurrences. An exclusive part that is committed to a different tag
        doesn't match.
        """
        index = self.tag_index(tag)
        if index < 0:
            return False
        return self.committed is None or index == self.committed

    def can_fit_one_more(self) -> bool:
        return self.max_occurs is None or len(self.states) < self.max_occurs

    def is_satisfied(self) -> bool:
        """Tests if the minimum occurrences have been reached."""
        return len(self.states) >= self.min_occurs

    def missing(self) -> int:
        return max(self.min_occurs - len(self.states), 0)

    def add_state(self, tag: str) -> StateType:
        """Creates and registers a new state for a child matched by the part."""
        index = self.tag_index(tag)
        if index < 0:
            msg = _("tag {!r} is not accepted by {!r}").format(tag, self)
            raise QuestionnaireValueError(msg)

        if self.exclusive:
            self.committed = index
        state = self.builders[self.tags[index]]()
        self.states.append(state)
        return state

    def results(self) -> list[T]:
        return [state.result() for state in self.states]


def tag(name: str, min_occurs: int = 0, max_occurs: Optional[int] = None, *,
        builder: StateFactoryType) -> Part[Any]:
    """Declares a part that accepts a single tag."""
    return Part({name: builder}, min_occurs, max_occurs)


def group(builders: Mapping[str, StateFactoryType],
          min_occurs: int = 0,
          max_occurs: Optional[int] = None,
          exclusive: bool = False) -> Part[Any]:
    """
    Declares a part that accepts a group of alternative tags.

    :param exclusive: only one variant is possible, using one disables all others.
    """
    return Part(builders, min_occurs, max_occurs, exclusive)
