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
This module contains the parser states, the units of parse progress that are
pushed on the parser stack for each open element of a template.
"""
from typing import Any, Generic, Optional, Protocol, TypeVar, Union, overload

from questionnaire.aliases import AttributesType, StateType
from questionnaire.exceptions import QuestionnaireRuntimeError, QuestionnaireValueError
from questionnaire.translation import gettext as _
from questionnaire.utils.misc import join_items, unique
from questionnaire.utils.xml_builder import XmlBuilder

from .particles import Part
from .properties import AttributeProperty

T = TypeVar('T')
T_co = TypeVar('T_co', covariant=True)


class ParserContext(Protocol):
    """The interface of the parser seen by the states."""
    warn_ignored_text: bool

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ParserState(Generic[T_co]):
    """
    Base class of parser states. The default implementation ignores children
    and text content with a warning.
    """
    def __repr__(self) -> str:
        return '%s()' % self.__class__.__name__

    def state_for(self, ctx: ParserContext, name: str,
                  attributes: AttributesType) -> Optional[StateType]:
        """
        Returns the state for a child element, `None` if the child has to be
        discarded together with its content.
        """
        ctx.warning(_("Tag <{}> ignored").format(name))
        return None

    def begin(self, ctx: ParserContext, name: str, attributes: AttributesType) -> None:
        """Called when the element of the state is opened."""

    def content(self, ctx: ParserContext, text: str) -> None:
        """Called for each chunk of text content of the element."""
        if ctx.warn_ignored_text and text.strip():
            ctx.warning(_("Text ignored"))

    def end(self, ctx: ParserContext, name: str) -> None:
        """Called when the element of the state is closed."""

    def result(self) -> T_co:
        raise NotImplementedError()


class VerbatimParserState(ParserState[str]):
    """
    Collects text and nested markup, re-serializing them into an equivalent
    XML fragment. The same instance handles all the nested elements.
    """
    def __init__(self) -> None:
        self.builder = XmlBuilder()

    def state_for(self, ctx: ParserContext, name: str,
                  attributes: AttributesType) -> 'VerbatimParserState':
        return self

    def begin(self, ctx: ParserContext, name: str, attributes: AttributesType) -> None:
        self.builder.begin_tag(name, attributes.items())

    def content(self, ctx: ParserContext, text: str) -> None:
        self.builder.content(text)

    def end(self, ctx: ParserContext, name: str) -> None:
        self.builder.end_tag()

    def has_content(self) -> bool:
        return not self.builder.is_empty()

    def result(self) -> str:
        return self.builder.characters


class FallbackVerbatim:
    """
    Declares the collection of the content that is not matched by any part,
    as a verbatim XML fragment. From a state instance the attribute is the
    collected fragment, or `None` if no fallback content was found.

    :param exclusive: if `True` the fallback content is valid only if \
    there is no other content.
    """
    def __init__(self, exclusive: bool) -> None:
        self.exclusive = exclusive

    def __repr__(self) -> str:
        return '%s(exclusive=%r)' % (self.__class__.__name__, self.exclusive)

    @overload
    def __get__(self, instance: None, owner: type[Any]) -> 'FallbackVerbatim': ...

    @overload
    def __get__(self, instance: 'SequenceParserState[Any]', owner: type[Any]) \
        -> Optional[str]: ...

    def __get__(self, instance: Optional['SequenceParserState[Any]'], owner: type[Any]) \
            -> Union['FallbackVerbatim', Optional[str]]:
        if instance is None:
            return self
        elif not instance.verbatim.has_content():
            return None
        return instance.verbatim.result()


class AttributeParserState(ParserState[T_co]):
    """
    A parser state with typed attribute properties, that are bound in
    declaration order when the element is opened.
    """
    properties: tuple[AttributeProperty[Any], ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.properties = cls.properties + tuple(
            v for v in cls.__dict__.values() if isinstance(v, AttributeProperty)
        )

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def begin(self, ctx: ParserContext, name: str, attributes: AttributesType) -> None:
        if self.values:
            raise QuestionnaireRuntimeError(_("{!r} properties are already bound").format(self))
        for prop in self.properties:
            self.values[prop.attr_name] = prop.bind(ctx, attributes)


class SequenceParserState(AttributeParserState[T_co]):
    """
    A parser state that matches the children against an ordered sequence of
    parts, reporting the violations of the occurrence constraints.
    """
    parts: tuple[Part[Any], ...] = ()
    fallback_exclusive: Optional[bool] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.parts = cls.parts + tuple(
            v for v in cls.__dict__.values() if isinstance(v, Part)
        )
        fallbacks = [v for v in cls.__dict__.values() if isinstance(v, FallbackVerbatim)]
        if fallbacks:
            cls.fallback_exclusive = fallbacks[-1].exclusive

    def __init__(self) -> None:
        super().__init__()
        self._parts = [p.copy() for p in self.parts]
        self.next_part = 0
        self.parts_empty = True
        self.verbatim = VerbatimParserState()

    def get_part(self, part: Part[Any]) -> Part[Any]:
        """Returns the working copy of a declared part."""
        for p in self._parts:
            if p.name == part.name:
                return p
        raise QuestionnaireValueError(_("{!r} is not a part of {!r}").format(part, self))

    def _new_part_state(self, index: int, name: str) -> StateType:
        self.parts_empty = False
        return self._parts[index].add_state(name)

    def state_for(self, ctx: ParserContext, name: str,
                  attributes: AttributesType) -> Optional[StateType]:
        # The child may belong to a part after the current one, because
        # the current is for a different tag or is full. Skipping parts
        # may violate their minimum occurrences.
        parts = self._parts
        if self.next_part >= len(parts):
            if self.fallback_exclusive is not None:
                return self.verbatim

            ctx.error(_("No more tags expected, but got <{}>").format(name))
            return None

        current = parts[self.next_part]
        if current.match(name) and current.can_fit_one_more():
            return self._new_part_state(self.next_part, name)

        index = self.next_part + 1
        while index < len(parts) and not parts[index].match(name):
            index += 1

        if index >= len(parts):
            if self.fallback_exclusive is not None:
                return self.verbatim

            possible_tags: list[str] = []
            for part in parts[self.next_part:]:
                if part.can_fit_one_more():
                    possible_tags.extend(part.possible_tags())
                if not part.is_satisfied():
                    break

            if not possible_tags:
                self.next_part = len(parts)
                ctx.error(_("No more tags expected, but got <{}>").format(name))
                return None

            msg = _("Unexpected tag <{}>, waiting for: {}")
            tags = join_items(unique(possible_tags), '<', '>', last_separator=_(' or '))
            ctx.error(msg.format(name, tags))
            return None

        self.check_satisfied(ctx, self.next_part, index)
        self.next_part = index
        return self._new_part_state(index, name)

    def check_satisfied(self, ctx: ParserContext, start: int, stop: int) -> None:
        """Reports the parts in the range that are below their minimum occurrences."""
        for part in self._parts[start:stop]:
            if not part.is_satisfied():
                missing = part.missing()
                tags = join_items(part.possible_tags(), '<', '>', last_separator=_(' or '))
                if missing == 1:
                    msg = _("Expected {} more {} tag").format(missing, tags)
                else:
                    msg = _("Expected {} more {} tags").format(missing, tags)
                ctx.error(msg)

    def content(self, ctx: ParserContext, text: str) -> None:
        if self.fallback_exclusive is None:
            super().content(ctx, text)
        else:
            self.verbatim.content(ctx, text)

    def end(self, ctx: ParserContext, name: str) -> None:
        if self.fallback_exclusive \
                and self.verbatim.has_content():
            if not self.parts_empty:
                tags = unique(t for p in self._parts for t in p.possible_tags())
                if len(tags) == 1:
                    msg = _("Mixing fallback content with tag {} is not allowed")
                else:
                    msg = _("Mixing fallback content with tags {} is not allowed")
                ctx.error(msg.format(join_items(tags, '<', '>', last_separator=_(' or '))))
            return

        self.check_satisfied(ctx, self.next_part, len(self._parts))


class RootParserState(ParserState[T]):
    """
    The bottom state of the parser stack, that accepts only the root element.

    :param root_tag: the expected tag of the root element.
    :param root_state: the state of the root element.
    """
    def __init__(self, root_tag: str, root_state: ParserState[T]) -> None:
        self.root_tag = root_tag
        self.root_state = root_state

    def __repr__(self) -> str:
        return '%s(%r, %r)' % (self.__class__.__name__, self.root_tag, self.root_state)

    def state_for(self, ctx: ParserContext, name: str,
                  attributes: AttributesType) -> Optional[StateType]:
        if name.lower() == self.root_tag.lower():
            return self.root_state

        ctx.error(_("Invalid root tag <{}>, expected <{}>").format(name, self.root_tag))
        return None

    def begin(self, ctx: ParserContext, name: str, attributes: AttributesType) -> None:
        raise QuestionnaireRuntimeError(_("the root state can't begin"))

    def end(self, ctx: ParserContext, name: str) -> None:
        raise QuestionnaireRuntimeError(_("the root state can't end"))

    def result(self) -> T:
        return self.root_state.result()
