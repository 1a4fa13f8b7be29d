#
# Copyright (c), 2021, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
Type aliases for static typing analysis. In a type checking context the aliases
are defined from effective classes imported from package modules.
"""
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, BinaryIO, TYPE_CHECKING, Union

__all__ = ['AttributesType', 'StateType', 'StateFactoryType', 'SourceType']

if TYPE_CHECKING:
    from questionnaire.validators.states import ParserState

##
# Attributes of an open tag, keyed by the qualified name
AttributesType = Mapping[str, str]

##
# Element parser states
if TYPE_CHECKING:
    StateType = ParserState[Any]
else:
    StateType = Any

StateFactoryType = Callable[[], StateType]

##
# Template sources: XML data, a file path or a binary file-like object
SourceType = Union[bytes, str, Path, BinaryIO]
