#
# Copyright (c), 2016-2024, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from collections.abc import Iterable


def join_items(items: Iterable[str],
               prefix: str = '',
               suffix: str = '',
               separator: str = ', ',
               last_separator: str = ', ') -> str:
    """
    Joins a sequence of strings wrapping each item with a prefix and a suffix
    and using a different separator before the last item.

    >>> join_items(['a', 'b', 'c'], '<', '>', last_separator=' or ')
    '<a>, <b> or <c>'
    """
    chunks = [f'{prefix}{item}{suffix}' for item in items]
    if len(chunks) <= 1:
        return ''.join(chunks)
    return separator.join(chunks[:-1]) + last_separator + chunks[-1]


def unique(items: Iterable[str]) -> list[str]:
    """Returns the items without duplicates, preserving the order."""
    return list(dict.fromkeys(items))
