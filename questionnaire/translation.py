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
Translation of the diagnostics. Messages are translated when a diagnostic is
created, so a catalog has to be activated before parsing a template. The
package ships an Italian catalog in the `locale/` directory.
"""
import gettext as _gettext
from pathlib import Path
from typing import cast, Iterable, Optional, Union

__all__ = ['LOCALE_DIR', 'DOMAIN', 'activate', 'deactivate', 'get_language', 'gettext']

LOCALE_DIR = Path(__file__).parent.joinpath('locale')
DOMAIN = 'questionnaire'
SOURCE_LANGUAGE = 'en'

_translation: Optional[_gettext.NullTranslations] = None


def activate(languages: Optional[Iterable[str]] = None,
             localedir: Union[None, str, Path] = None,
             fallback: bool = True) -> None:
    """
    Activates the translation of diagnostics.

    :param languages: the language codes in order of preference. If `None` \
    the languages are taken from the environment (LANGUAGE, LC_ALL, \
    LC_MESSAGES and LANG variables).
    :param localedir: an alternative directory of message catalogs.
    :param fallback: if `False` raises an `OSError` when no catalog \
    is found for the languages, otherwise messages are left untranslated.
    """
    global _translation

    if languages is not None:
        # Messages are written in English: the preferences after it are not used
        languages = list(languages)
        for k, language in enumerate(languages):
            if language.replace('_', '-').split('-')[0].lower() == SOURCE_LANGUAGE:
                languages = languages[:k]
                break

        if not languages:
            _translation = _gettext.NullTranslations()
            return

    _translation = _gettext.translation(
        domain=DOMAIN,
        localedir=LOCALE_DIR if localedir is None else localedir,
        languages=languages,
        fallback=fallback,
    )


def deactivate() -> None:
    """Deactivates the translation of diagnostics."""
    global _translation
    _translation = None


def get_language() -> Optional[str]:
    """Returns the language of the active catalog, `None` if no catalog is active."""
    if _translation is None:
        return None
    return _translation.info().get('language')


def gettext(message: str) -> str:
    if _translation is None:
        return message
    return cast(str, _translation.gettext(message))
