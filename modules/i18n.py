"""
Internationalization (i18n) Module

Provides the string resources of the ordering wizard (screen titles,
button labels, checkout labels, flash messages).

Supported languages:
- English (en)
- German (de)

Usage in templates:
    {{ _('screens.choose_entree') }}

Usage in Python:
    from modules.i18n import translate
    title = translate(Screen.ENTREE.title_key, lang='de')
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional

from logging_config import get_logger

logger = get_logger(__name__)

# Supported languages
SUPPORTED_LANGUAGES = {
    'en': {'name': 'English', 'flag_emoji': 'US'},
    'de': {'name': 'Deutsch', 'flag_emoji': 'DE'},
}

DEFAULT_LANGUAGE = 'en'


class I18nManager:
    """Manages translation loading and lookup."""

    def __init__(self, translations_dir: Optional[Path] = None):
        """
        Initialize i18n manager.

        Args:
            translations_dir: Path to translations directory.
                            Defaults to ./translations relative to the project root.
        """
        if translations_dir is None:
            translations_dir = Path(__file__).parent.parent / 'translations'

        self.translations_dir = translations_dir
        self._translations: Dict[str, Dict[str, Any]] = {}
        self._load_all_translations()

    def _load_all_translations(self) -> None:
        """Load all translation files from translations directory."""
        if not self.translations_dir.exists():
            logger.warning(f"Translations directory not found: {self.translations_dir}")
            return

        for lang_code in SUPPORTED_LANGUAGES.keys():
            self._load_translation(lang_code)

    def _load_translation(self, lang_code: str) -> None:
        """
        Load translation file for a specific language.

        Args:
            lang_code: Language code (e.g., 'en', 'de')
        """
        translation_file = self.translations_dir / f'{lang_code}.json'

        if not translation_file.exists():
            logger.warning(
                f"Translation file not found: {translation_file}. "
                f"Using empty translations for {lang_code}."
            )
            self._translations[lang_code] = {}
            return

        try:
            with open(translation_file, 'r', encoding='utf-8') as f:
                self._translations[lang_code] = json.load(f)
            logger.info(
                f"Loaded {len(self._translations[lang_code])} translation sections "
                f"for language: {lang_code}"
            )
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse translation file {translation_file}: {e}")
            self._translations[lang_code] = {}

    def get_translation(
        self,
        key: str,
        lang: str = DEFAULT_LANGUAGE,
        **kwargs
    ) -> str:
        """
        Get translated string for a key.

        Supports nested keys using dot notation: 'section.key'
        Supports variable substitution: translate('flash.item_selected', name='Cauliflower')

        Args:
            key: Translation key (supports dot notation)
            lang: Language code
            **kwargs: Variables for string formatting

        Returns:
            Translated string, or key if translation not found
        """
        if lang not in self._translations:
            lang = DEFAULT_LANGUAGE

        value: Any = self._translations.get(lang, {})
        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                value = None
                break

        if value is None and lang != DEFAULT_LANGUAGE:
            return self.get_translation(key, DEFAULT_LANGUAGE, **kwargs)

        if not isinstance(value, str):
            logger.debug(f"Translation key not found: {key} (lang: {lang})")
            return key  # Return key as fallback

        if kwargs:
            try:
                return value.format(**kwargs)
            except KeyError as e:
                logger.warning(f"Missing variable in translation: {e} (key: {key}, lang: {lang})")
                return value
        return value

    def is_language_supported(self, lang_code: str) -> bool:
        return lang_code in SUPPORTED_LANGUAGES


# Global i18n manager instance
i18n_manager = I18nManager()


def translate(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Translate a key to the specified language.

    Example:
        >>> translate('screens.choose_entree', lang='en')
        'Choose Entree'
    """
    return i18n_manager.get_translation(key, lang, **kwargs)


def get_supported_languages() -> Dict[str, Dict[str, str]]:
    """Dict mapping language codes to language metadata."""
    return SUPPORTED_LANGUAGES


# Flask template filter
def create_translation_filter(current_language: str):
    """
    Create a translation function bound to the session language.

    Usage in Flask:
        @app.context_processor
        def inject_translator():
            lang = session.get('language', 'en')
            return {'_': create_translation_filter(lang)}
    """
    def translation_filter(key: str, **kwargs) -> str:
        return translate(key, lang=current_language, **kwargs)

    return translation_filter
