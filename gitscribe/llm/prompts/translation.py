"""Translation prompt template and output languages."""

DEFAULT_LANGUAGE = "English"

LANGUAGES = {
    "en": DEFAULT_LANGUAGE,
    "zh-tw": "Traditional Chinese",
    "zh-cn": "Simplified Chinese",
    "ja": "Japanese",
    "pt": "Portuguese",
    "pt-br": "Brazilian Portuguese",
}

TRANSLATION_TEMPLATE = """You are a professional polyglot programmer and translator.
Translate the following text into {output_language}.
Keep the structure, line breaks, bullet points, code identifiers and any
conventional commit prefix (for example "feat:" or "fix:") exactly as they are.
Only output the translated text.

THE TEXT:
{output_message}"""


def get_language(lang_code: str) -> str:
    """Get the language name for a language code.

    Args:
        lang_code: Code such as "en" or "zh-tw".

    Returns:
        The language name, or English if the code is not recognized.
    """
    return LANGUAGES.get((lang_code or "").lower(), DEFAULT_LANGUAGE)
