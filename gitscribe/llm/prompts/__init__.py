"""LLM prompt templates for commit messages and code reviews.

This package contains all prompt templates used by gitscribe:
- system: The shared system prompt for all providers
- summarize: Diff summary and pull request title prompts
- conventional: Conventional commit prefix prompt
- review: Code review prompt
- translation: Translation prompt and supported output languages
- loader: Prompt folder overrides and rendering
"""

from gitscribe.llm.prompts.system import SYSTEM_PROMPT
from gitscribe.llm.prompts.summarize import (
    SUMMARIZE_FILE_DIFF_TEMPLATE,
    SUMMARIZE_TITLE_TEMPLATE,
)
from gitscribe.llm.prompts.conventional import (
    CONVENTIONAL_COMMIT_TEMPLATE,
    CONVENTIONAL_PREFIXES,
)
from gitscribe.llm.prompts.review import CODE_REVIEW_TEMPLATE
from gitscribe.llm.prompts.translation import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    TRANSLATION_TEMPLATE,
    get_language,
)
from gitscribe.llm.prompts.loader import (
    CODE_REVIEW,
    CONVENTIONAL_COMMIT,
    DEFAULT_PROMPTS,
    SUMMARIZE_FILE_DIFF,
    SUMMARIZE_TITLE,
    TRANSLATION,
    get_prompt,
    get_prompt_folder,
    render_prompt,
    save_default_prompts,
)


__all__ = [
    # System prompt
    "SYSTEM_PROMPT",
    # Commit message prompts
    "SUMMARIZE_FILE_DIFF_TEMPLATE",
    "SUMMARIZE_TITLE_TEMPLATE",
    "CONVENTIONAL_COMMIT_TEMPLATE",
    "CONVENTIONAL_PREFIXES",
    # Review prompt
    "CODE_REVIEW_TEMPLATE",
    # Translation
    "TRANSLATION_TEMPLATE",
    "DEFAULT_LANGUAGE",
    "LANGUAGES",
    "get_language",
    # Prompt folder
    "SUMMARIZE_FILE_DIFF",
    "SUMMARIZE_TITLE",
    "CONVENTIONAL_COMMIT",
    "CODE_REVIEW",
    "TRANSLATION",
    "DEFAULT_PROMPTS",
    "get_prompt",
    "get_prompt_folder",
    "render_prompt",
    "save_default_prompts",
]
