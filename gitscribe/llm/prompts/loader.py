"""User-overridable prompt templates.

Every prompt has a file name. A file with that name in the prompt folder
(prompt.folder in config.yaml, default ~/.config/gitscribe/prompt) replaces
the built-in text. Overrides use the same ``{name}`` placeholders as the
built-in prompts.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from gitscribe import global_config
from gitscribe.llm.prompts.conventional import CONVENTIONAL_COMMIT_TEMPLATE
from gitscribe.llm.prompts.review import CODE_REVIEW_TEMPLATE
from gitscribe.llm.prompts.summarize import (
    SUMMARIZE_FILE_DIFF_TEMPLATE,
    SUMMARIZE_TITLE_TEMPLATE,
)
from gitscribe.llm.prompts.translation import TRANSLATION_TEMPLATE
from gitscribe.templates import TemplateError, render_template

logger = logging.getLogger(__name__)

SUMMARIZE_FILE_DIFF = "summarize_file_diff.tmpl"
SUMMARIZE_TITLE = "summarize_title.tmpl"
CONVENTIONAL_COMMIT = "conventional_commit.tmpl"
CODE_REVIEW = "code_review.tmpl"
TRANSLATION = "translation.tmpl"

DEFAULT_PROMPTS = {
    SUMMARIZE_FILE_DIFF: SUMMARIZE_FILE_DIFF_TEMPLATE,
    SUMMARIZE_TITLE: SUMMARIZE_TITLE_TEMPLATE,
    CONVENTIONAL_COMMIT: CONVENTIONAL_COMMIT_TEMPLATE,
    CODE_REVIEW: CODE_REVIEW_TEMPLATE,
    TRANSLATION: TRANSLATION_TEMPLATE,
}


def get_prompt_folder() -> Path:
    """Get the folder holding user prompt overrides.

    Returns:
        prompt.folder from config.yaml, or ~/.config/gitscribe/prompt.
    """
    folder = global_config.get_value("prompt.folder")
    if folder:
        return Path(str(folder)).expanduser()
    return global_config.get_global_config_dir() / "prompt"


def get_prompt(name: str) -> str:
    """Get the text of a prompt, preferring the user's override.

    Args:
        name: One of the DEFAULT_PROMPTS file names.

    Returns:
        The prompt template text.

    Raises:
        KeyError: If name is not a known prompt.
        TemplateError: If the override exists but cannot be read.
    """
    default = DEFAULT_PROMPTS[name]
    override = get_prompt_folder() / name

    if not override.is_file():
        return default

    try:
        text = override.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Failed to read prompt {override}: {e}") from e

    logger.debug("Using prompt override %s", override)
    return text


def render_prompt(name: str, **data: str) -> str:
    """Render a prompt with its placeholder values.

    Raises:
        TemplateError: If the prompt references an unknown placeholder.
    """
    return render_template(get_prompt(name), data)


def save_default_prompts(folder: Optional[Path] = None) -> List[Path]:
    """Write the built-in prompts into the prompt folder.

    Existing files are overwritten. Files are created with 0600 permissions.

    Args:
        folder: Target folder. Defaults to get_prompt_folder().

    Returns:
        Paths of the written files.

    Raises:
        OSError: If the folder or a file cannot be written.
    """
    folder = folder or get_prompt_folder()
    folder.mkdir(parents=True, exist_ok=True)

    written = []
    for name, text in DEFAULT_PROMPTS.items():
        target = folder / name
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        written.append(target)
    return written
