"""Commit message templates.

The final commit message is rendered from a template with ``{name}``
placeholders. The LLM fills summarize_prefix, summarize_title and
summarize_message; users can add their own variables with --template-vars
or --template-vars-file.
"""

from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values


SUMMARIZE_PREFIX_KEY = "summarize_prefix"
SUMMARIZE_TITLE_KEY = "summarize_title"
SUMMARIZE_MESSAGE_KEY = "summarize_message"

COMMIT_MESSAGE_TEMPLATE = """{summarize_prefix}: {summarize_title}

{summarize_message}
"""


class TemplateError(Exception):
    """Raised when a commit message template cannot be rendered."""

    pass


def render_template(template: str, data: Mapping[str, str]) -> str:
    """Render a template with ``{name}`` placeholders.

    Args:
        template: The template text.
        data: Values for the placeholders.

    Returns:
        The rendered text.

    Raises:
        TemplateError: If a placeholder has no value or the template is malformed.
    """
    try:
        return template.format_map(dict(data))
    except KeyError as e:
        raise TemplateError(f"Template variable {e} is not defined")
    except (IndexError, ValueError) as e:
        raise TemplateError(f"Invalid template: {e}")


def parse_template_vars(items: Optional[list[str]]) -> dict[str, str]:
    """Parse KEY=value pairs given on the command line.

    Items without "=" are ignored.

    Args:
        items: Strings such as ["ticket=PROJ-1", "team=core"].

    Returns:
        Dictionary of template variables.
    """
    variables = {}
    for item in items or []:
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        key = key.strip()
        if key:
            variables[key] = value.strip()
    return variables


def load_template_vars_file(path: Path) -> dict[str, str]:
    """Load template variables from a dotenv-style file.

    Args:
        path: Path to a file with KEY=value lines.

    Returns:
        Dictionary of template variables.

    Raises:
        TemplateError: If the file does not exist.
    """
    if not path.is_file():
        raise TemplateError(f"Template variables file not found: {path}")
    return {key: value or "" for key, value in dotenv_values(path).items()}


def resolve_commit_template(
    template_file: Optional[str] = None,
    template_string: Optional[str] = None,
) -> str:
    """Pick the template used for the final commit message.

    A template file wins over a template string; without either the
    built-in COMMIT_MESSAGE_TEMPLATE is used.

    Raises:
        TemplateError: If the template file cannot be read.
    """
    if template_file:
        try:
            return Path(template_file).read_text()
        except OSError as e:
            raise TemplateError(f"Failed to read template file {template_file}: {e}")
    if template_string:
        return template_string
    return COMMIT_MESSAGE_TEMPLATE
