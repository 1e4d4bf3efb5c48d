"""CLI command for generating a commit message and committing."""

import logging
from pathlib import Path
from typing import Optional

import typer

from gitscribe import global_config
from gitscribe.git import GitError, NoStagedChangesError
from gitscribe.llm import LLMError, get_provider
from gitscribe.llm.prompts import SUMMARIZE_FILE_DIFF, render_prompt
from gitscribe.templates import (
    SUMMARIZE_MESSAGE_KEY,
    SUMMARIZE_PREFIX_KEY,
    SUMMARIZE_TITLE_KEY,
    TemplateError,
    load_template_vars_file,
    parse_template_vars,
    render_template,
    resolve_commit_template,
)
from gitscribe.cli.utils import (
    build_git_command,
    effective_lang,
    get_message_file,
    load_settings,
    write_message_file,
)

logger = logging.getLogger(__name__)


def commit_command(
    preview: bool = typer.Option(
        False,
        "--preview",
        help="Only write and show the commit message, do not commit",
    ),
    prompt_only: bool = typer.Option(
        False,
        "--prompt-only",
        help="Show the prompt that would be sent to the LLM and exit",
    ),
    amend: bool = typer.Option(
        False,
        "--amend",
        help="Describe the last commit (HEAD^..HEAD) and amend it",
    ),
    diff_unified: Optional[int] = typer.Option(
        None,
        "--diff-unified",
        help="Lines of context in the diff (default: git.diff_unified or 3)",
    ),
    exclude_list: Optional[list[str]] = typer.Option(
        None,
        "--exclude-list",
        help="Extra file patterns to leave out of the diff (comma-separated, repeatable)",
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        help="Output language code (en, zh-tw, zh-cn, ja, pt, pt-br)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Override the configured model",
    ),
    file: Optional[str] = typer.Option(
        None,
        "--file",
        help="Write the commit message to this file",
    ),
    template_file: Optional[str] = typer.Option(
        None,
        "--template-file",
        help="Template file for the commit message",
    ),
    template_string: Optional[str] = typer.Option(
        None,
        "--template-string",
        help="Template string for the commit message",
    ),
    template_vars: Optional[list[str]] = typer.Option(
        None,
        "--template-vars",
        help="Extra template variables as KEY=value (repeatable)",
    ),
    template_vars_file: Optional[Path] = typer.Option(
        None,
        "--template-vars-file",
        help="File with extra template variables as KEY=value lines",
    ),
    no_confirm: bool = typer.Option(
        False,
        "--no-confirm",
        help="Commit without asking for confirmation",
    ),
) -> None:
    """Generate a commit message for the staged changes and commit them."""
    load_settings()

    try:
        git = build_git_command(diff_unified, exclude_list, amend)
        diff = git.diff_files()

        if prompt_only:
            typer.echo(render_prompt(SUMMARIZE_FILE_DIFF, file_diffs=diff))
            raise typer.Exit(0)

        git_settings = global_config.get_git_settings()
        template = resolve_commit_template(
            template_file or git_settings["template_file"],
            template_string or git_settings["template_string"],
        )

        data = {}
        if template_vars_file:
            data.update(load_template_vars_file(template_vars_file))
        data.update(parse_template_vars(template_vars))

        provider = get_provider(model=model)
        typer.echo(f"Summarizing staged changes with {provider.model}...", err=True)

        summary = provider.summarize_diff(diff)
        summary_points = summary.content.strip()
        title = provider.summarize_title(summary_points)
        prefix = provider.get_summary_prefix(summary_points)

        data[SUMMARIZE_PREFIX_KEY] = prefix.content
        data[SUMMARIZE_TITLE_KEY] = title.content
        data[SUMMARIZE_MESSAGE_KEY] = summary_points
        message = render_template(template, data)

        total_tokens = summary.total_tokens + title.total_tokens + prefix.total_tokens

        output_lang = effective_lang(lang)
        if output_lang != "en":
            translated = provider.translate(message, output_lang)
            message = translated.content.strip() + "\n"
            total_tokens += translated.total_tokens

        logger.info("Used %d tokens with %s", total_tokens, provider.model)

        message_file = get_message_file(file)
        write_message_file(message_file, message)

        typer.echo("")
        typer.echo("=" * 60)
        typer.echo(message.rstrip("\n"))
        typer.echo("=" * 60)

        if preview:
            typer.echo(f"Commit message written to {message_file}", err=True)
            raise typer.Exit(0)

        if not no_confirm and not typer.confirm("Commit with this message?", default=True):
            typer.echo("Commit cancelled.", err=True)
            raise typer.Exit(0)

        typer.echo(git.commit(message))

    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except (TemplateError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Error: failed to write commit message: {e}", err=True)
        raise typer.Exit(1)
