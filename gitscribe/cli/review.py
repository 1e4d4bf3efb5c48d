"""CLI command for reviewing staged changes."""

from typing import Optional

import typer

from gitscribe import global_config
from gitscribe.git import GitError, NoStagedChangesError
from gitscribe.llm import LLMError, get_provider
from gitscribe.llm.prompts import CODE_REVIEW, render_prompt
from gitscribe.templates import TemplateError
from gitscribe.cli.utils import build_git_command, effective_lang, load_settings


def review_command(
    prompt_only: bool = typer.Option(
        False,
        "--prompt-only",
        help="Show the prompt that would be sent to the LLM and exit",
    ),
    amend: bool = typer.Option(
        False,
        "--amend",
        help="Review the last commit (HEAD^..HEAD) instead of the index",
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
) -> None:
    """Ask the LLM for a code review of the staged changes."""
    load_settings()

    try:
        git = build_git_command(diff_unified, exclude_list, amend)
        diff = git.diff_files()

        if prompt_only:
            typer.echo(render_prompt(CODE_REVIEW, file_diffs=diff))
            raise typer.Exit(0)

        provider = get_provider(model=model)
        typer.echo(f"Reviewing staged changes with {provider.model}...", err=True)

        review = provider.review_diff(diff).content.strip()

        output_lang = effective_lang(lang)
        if output_lang != "en":
            review = provider.translate(review, output_lang).content.strip()

        typer.echo(review)

    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except (LLMError, TemplateError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
