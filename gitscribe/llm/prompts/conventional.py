"""Conventional commit prefix prompt template.

The model answers with a single prefix word taken from CONVENTIONAL_PREFIXES.
"""

CONVENTIONAL_PREFIXES = [
    "build",
    "chore",
    "ci",
    "docs",
    "feat",
    "fix",
    "perf",
    "refactor",
    "style",
    "test",
]

CONVENTIONAL_COMMIT_TEMPLATE = """You are an expert programmer, and you are trying to classify a set of changes
with a Conventional Commits prefix.

Choose exactly one of the following prefixes:
- build: Changes that affect the build system or external dependencies
- chore: Maintenance tasks that do not modify src or test files
- ci: Changes to CI configuration files and scripts
- docs: Documentation only changes
- feat: A new feature
- fix: A bug fix
- perf: A code change that improves performance
- refactor: A code change that neither fixes a bug nor adds a feature
- style: Changes that do not affect the meaning of the code (white-space, formatting)
- test: Adding missing tests or correcting existing tests

Respond with the prefix only, in lowercase, without punctuation or explanation.

THE FILE SUMMARIES:
{summary_points}

THE PREFIX:"""
