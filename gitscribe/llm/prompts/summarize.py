"""Prompt templates for summarizing a staged diff.

- SUMMARIZE_FILE_DIFF_TEMPLATE: Turn a diff into summary bullet points
- SUMMARIZE_TITLE_TEMPLATE: Turn summary bullet points into a one-line title
"""

SUMMARIZE_FILE_DIFF_TEMPLATE = """You are an expert programmer, and you are trying to summarize a git diff.
Reminders about the git diff format:
For every file, there are a few metadata lines, like (for example):
```
diff --git a/lib/index.js b/lib/index.js
index aadf691..bfef603 100644
--- a/lib/index.js
+++ b/lib/index.js
```
This means that `lib/index.js` was modified in this commit. Note that this is only an example.
Then there is a specifier of the lines that were modified.
A line starting with `+` means it was added.
A line that starting with `-` means that line was deleted.
A line that starts with neither `+` nor `-` is code given for context and better understanding.
It is not part of the diff.

Write the summary as bullet points starting with "- ", one line each.
Do not include the file name as another bullet point.
Do not use the characters `[` or `]` in the summary.
Write every summary comment in a new line.
Most commits will have less comments than this example list.
Do not write more than 7 bullet points.
Only describe changes shown in the diff.

THE GIT DIFF TO BE SUMMARIZED:
{file_diffs}

THE SUMMARY:"""

SUMMARIZE_TITLE_TEMPLATE = """You are an expert programmer, and you are trying to title a pull request.
You went over every file that was changed in it.
For some of these files changes were too big and were omitted in the files diff summary.
Please summarize the pull request into a single specific theme.
Write your response using the imperative tense following the kernel git commit style guide.
Write a high level title.
Do not repeat the commit summaries or the file summaries.
Do not list individual changes in the title.
Keep the title under 60 characters and do not end it with a period.

EXAMPLE SUMMARY COMMENTS:
```
- Raise the amount of returned recordings from `10` to `100`
- Fix a typo in the github action name
- Move the `octokit` initialization to a separate file
- Add an OpenAI API for completions
- Lower numeric tolerance for test files
- Add 2 tests for the inclusive string split function
```

EXAMPLE TITLE:
Add OpenAI completions API and tidy up recordings handling

THE FILE SUMMARIES:
{summary_points}

Remember to write only one line, no more than 60 characters.
THE PULL REQUEST TITLE:"""
