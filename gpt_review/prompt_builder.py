#!/usr/bin/env python3

from gpt_review.models import Chunk, ParsedFile, PullRequestContext

# Any wording change here changes what the model returns; update the golden
# file in tests/fixtures together with this template.
PROMPT_TEMPLATE = """Your task is to review pull requests. Instructions:
- Provide the response in following JSON format:  [{{"lineNumber":  <line_number>, "reviewComment": "<review comment>"}}]
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise return an empty array.
- Write the comment in GitHub Markdown format.
- Use the given description only for the overall context and only comment the code.
- IMPORTANT: NEVER suggest adding comments to the code.

Review the following code diff in the file "{file_path}" and take the pull request title and description into account when writing the response.
  
Pull request title: {pr_title}
Pull request description:

---
{pr_description}
---

Git diff to review:

```diff
{chunk_content}
{changes}
```
"""


def render_changes(chunk: Chunk) -> str:
    """Renders every change line as "<line number> <content>"."""
    return "\n".join(f"{change.prompt_line_no} {change.content}" for change in chunk.changes)


def create_prompt(file: ParsedFile, chunk: Chunk, pr_context: PullRequestContext) -> str:
    """
    Creates the prompt for the Azure OpenAI model.

    Args:
        file: Parsed file the chunk belongs to
        chunk: Hunk to review
        pr_context: Pull request details

    Returns:
        Prompt string for OpenAI
    """
    return PROMPT_TEMPLATE.format(
        file_path=file.path,
        pr_title=pr_context.title,
        pr_description=pr_context.description,
        chunk_content=chunk.content,
        changes=render_changes(chunk),
    )
