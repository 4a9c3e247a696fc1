#!/usr/bin/env python3

from typing import List

from gpt_review.models import COMMENT_PREFIX, Chunk, ParsedFile, PostableComment, ReviewSuggestion


def create_comments(file: ParsedFile, chunk: Chunk, suggestions: List[ReviewSuggestion]) -> List[PostableComment]:
    """
    Creates comment objects from AI responses.

    Line numbers are not checked against the chunk; GitHub decides whether
    a line can be commented on.

    Args:
        file: Parsed file the chunk belongs to
        chunk: Hunk the suggestions were made for
        suggestions: Suggestions returned by the model

    Returns:
        List of comments ready for the create-review call
    """
    if not file.path or file.is_deleted:
        return []

    print(f"Processing {len(suggestions)} reviews for {file.path} {chunk.content}")
    return [
        PostableComment(
            body=COMMENT_PREFIX + suggestion.reviewComment,
            path=file.path,
            line=int(suggestion.lineNumber),
        )
        for suggestion in suggestions
    ]
