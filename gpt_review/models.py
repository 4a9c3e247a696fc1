#!/usr/bin/env python3

import re
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator

# Target path unidiff and git use for a file removed by the diff
DEV_NULL = "/dev/null"

COMMENT_PREFIX = "[GPT-REVIEW] "


@dataclass(frozen=True)
class PullRequestContext:
    """Data class for pull request details."""
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class ChangeLine:
    """One added, removed or context line of a hunk."""
    kind: str  # "add", "del" or "normal"
    content: str
    source_line_no: Optional[int] = None
    target_line_no: Optional[int] = None

    @property
    def ln(self) -> Optional[int]:
        """Number on the side the line lives on; context lines have none."""
        if self.kind == "add":
            return self.target_line_no
        if self.kind == "del":
            return self.source_line_no
        return None

    @property
    def prompt_line_no(self) -> Optional[int]:
        return self.ln if self.ln else self.target_line_no


@dataclass(frozen=True)
class Chunk:
    """Data class for a single hunk of a file diff."""
    content: str
    changes: List[ChangeLine] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedFile:
    """Data class for a changed file in a PR."""
    path: str
    chunks: List[Chunk] = field(default_factory=list)
    source_path: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.path == DEV_NULL


class ReviewSuggestion(BaseModel):
    lineNumber: str = Field(..., description="The line number the comment refers to")
    reviewComment: str = Field(..., description="The code review comment")

    @field_validator("lineNumber", mode="before")
    @classmethod
    def _line_number_as_text(cls, value: Any) -> str:
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return str(value)
        if isinstance(value, str) and re.fullmatch(r"[0-9]+", value.strip()):
            return value.strip()
        raise ValueError(f"lineNumber must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class PostableComment:
    """Inline comment in the shape the GitHub create-review call expects."""
    body: str
    path: str
    line: int

    def as_dict(self) -> Dict[str, Any]:
        return {"body": self.body, "path": self.path, "line": self.line}
