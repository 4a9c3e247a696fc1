#!/usr/bin/env python3

import fnmatch
from typing import Iterable, List, Sequence

from gpt_review.models import ParsedFile


def parse_exclude_patterns(raw: str) -> List[str]:
    """Splits a comma-separated pattern list, trimming and dropping blanks."""
    if not raw or not raw.strip():
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def _match_segments(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not parts

    head = pattern_parts[0]
    if head == "**":
        # globstar: zero or more directories, never hidden ones
        if _match_segments(parts, pattern_parts[1:]):
            return True
        return bool(parts) and not parts[0].startswith(".") and _match_segments(parts[1:], pattern_parts)

    if not parts:
        return False
    segment = parts[0]
    if segment.startswith(".") and not head.startswith("."):
        return False
    return fnmatch.fnmatchcase(segment, head) and _match_segments(parts[1:], pattern_parts[1:])


def matches_pattern(file_path: str, pattern: str) -> bool:
    """
    Check a path against a single glob exclude pattern.

    Each "/"-separated segment is matched on its own, so "*" never crosses a
    directory boundary; a "**" segment spans any number of directories.

    Args:
        file_path: Path to the file in the repository
        pattern: Glob pattern, e.g. "**/*.md" or "dist/*"

    Returns:
        True if the path matches the pattern
    """
    return _match_segments(file_path.split("/"), pattern.split("/"))


def is_excluded(file_path: str, exclude_patterns: Iterable[str]) -> bool:
    return any(matches_pattern(file_path, pattern) for pattern in exclude_patterns)


def filter_files(files: List[ParsedFile], exclude_patterns: Iterable[str]) -> List[ParsedFile]:
    """
    Removes files matching any exclude pattern, keeping diff order.

    Args:
        files: Parsed files of the diff
        exclude_patterns: Glob patterns of files that must never be analyzed

    Returns:
        Files whose path matches none of the patterns
    """
    patterns = list(exclude_patterns)
    print(f"Exclude patterns: {patterns}")

    included = []
    for parsed_file in files:
        should_include = not is_excluded(parsed_file.path or "", patterns)
        print(f"File {parsed_file.path}: {'included' if should_include else 'excluded'}")
        if should_include:
            included.append(parsed_file)

    print(f"After filtering: {len(included)} files to analyze")
    return included
