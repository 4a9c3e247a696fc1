#!/usr/bin/env python3

from typing import Iterator, List, Optional

from unidiff import PatchSet
from unidiff.constants import RE_HUNK_HEADER
from unidiff.patch import Hunk, PatchedFile

from gpt_review.models import DEV_NULL, ChangeLine, Chunk, ParsedFile

_KINDS = {"+": "add", "-": "del", " ": "normal"}


class DiffParser:
    """Parser for Git diff output."""

    @staticmethod
    def parse_diff(diff_str: str) -> List[ParsedFile]:
        """
        Parses the diff string and returns a structured format.

        Args:
            diff_str: Unified diff as returned by the GitHub API

        Returns:
            List of ParsedFile objects in diff order

        Raises:
            unidiff.UnidiffParseError: If the diff text is malformed
        """
        patch_set = PatchSet(diff_str)
        # unidiff keeps only the parsed numbers; hunk headers appear in the
        # text in the same order as the hunks of the patch set
        raw_headers = iter([
            line.rstrip("\r") for line in diff_str.split("\n") if RE_HUNK_HEADER.match(line)
        ])
        return [DiffParser._parse_file(patched_file, raw_headers) for patched_file in patch_set]

    @staticmethod
    def _parse_file(patched_file: PatchedFile, raw_headers: Iterator[str]) -> ParsedFile:
        chunks = []
        for hunk in patched_file:
            chunk = DiffParser._parse_hunk(hunk, next(raw_headers, None))
            if chunk.changes:
                chunks.append(chunk)

        return ParsedFile(
            path=DiffParser._target_path(patched_file),
            chunks=chunks,
            source_path=DiffParser._strip_prefix(patched_file.source_file, "a/"),
        )

    @staticmethod
    def _parse_hunk(hunk: Hunk, raw_header: Optional[str] = None) -> Chunk:
        header = raw_header
        if not header:
            header = f"@@ -{hunk.source_start},{hunk.source_length} +{hunk.target_start},{hunk.target_length} @@"
            if hunk.section_header:
                header = f"{header} {hunk.section_header}"

        changes = []
        for line in hunk:
            kind = _KINDS.get(line.line_type)
            if kind is None:
                # "\ No newline at end of file" markers carry no line number
                continue
            value = line.value.rstrip("\n")
            changes.append(ChangeLine(
                kind=kind,
                content=f"{line.line_type}{value}",
                source_line_no=line.source_line_no,
                target_line_no=line.target_line_no,
            ))

        return Chunk(content=header, changes=changes)

    @staticmethod
    def _target_path(patched_file: PatchedFile) -> str:
        if patched_file.is_removed_file or patched_file.target_file == DEV_NULL:
            return DEV_NULL
        return DiffParser._strip_prefix(patched_file.target_file, "b/")

    @staticmethod
    def _strip_prefix(path: str, prefix: str) -> str:
        if path and path.startswith(prefix):
            return path[len(prefix):]
        return path or ""
