#!/usr/bin/env python3

from enum import Enum
from typing import List, Optional

from gpt_review.comment_mapper import create_comments
from gpt_review.config import Config
from gpt_review.diff_parser import DiffParser
from gpt_review.events import OpenedEvent, ReviewEvent, SynchronizeEvent
from gpt_review.github_client import GitHubClient
from gpt_review.models import ParsedFile, PostableComment, PullRequestContext
from gpt_review.path_filter import filter_files
from gpt_review.prompt_builder import create_prompt
from gpt_review.review_client import ReviewClient


class RunState(Enum):
    INIT = "init"
    CONTEXT_RESOLVED = "context_resolved"
    DIFF_OBTAINED = "diff_obtained"
    FILTERED = "filtered"
    ANALYZED = "analyzed"
    SUBMITTED = "submitted"
    SKIPPED = "skipped"


class ReviewOrchestrator:
    """
    Drives one review run: resolve the PR, fetch the diff for the event,
    filter it, review every chunk and submit the comments as one review.

    Chunks are reviewed one after another so comments keep diff order.
    """

    def __init__(self, config: Config, github: GitHubClient, review_client: ReviewClient):
        self.config = config
        self.github = github
        self.review_client = review_client
        self.diff_parser = DiffParser()
        self.state = RunState.INIT

        self.chunks_reviewed = 0
        self.chunks_without_result = 0

    def run(self, event: ReviewEvent) -> RunState:
        """
        Execute the review for a workflow event.

        Args:
            event: Parsed workflow event

        Returns:
            RunState.SUBMITTED or RunState.SKIPPED
        """
        print("Starting PR review process...")
        pr_context = self.github.get_pr_details(event.owner, event.repo, event.pull_number)
        self.state = RunState.CONTEXT_RESOLVED
        print(f"Analyzing PR #{pr_context.pull_number} in repo {pr_context.owner}/{pr_context.repo}: {pr_context.title}")

        diff = self._get_event_diff(event, pr_context)
        if diff is None:
            return self._skip()
        if not diff:
            print("No diff found")
            return self._skip()
        self.state = RunState.DIFF_OBTAINED
        print(f"Diff content length: {len(diff)}")

        parsed_files = self.diff_parser.parse_diff(diff)
        print(f"Parsed {len(parsed_files)} files from diff")
        files = self._drop_deleted(parsed_files)
        files = filter_files(files, self.config.exclude_patterns)
        self.state = RunState.FILTERED

        comments = self.analyze_code(files, pr_context)
        self.state = RunState.ANALYZED
        print(
            f"Reviewed {self.chunks_reviewed} chunks in {len(files)} files, "
            f"{self.chunks_without_result} without a usable response"
        )

        if not comments:
            print("No comments to post")
            return self._skip()

        print("Posting comments to PR...")
        self.github.create_review(pr_context.owner, pr_context.repo, pr_context.pull_number, comments)
        print(f"Successfully posted {len(comments)} comments")
        self.state = RunState.SUBMITTED
        return self.state

    def _get_event_diff(self, event: ReviewEvent, pr_context: PullRequestContext) -> Optional[str]:
        if isinstance(event, OpenedEvent):
            print("Getting diff for newly opened PR...")
            return self.github.get_pr_diff(pr_context.owner, pr_context.repo, pr_context.pull_number)
        if isinstance(event, SynchronizeEvent):
            print("Getting diff for PR update...")
            return self.github.compare_commits_diff(pr_context.owner, pr_context.repo, event.before, event.after)

        print(f"Unsupported event: {self.config.event_name} (action '{event.action}')")
        return None

    @staticmethod
    def _drop_deleted(files: List[ParsedFile]) -> List[ParsedFile]:
        kept = []
        for parsed_file in files:
            if parsed_file.is_deleted:
                print(f"Skipping deleted file: {parsed_file.source_path}")
                continue
            kept.append(parsed_file)
        return kept

    def analyze_code(self, files: List[ParsedFile], pr_context: PullRequestContext) -> List[PostableComment]:
        """
        Analyzes the code changes using Azure OpenAI and generates review comments.

        Args:
            files: Files left after filtering
            pr_context: Pull request details

        Returns:
            Comments for all chunks, in diff order
        """
        comments: List[PostableComment] = []
        print(f"Analyzing {len(files)} files...")

        for parsed_file in files:
            print(f"Processing file: {parsed_file.path}")
            if parsed_file.is_deleted:
                continue

            for chunk in parsed_file.chunks:
                prompt = create_prompt(parsed_file, chunk, pr_context)
                suggestions = self.review_client.get_review(prompt)
                self.chunks_reviewed += 1

                if suggestions is None:
                    self.chunks_without_result += 1
                    continue

                new_comments = create_comments(parsed_file, chunk, suggestions)
                print(f"Generated {len(new_comments)} comments")
                comments.extend(new_comments)

        print(f"Total comments generated: {len(comments)}")
        return comments

    def _skip(self) -> RunState:
        self.state = RunState.SKIPPED
        return self.state
