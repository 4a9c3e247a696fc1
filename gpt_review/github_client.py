#!/usr/bin/env python3

from typing import List

import requests
from github import Auth, Github

from gpt_review.config import Config
from gpt_review.models import PostableComment, PullRequestContext

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubClient:
    """Handles all interactions with GitHub API."""

    def __init__(self, config: Config):
        """
        Initialize GitHub client with authentication token.

        Args:
            config: Run configuration carrying the token and API URL
        """
        self.github_token = config.github_token
        self.api_url = config.github_api_url
        self.gh = Github(auth=Auth.Token(config.github_token), base_url=config.github_api_url)

    def get_pr_details(self, owner: str, repo: str, pull_number: int) -> PullRequestContext:
        """
        Retrieves title and description of the pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number

        Returns:
            PullRequestContext for the run
        """
        pr = self.gh.get_repo(f"{owner}/{repo}").get_pull(pull_number)
        return PullRequestContext(
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            title=pr.title or "",
            description=pr.body or "",
        )

    def _get_diff(self, url: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.github_token}",
            "Accept": DIFF_MEDIA_TYPE,
        }
        response = requests.get(url, headers=headers)
        if not response.ok:
            print(f"Failed to get diff. Status code: {response.status_code}")
            print(f"URL attempted: {url}")
        response.raise_for_status()

        diff = response.text
        print(f"Retrieved diff length: {len(diff) if diff else 0}")
        return diff

    def get_pr_diff(self, owner: str, repo: str, pull_number: int) -> str:
        """
        Fetches the full diff of the pull request.

        Raises:
            requests.HTTPError: If GitHub answers with an error status
        """
        print(f"Attempting to get diff for: {owner}/{repo} PR#{pull_number}")
        return self._get_diff(f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}")

    def compare_commits_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """
        Fetches the diff between two commits.

        Raises:
            requests.HTTPError: If GitHub answers with an error status
        """
        print(f"Comparing commits: {base} -> {head}")
        return self._get_diff(f"{self.api_url}/repos/{owner}/{repo}/compare/{base}...{head}")

    def create_review(self, owner: str, repo: str, pull_number: int, comments: List[PostableComment]) -> None:
        """
        Submits all review comments as one COMMENT review.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            comments: Comments to post
        """
        print(f"Attempting to create {len(comments)} review comments")

        pr = self.gh.get_repo(f"{owner}/{repo}").get_pull(pull_number)
        review = pr.create_review(
            comments=[comment.as_dict() for comment in comments],
            event="COMMENT",
        )
        print(f"Review created successfully with ID: {review.id}")
