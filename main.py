#!/usr/bin/env python3

import sys
import traceback

from gpt_review.config import load_config
from gpt_review.events import load_event
from gpt_review.github_client import GitHubClient
from gpt_review.orchestrator import ReviewOrchestrator
from gpt_review.review_client import ReviewClient


def main() -> int:
    """Main function to execute the code review process."""
    print("Starting PR review bot...")

    try:
        config = load_config()
        print(f"Loaded {config!r}")

        event = load_event(config.event_path)
        print(f"Event type: {type(event).__name__}")

        orchestrator = ReviewOrchestrator(config, GitHubClient(config), ReviewClient(config))
        state = orchestrator.run(event)
        print(f"Review run finished: {state.value}")
        return 0

    except Exception as e:
        print(f"Error in main execution: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
