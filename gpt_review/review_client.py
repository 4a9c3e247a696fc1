#!/usr/bin/env python3

import json
from typing import Any, Dict, List, Optional

from openai import AzureOpenAI, OpenAIError
from pydantic import ValidationError

from gpt_review.config import Config
from gpt_review.models import ReviewSuggestion

GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.2,
    "max_tokens": 700,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


def _strip_code_fence(text: str) -> str:
    """Unwraps a reply the model put inside a ```json ... ``` block."""
    lines = text.split("\n")
    if len(lines) >= 2 and lines[0].startswith("```") and lines[-1].strip() == "```":
        return "\n".join(lines[1:-1]).strip()
    return text


def parse_review_response(text: Optional[str]) -> Optional[List[ReviewSuggestion]]:
    """
    Parses the model reply into review suggestions.

    Args:
        text: Raw message content returned by the model

    Returns:
        List of suggestions (empty when the reply is empty), or None when the
        reply is not a JSON array
    """
    text = (text or "").strip()
    if not text:
        return []

    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        print(f"Could not parse AI response as JSON: {e}")
        return None

    if not isinstance(data, list):
        print(f"Expected a JSON array from AI, got {type(data).__name__}")
        return None

    suggestions = []
    for entry in data:
        try:
            suggestions.append(ReviewSuggestion.model_validate(entry))
        except ValidationError as e:
            print(f"Skipping invalid suggestion {entry!r}: {e.error_count()} validation error(s)")
    return suggestions


class ReviewClient:
    """Sends review prompts to Azure OpenAI."""

    def __init__(self, config: Config, client: Optional[AzureOpenAI] = None):
        """
        Initialize the Azure OpenAI client.

        Args:
            config: Run configuration
            client: Pre-built client, mainly for tests
        """
        self.deployment = config.openai_model
        self.client = client or AzureOpenAI(
            base_url=f"{config.openai_endpoint}/openai",
            api_key=config.openai_api_key,
            api_version=config.openai_api_version,
        )

    def get_review(self, prompt: str) -> Optional[List[ReviewSuggestion]]:
        """
        Sends a code review prompt to Azure OpenAI and returns the parsed reviews.

        Args:
            prompt: The prompt containing the code diff and review instructions

        Returns:
            List of suggestions, or None if the call failed or the reply
            could not be understood
        """
        print(f"Sending prompt to Azure OpenAI deployment {self.deployment}...")

        try:
            response = self.client.chat.completions.create(
                model=self.deployment,
                messages=[{"role": "system", "content": prompt}],
                **GENERATION_CONFIG,
            )
        except OpenAIError as e:
            print(f"Error during Azure OpenAI API call: {e}")
            return None

        if not response.choices:
            print("Azure OpenAI returned no choices")
            return []

        content = response.choices[0].message.content
        print(f"AI response: {content}")
        return parse_review_response(content)
