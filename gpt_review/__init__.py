"""
GPT pull request reviewer.

Reviews the diff of a pull request chunk by chunk with Azure OpenAI and
posts the findings back as inline review comments.
"""

__version__ = "1.0.0"
