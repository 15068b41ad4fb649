"""Application services: pure helpers shared by use cases."""

from potracker.application.services.tokenizer import tokenize

__all__ = ["tokenize"]
