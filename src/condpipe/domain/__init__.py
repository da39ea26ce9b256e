"""Domain layer — entries, matching, and resolution states.

This layer depends only on stdlib and pydantic.
It must never import from pipeline or config.
"""
