"""condpipe — first-match-wins conditional pipelines.

Public surface::

    from condpipe import (
        Pipeline,
        Entry,
        apply,
        apply_if,
        ConditionalError,
        NullArgumentError,
        SequencingError,
    )
"""

from condpipe.domain.entry import Entry, apply_if
from condpipe.errors import ConditionalError, ConfigError, NullArgumentError, SequencingError
from condpipe.pipeline import Pipeline, apply

__all__ = [
    "Pipeline",
    "Entry",
    "apply",
    "apply_if",
    "ConditionalError",
    "ConfigError",
    "NullArgumentError",
    "SequencingError",
]
