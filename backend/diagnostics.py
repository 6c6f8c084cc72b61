"""Collect non-fatal engine diagnostics for API responses."""

import logging
import warnings
from contextlib import contextmanager
from typing import Iterator

from eseries.exceptions import DegradedDirectionWarning

logger = logging.getLogger(__name__)


@contextmanager
def engine_warnings() -> Iterator[list[str]]:
    """
    Record engine warnings raised inside the block.

    Yields a list that is filled with the warning messages when the block
    exits, so they can be returned next to a valid result.
    """
    messages: list[str] = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", DegradedDirectionWarning)
        yield messages
    for warning in caught:
        if issubclass(warning.category, DegradedDirectionWarning):
            logger.info("Engine warning: %s", warning.message)
            messages.append(str(warning.message))
        else:
            warnings.warn_explicit(
                warning.message, warning.category, warning.filename, warning.lineno,
            )
