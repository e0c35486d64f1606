"""Opt-in instrumentation for the resolver.

Records go to the configured sink first; if the sink declines (returns a
falsy value) or there is none, they are emitted on the stdlib logger
``<namespace>.<kind>``.
"""

import logging
from typing import Any

from yt_transcript_resolver.config import LoggerOptions


class ResolverLogger:
    def __init__(self, options: LoggerOptions | None = None):
        self.options = options or LoggerOptions()

    def update(self, **changes) -> None:
        self.options = self.options.model_copy(update=changes)

    def log(self, kind: str, message: str, data: Any = None) -> None:
        if not self.options.enabled:
            return

        sink = self.options.sink
        if sink is not None and sink(kind, message, data):
            return

        namespace = self.options.namespace
        name = f"{namespace}.{kind}" if namespace else kind
        level = logging.ERROR if kind == "error" else logging.INFO
        if data is not None:
            logging.getLogger(name).log(level, "%s %s", message, data)
        else:
            logging.getLogger(name).log(level, "%s", message)
