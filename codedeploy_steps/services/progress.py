"""Progress sinks receiving human-readable status lines from the steps."""

import logging
import sys
from typing import Optional, Protocol, TextIO


class ProgressSink(Protocol):
    """Anything with a ``write(line)`` method."""

    def write(self, line: str) -> None:
        ...


class LoggingProgressSink:
    """Forwards progress lines to a logger at INFO level."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("codedeploy_steps.progress")

    def write(self, line: str) -> None:
        self.logger.info("%s", line)


class StreamProgressSink:
    """Writes progress lines to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def write(self, line: str) -> None:
        self.stream.write(f"{line}\n")
        self.stream.flush()


class CollectingProgressSink:
    """Keeps progress lines in memory, in the order written."""

    def __init__(self):
        self.lines: list[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)
