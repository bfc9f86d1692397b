"""
Reporter: log messages and keep an abbreviated written report of them.
"""

import re
import sys
import time
import logging
import tempfile
from itertools import islice
from typing import IO, Iterator, Optional

from kvstreams.config import config


class Reporter:
    """
    Tee messages to a logger and to a written report.

    Every non-empty line passed to ``info``, ``warning`` or ``error`` is
    logged at that severity, prefixed with the title, and also kept for
    the written report. Severity only shows in the log; the report holds
    the bare lines under a heading built from the title and subtitle.

        rep = Reporter('Fixity Check', 'Silo 3 against the inventory')
        rep.info('1,204 packages checked.')
        rep.warning('2 packages missing.')
        rep.done()
        rep.write(sys.stderr)

    A report longer than ``max_lines`` keeps only its first and last lines,
    with the middle replaced by an ellipsis.
    """

    def __init__(self,
                 title: str,
                 subtitle: Optional[str] = None,
                 logger: Optional[logging.Logger] = None,
                 max_lines: Optional[int] = None):
        self.title = title
        self.subtitle = subtitle
        self.logger = logger or logging.getLogger(__name__)
        self.max_lines = config.report_max_lines if max_lines is None else max_lines
        self.counter = 0

        self._start = time.time()
        self._done: Optional[float] = None

        slug = '-'.join(re.sub(r'[^a-zA-Z0-9]', '', word).lower() for word in title.split())
        self._body = tempfile.TemporaryFile(mode='w+', encoding='utf-8', prefix=f"report-{slug}-")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.title!r} lines={self.counter}>"

    @property
    def interesting(self) -> bool:
        """True if anything has been reported."""
        return self.counter > 0

    def done(self) -> None:
        """Stamp completion; the heading then shows the elapsed time."""
        self._done = time.time()

    # Logging at the various severity levels

    def info(self, *lines: str) -> None:
        self._log(logging.INFO, lines)

    def warning(self, *lines: str) -> None:
        self._log(logging.WARNING, lines)

    def error(self, *lines: str) -> None:
        self._log(logging.ERROR, lines)

    warn = warning
    err = error

    def _log(self, level: int, lines) -> None:
        if not lines:
            self._record('')
            return

        for line in lines:
            if line:
                self.logger.log(level, "%s: %s", self.title, line)
            for part in line.splitlines() or ['']:
                self._record(part)

    def _record(self, line: str) -> None:
        self._body.seek(0, 2)
        self._body.write(line + '\n')
        self.counter += 1

    # Written report

    def heading(self) -> str:
        heading = self.title
        if self.subtitle:
            heading += f": {self.subtitle}"
        if self._done is not None:
            heading += f" ({self._done - self._start:.2f} seconds)"
        return heading

    def lines(self) -> Iterator[str]:
        """
        Yield the written report line by line.

        When more than ``max_lines`` lines were reported, only the first
        half and the last half of that budget are yielded.
        """
        heading = self.heading()
        yield heading
        yield ':' * len(heading)

        self._body.flush()
        self._body.seek(0)
        body = (line.rstrip('\n') for line in self._body)

        if self.counter > self.max_lines:
            top = self.max_lines - self.max_lines // 2
            bottom = self.max_lines // 2

            yield (f"Note: {self.counter - self.max_lines} of {self.counter} lines were discarded"
                   f" - see the system log for the complete report.")
            yield from islice(body, top)
            yield " ..."
            yield from islice(body, self.counter - top - bottom, None)
        else:
            yield from body

        yield ''

    def write(self, stream: Optional[IO[str]] = None) -> None:
        """Write the report to stream (stdout by default)."""
        stream = stream or sys.stdout
        for line in self.lines():
            stream.write(line + '\n')

    @classmethod
    def note(cls,
             message: str,
             stream: Optional[IO[str]] = None,
             logger: Optional[logging.Logger] = None) -> None:
        """Log message at INFO and write it out immediately."""
        (logger or logging.getLogger(__name__)).info(message)
        (stream or sys.stdout).write(message + '\n')

    def close(self) -> None:
        self._body.close()

    def __enter__(self) -> 'Reporter':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
