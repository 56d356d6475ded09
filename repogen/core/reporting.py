"""Console reporter used for build progress, file writes and command output."""
import sys
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class Reporter:
    """Writes user-facing output.

    ``verbose`` is fixed per invocation; verbose messages are dropped
    otherwise. Data goes to ``out`` unprefixed so it can be piped.
    """
    verbose: bool = False
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)

    def write_information(self, message: str) -> None:
        print(message, file=self.out)

    def write_verbose(self, message: str) -> None:
        if self.verbose:
            print(message, file=self.out)

    def write_error(self, message: str) -> None:
        print(message, file=self.err)

    def write_data(self, data: str) -> None:
        self.out.write(data)
        self.out.flush()
