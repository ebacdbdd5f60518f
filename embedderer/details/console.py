import sys
from typing import Optional, TextIO


class Console:
    def __init__(self, debug: bool = False, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.verbose = debug
        self.out = out
        self.err = err

    def debug(self, message: str) -> None:
        if self.verbose:
            print(message, file=self.out or sys.stdout)

    def info(self, message: str) -> None:
        print(message, file=self.out or sys.stdout)

    def error(self, message: str) -> None:
        print(f"error: {message}", file=self.err or sys.stderr)
