"""Line-oriented interaction with the players."""

from __future__ import annotations

import re
import sys
from typing import Pattern, TextIO, Union


class Console:
    """Reads answers from an input stream and writes text to an output stream."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    @property
    def _in(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write text as it is, without adding a newline."""
        self._out.write(text)
        self._out.flush()

    def _read_line(self) -> str:
        line = self._in.readline()
        if line == "":
            raise EOFError("no more input")
        return line.rstrip("\r\n")

    def ask(self, prompt: str) -> str:
        """Show a prompt and return the next line of input."""
        self.write(prompt)
        return self._read_line()

    def ask_int(self, prompt: str) -> int:
        """Show a prompt and read a non-negative whole number, asking again if needed."""
        self.write(prompt)
        while True:
            answer = self._read_line().strip()
            if answer.isdigit():
                return int(answer)
            self.write("Please enter a whole number >= 0: ")

    def confirm(self, prompt: str) -> bool:
        """Show a prompt and return True when the answer starts with 'y' or 'Y'."""
        self.write(prompt)
        while True:
            answer = self._read_line().strip()
            if answer:
                return answer[0].upper() == "Y"

    def ask_matching(
        self,
        prompt: str,
        pattern: Union[str, Pattern[str]],
        error_message: str,
    ) -> str:
        """Ask until the whole answer matches the pattern, then return it."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.write(prompt)
        answer = self._read_line().strip()
        while regex.fullmatch(answer) is None:
            self.write(error_message)
            answer = self._read_line().strip()
        self.write("Input processed successfully!\n")
        return answer