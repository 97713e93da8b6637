"""Saved games on disk, plus the leaderboard and global statistics files."""

from __future__ import annotations

import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

from eter.board import Board
from eter.card import Card
from eter.player import Player

StrPath = Union[str, "os.PathLike[str]"]

PLAYER1_HEADER = "# Player 1"
PLAYER2_HEADER = "# Player 2"
BOARD_HEADER = "# Board"
EMPTY_CELL = "empty"
END_OF_HAND = "---"

_LEADING_INT = re.compile(r"[+-]?\d+")


class SaveFormatError(ValueError):
    """Raised when a saved file does not have the expected layout."""


def _card_fields(card: Card) -> str:
    return f"{card.value} {card.color} {int(card.face_up)}"


def _parse_card(value_text: str, color: str, position_text: str) -> Card:
    try:
        value = int(value_text)
        position = int(position_text)
    except ValueError as exc:
        raise SaveFormatError(f"Malformed card: {value_text} {color} {position_text}") from exc
    if position not in (0, 1):
        raise SaveFormatError(f"Malformed card position: {position_text}")
    return Card(value, color, bool(position))


def _cards(tokens: List[str]) -> List[Card]:
    if len(tokens) % 3:
        raise SaveFormatError(f"Malformed card list: {' '.join(tokens)}")
    fields = iter(tokens)
    return [_parse_card(v, c, p) for v, c, p in zip(fields, fields, fields)]


def _next_line(stream: IO[str]) -> str:
    line = stream.readline()
    if line == "":
        raise SaveFormatError("Unexpected end of save data")
    return line.rstrip("\r\n")


def write_player(stream: IO[str], player: Player, header: str) -> None:
    """Write a player's header, name, colour and hand, ending with a separator line."""
    stream.write(f"{header}\n{player.name}\n{player.color}\n")
    for card in player.hand:
        stream.write(_card_fields(card) + "\n")
    stream.write(END_OF_HAND + "\n")


def read_player(stream: IO[str]) -> Player:
    """Read a player written by write_player."""
    line = _next_line(stream)
    if line.startswith("#"):
        line = _next_line(stream)
    name = line
    color = _next_line(stream)
    hand: List[Card] = []
    while (line := _next_line(stream)) != END_OF_HAND:
        tokens = line.split()
        if len(tokens) != 3:
            raise SaveFormatError(f"Malformed card line: {line!r}")
        hand.extend(_cards(tokens))
    return Player(name=name, color=color, hand=hand)


def write_board(stream: IO[str], board: Board) -> None:
    """Write every cell of the grid, one line each, cards listed from the top down."""
    stream.write(BOARD_HEADER + "\n")
    for row in board.grid:
        for stack in row:
            if stack is None:
                stream.write(EMPTY_CELL + "\n")
            else:
                stream.write("".join(_card_fields(card) + " " for card in reversed(stack)) + "\n")


def read_board(stream: IO[str]) -> Board:
    """Read a board written by write_board and recompute its occupied area."""
    header = _next_line(stream)
    if header != BOARD_HEADER:
        raise SaveFormatError(f"Expected {BOARD_HEADER!r}, found {header!r}")
    board = Board()
    for row in board.grid:
        for col in range(len(row)):
            tokens = _next_line(stream).split()
            if tokens == [EMPTY_CELL]:
                continue
            if not tokens:
                raise SaveFormatError("Empty cell line")
            row[col] = list(reversed(_cards(tokens)))
    board.update_after_removal()
    return board


def save_game(path: StrPath, player1: Player, player2: Player, board: Board) -> None:
    """Write both players and the board to a save file."""
    with open(path, "w", encoding="utf-8", newline="\n") as stream:
        write_player(stream, player1, PLAYER1_HEADER)
        write_player(stream, player2, PLAYER2_HEADER)
        write_board(stream, board)


def load_game(path: StrPath) -> Tuple[Player, Player, Board]:
    """Read both players and the board from a save file."""
    with open(path, encoding="utf-8", newline="") as stream:
        player1 = read_player(stream)
        player2 = read_player(stream)
        board = read_board(stream)
    return player1, player2, board


def file_size_kb(path: StrPath) -> float:
    """Return the size of a file in kilobytes."""
    return os.path.getsize(path) / 1024.0


def list_save_files(directory: StrPath) -> List[str]:
    """Return the names of the regular files in a directory, sorted."""
    return sorted(entry.name for entry in Path(directory).iterdir() if entry.is_file())


def delete_save(directory: StrPath, name: str) -> Path:
    """Delete a save file and return its path; raise FileNotFoundError if it is missing."""
    path = Path(directory) / name
    if not path.exists():
        raise FileNotFoundError(f"Save file '{path}' does not exist.")
    path.unlink()
    return path


def backup_file(source: StrPath, destination: StrPath) -> Path:
    """Copy a file byte for byte and return the destination path."""
    shutil.copyfile(source, destination)
    return Path(destination)


def _leading_int(token: str) -> Optional[int]:
    match = _LEADING_INT.match(token)
    return int(match.group()) if match else None


def _round_counts(text: str) -> Tuple[int, int]:
    tokens = iter(text.split())
    first = _leading_int(next(tokens, ""))
    if first is None:
        return 0, 0
    second = _leading_int(next(tokens, ""))
    return first, second if second is not None else 0


@dataclass
class SavesSummary:
    """How many saved games each player won, and how many were drawn."""

    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0

    @property
    def leader(self) -> Optional[int]:
        """Return 1 or 2 for the player with more wins, or None on a tie."""
        if self.player1_wins > self.player2_wins:
            return 1
        if self.player2_wins > self.player1_wins:
            return 2
        return None


def analyze_saves(directory: StrPath) -> SavesSummary:
    """Read the two round counts at the start of each file and tally the outcomes."""
    summary = SavesSummary()
    for name in list_save_files(directory):
        text = (Path(directory) / name).read_text(encoding="utf-8", errors="replace")
        rounds1, rounds2 = _round_counts(text)
        if rounds1 > rounds2:
            summary.player1_wins += 1
        elif rounds2 > rounds1:
            summary.player2_wins += 1
        else:
            summary.draws += 1
    return summary


def _read_ints(path: StrPath, count: int) -> List[int]:
    tokens = Path(path).read_text(encoding="utf-8").split()
    if len(tokens) < count:
        raise SaveFormatError(f"Expected {count} numbers in '{path}', found {len(tokens)}")
    try:
        return [int(token) for token in tokens[:count]]
    except ValueError as exc:
        raise SaveFormatError(f"Malformed number in '{path}'") from exc


def _write_lines(path: StrPath, rows: Iterable[Iterable[int]]) -> None:
    text = "".join(" ".join(str(n) for n in row) + "\n" for row in rows)
    Path(path).write_text(text, encoding="utf-8")


@dataclass
class Leaderboard:
    """Running totals of match wins, rounds won and score for both players."""

    player1_total_wins: int = 0
    player1_total_rounds: int = 0
    player1_total_score: int = 0
    player2_total_wins: int = 0
    player2_total_rounds: int = 0
    player2_total_score: int = 0

    def _rows(self) -> Iterator[Tuple[int, int, int]]:
        yield self.player1_total_wins, self.player1_total_rounds, self.player1_total_score
        yield self.player2_total_wins, self.player2_total_rounds, self.player2_total_score

    def save(self, path: StrPath) -> None:
        """Write one line per player: wins, rounds and score."""
        _write_lines(path, self._rows())

    @classmethod
    def load(cls, path: StrPath) -> Leaderboard:
        """Read a leaderboard written by save."""
        return cls(*_read_ints(path, 6))


@dataclass
class GlobalStats:
    """Match wins of both players and the number of drawn matches."""

    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0

    def save(self, path: StrPath) -> None:
        """Write the three counts on one line."""
        _write_lines(path, [(self.player1_wins, self.player2_wins, self.draws)])

    @classmethod
    def load(cls, path: StrPath) -> GlobalStats:
        """Read statistics written by save."""
        return cls(*_read_ints(path, 3))