"""Starting matches, saving and loading them, and keeping statistics across games."""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import List, Optional, Sequence

from eter.amode import AMode
from eter.board import Board
from eter.console import Console
from eter.game import Game
from eter.player import Player
from eter.savefile import (
    Leaderboard,
    SaveFormatError,
    analyze_saves,
    backup_file,
    delete_save,
    file_size_kb,
    list_save_files,
    load_game,
    save_game,
)

DEFAULT_SAVE_DIRECTORY = "saves"
AUTOSAVE_NAME = "autosave.dat"
AUTOSAVE_BACKUP_NAME = "autosave_backup.dat"
LOADED_MODE = "LoadedMode"

_MODE_PATTERN = r"A|B|C|BC"
_NAME_PATTERN = r"[A-Z]+[a-z]*"
_RULE = "=============================\n"
_THIN_RULE = "-----------------------------\n"


def choose_game_mode(console: Console) -> str:
    """Ask which mode to play and return its full name, such as 'AMode'."""
    answer = console.ask_matching(
        "Please choose the mode you want to play:\nA for AMode\nB for BMode\n"
        "C for CMode\nBC for BCMode\n",
        _MODE_PATTERN,
        "Invalid mode! Please introduce a valid mode (A, B, C, or BC): ",
    )
    mode = answer + "Mode"
    console.write(f"{mode} was chosen successfully!\n")
    return mode


class GameManager:
    """Owns the current game and the statistics gathered over several games."""

    def __init__(
        self,
        game: Optional[Game] = None,
        console: Optional[Console] = None,
        save_directory: str | Path = DEFAULT_SAVE_DIRECTORY,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.game = game if game is not None else Game()
        self.console = console if console is not None else Console()
        self.save_directory = Path(save_directory)
        self.leaderboard = Leaderboard()
        self.draws = 0
        self._rng = rng

    @property
    def _autosave_path(self) -> Path:
        return self.save_directory / AUTOSAVE_NAME

    @property
    def _backup_path(self) -> Path:
        return self.save_directory / AUTOSAVE_BACKUP_NAME

    def start_new_game(self, player1: Player, player2: Player, game_mode: str) -> Game:
        """Begin a fresh game; the training mode is played through at once."""
        self.game = Game(player1=player1, player2=player2, game_mode=game_mode)
        if game_mode == "AMode":
            self.console.write("Starting A mode game\n")
            AMode(self.game, self.console, rng=self._rng).apply_mode_rules()
        return self.game

    def save_to_file(self, path: str | Path) -> Path:
        """Write both players and the board to a file and return its path."""
        save_game(path, self.game.player1, self.game.player2, self.game.board)
        self.console.write(f"Game successfully saved to '{path}'!\n")
        return Path(path)

    def _load(self, path: str | Path) -> Game:
        player1, player2, board = load_game(path)
        game = self.start_new_game(player1, player2, LOADED_MODE)
        game.board = board
        return game

    def load_from_file(self, path: str | Path) -> Game:
        """Load a saved game, replacing the current one, and return it."""
        self.display_save_file_size(path)
        game = self._load(path)
        self.console.write(f"Game successfully loaded from '{path}'!\n")
        return game

    def save_game(self) -> bool:
        """Ask for a file name and save there; return False if the player quits."""
        while True:
            name = self.console.ask("Enter the name of the save file, or press 'Q' to quit: ").strip()
            if name in ("Q", "q"):
                self.console.write("Exiting SaveGame.\n")
                return False
            if not name:
                self.console.write("No file name provided. Please try again.\n")
                continue
            if not self.console.confirm(f"Do you want to save the game to '{name}'? (Y/N): "):
                self.console.write(
                    "Save operation canceled. You can choose another file or quit.\n"
                )
                continue
            path = self.save_directory / name
            try:
                self.save_directory.mkdir(parents=True, exist_ok=True)
                self.save_to_file(path)
            except OSError as exc:
                self.console.write(f"Error during saving: {exc}\n")
                self.console.write("Save operation failed. You can choose another file or quit.\n")
                continue
            self.display_save_file_size(path)
            return True

    def _handle_special_command(self, name: str) -> Optional[bool]:
        """Run a menu command; None means the name is an ordinary file name."""
        if name in ("D", "d"):
            self.delete_save(self.console.ask("Enter the name of the save file to delete: ").strip())
            return True
        if name in ("AUTO", "auto"):
            try:
                self.load_auto_save()
            except (OSError, SaveFormatError) as exc:
                self.console.write(f"Error during loading autosave: {exc}\n")
            return True
        if name in ("L", "l"):
            self._display_save_files()
            return True
        if name in ("Q", "q"):
            self.console.write("Exiting LoadGame.\n")
            return False
        return None

    def _display_save_files(self) -> None:
        if not self.console.confirm("Do you want to view the list of save files (Y/N): "):
            self.console.write("Action canceled.\n")
            return
        try:
            files = list_save_files(self.save_directory)
        except OSError as exc:
            self.console.write(f"Error accessing save directory: {exc}\n")
            return
        if not files:
            self.console.write(f"No save files found in '{self.save_directory}'.\n")
            return
        self.console.write("Available save files:\n")
        self.console.write("".join(f" - {name}\n" for name in files))

    def load_game(self) -> bool:
        """Ask for a save file and load it; return False if the player quits."""
        while True:
            name = self.console.ask(
                "Enter the name of the save file to load, or press 'L' to list all save "
                "files, or 'Q' to quit: "
            ).strip()
            if not name:
                self.console.write("No file name provided. Please try again.\n")
                continue
            command = self._handle_special_command(name)
            if command is False:
                return False
            if command:
                continue
            if not self.console.confirm(
                f"Player, do you want to load the save file '{name}' (Y/N): "
            ):
                self.console.write("File load canceled. You can choose another file or quit.\n")
                continue
            try:
                self.load_from_file(self.save_directory / name)
            except (OSError, SaveFormatError) as exc:
                self.console.write(f"Error during loading: {exc}\n")
                self.console.write("Please choose another file or quit.\n")
                continue
            return True

    def auto_save(self, path: str | Path | None = None) -> Path:
        """Back up the previous autosave, then save the current game to the autosave file."""
        self.backup_autosave()
        target = Path(path) if path is not None else self._autosave_path
        directory = target.parent
        if not directory.exists():
            directory.mkdir(parents=True)
            self.console.write(f"Directory '{directory}' created for autosave.\n")
        save_game(target, self.game.player1, self.game.player2, self.game.board)
        self.console.write(f"Autosave completed successfully to '{target}'.\n")
        return target

    def load_auto_save(self) -> Game:
        """Load the autosave file, replacing the current game."""
        game = self._load(self._autosave_path)
        self.console.write("Game successfully loaded from autosave.\n")
        return game

    def backup_autosave(self) -> bool:
        """Copy the autosave file to its backup; return False if there is nothing to copy."""
        try:
            backup_file(self._autosave_path, self._backup_path)
        except OSError:
            self.console.write("Error creating backup of autosave.\n")
            return False
        self.console.write("Backup of autosave created successfully.\n")
        return True

    def display_save_file_size(self, path: str | Path) -> Optional[float]:
        """Report a file's size in kilobytes and return it, or None if it cannot be read."""
        try:
            size = file_size_kb(path)
        except OSError as exc:
            self.console.write(f"Error retrieving file size: {exc}\n")
            return None
        self.console.write(f"The save file '{path}' occupies {size:g} KB.\n")
        return size

    def delete_save(self, name: str) -> bool:
        """Delete a file from the save directory; return whether it existed."""
        try:
            path = delete_save(self.save_directory, name)
        except FileNotFoundError:
            self.console.write(f"Error: Save file '{self.save_directory / name}' does not exist.\n")
            return False
        except OSError as exc:
            self.console.write(f"Error deleting file '{self.save_directory / name}': {exc}\n")
            return False
        self.console.write(f"Save file '{path}' has been deleted successfully.\n")
        return True

    def delete_save_interactive(self) -> bool:
        """Ask which save to delete; return False if the player quits or it is missing."""
        name = self.console.ask(
            "Enter the name of the save file to delete, or press 'Q' to quit: "
        ).strip()
        if name in ("Q", "q"):
            self.console.write("Exiting delete save operation.\n")
            return False
        return self.delete_save(name)

    def reset_game(self) -> None:
        """Empty the board and the players' cards and clear the match bookkeeping."""
        game = self.game
        game.board.clear()
        for player in (game.player1, game.player2):
            player.score = 0
            player.hand.clear()
            player.played_cards.clear()
            player.eliminated_cards.clear()
        game.is_used_explosion = False
        game.count_turn_for_returned_cards = 0
        game.game_mode = ""

    @staticmethod
    def _percentage(wins: int, total: int) -> float:
        return wins * 100.0 / total if total > 0 else 0.0

    def player_stats(self) -> str:
        """Return cards played, cards eliminated and rounds won for both players."""
        game = self.game
        total = game.player1_wins + game.player2_wins
        lines: List[str] = ["\n===== Player Statistics =====\n"]
        entries = ((1, game.player1, game.player1_wins), (2, game.player2, game.player2_wins))
        for number, player, wins in entries:
            lines.append(f"Player {number}: {player.name}\n")
            lines.append(f"{'Cards Played: ':>20}{len(player.played_cards)}\n")
            lines.append(f"{'Cards Eliminated: ':>20}{len(player.eliminated_cards)}\n")
            lines.append(
                f"{'Rounds Won: ':>20}{wins} ({self._percentage(wins, total):g}%)\n"
            )
            lines.append(_THIN_RULE if number == 1 else _RULE)
        if game.player1_wins != game.player2_wins:
            best = game.player1 if game.player1_wins > game.player2_wins else game.player2
            lines.append(f"Best Player: {best.name}\n")
        else:
            lines.append("It's a tie! Both players performed equally well!\n")
        return "".join(lines)

    def update_leaderboard(self) -> None:
        """Add the current game's rounds, scores and winner to the running totals."""
        game, board = self.game, self.leaderboard
        board.player1_total_rounds += game.player1_wins
        board.player2_total_rounds += game.player2_wins
        board.player1_total_score += game.player1.score
        board.player2_total_score += game.player2.score
        if game.player1_wins > game.player2_wins:
            board.player1_total_wins += 1
        elif game.player2_wins > game.player1_wins:
            board.player2_total_wins += 1

    def leaderboard_report(self) -> str:
        """Return the running totals of both players and who leads."""
        game, board = self.game, self.leaderboard
        lines = ["\n===== Leaderboard =====\n"]
        rows = (
            ("Player 1", game.player1, board.player1_total_wins,
             board.player1_total_rounds, board.player1_total_score),
            ("\nPlayer 2", game.player2, board.player2_total_wins,
             board.player2_total_rounds, board.player2_total_score),
        )
        for label, player, wins, rounds, score in rows:
            lines.append(f"{label}: {player.name}\n")
            lines.append(f"  Total Wins: {wins}\n")
            lines.append(f"  Total Rounds Won: {rounds}\n")
            lines.append(f"  Total Score: {score}\n")
        if board.player1_total_wins > board.player2_total_wins:
            lines.append(f"\nBest Player: {game.player1.name}\n")
        elif board.player2_total_wins > board.player1_total_wins:
            lines.append(f"\nBest Player: {game.player2.name}\n")
        else:
            lines.append("\nIt's a tie between the two players!\n")
        lines.append("=======================\n")
        return "".join(lines)

    def analyze_game_results(self) -> str:
        """Record the current game's outcome and report on it and on every saved game."""
        game, board = self.game, self.leaderboard
        lines: List[str] = []
        if game.player1_wins > game.player2_wins:
            board.player1_total_wins += 1
            lines.append(f"Game Winner: {game.player1.name}\n")
        elif game.player2_wins > game.player1_wins:
            board.player2_total_wins += 1
            lines.append(f"Game Winner: {game.player2.name}\n")
        else:
            self.draws += 1
            lines.append("The game ended in a tie!\n")

        lines.append("\n===== Current Game Analysis =====\n")
        entries = ((1, game.player1, game.player1_wins), (2, game.player2, game.player2_wins))
        for number, player, wins in entries:
            lines.append(f"Player {number}: {player.name}\n")
            lines.append(f"{'Rounds Won: ':>25}{wins}\n")
            lines.append(f"{'Total Score: ':>25}{player.score}\n")
            lines.append(f"{'Cards Played: ':>25}{len(player.played_cards)}\n")
            lines.append(f"{'Cards Eliminated: ':>25}{len(player.eliminated_cards)}\n")
            lines.append(_THIN_RULE if number == 1 else _RULE)

        summary = analyze_saves(self.save_directory)
        lines.append("\n===== Analysis of All Saves =====\n")
        lines.append(f"Total Games Won by Player 1: {summary.player1_wins}\n")
        lines.append(f"Total Games Won by Player 2: {summary.player2_wins}\n")
        lines.append(f"Total Draws: {summary.draws}\n")
        if summary.leader is None:
            lines.append("It's a tie in overall games!\n")
        else:
            lines.append(f"Overall Winner: Player {summary.leader}\n")
        lines.append(_RULE)
        return "".join(lines)

    def global_stats_report(self) -> str:
        """Return the match wins of both players, the draws and the overall winner."""
        game, board = self.game, self.leaderboard
        lines = [
            "\n===== Global Statistics =====\n",
            f"Total Games Won by {game.player1.name}: {board.player1_total_wins}\n",
            f"Total Games Won by {game.player2.name}: {board.player2_total_wins}\n",
            f"Total Draws: {self.draws}\n",
        ]
        if board.player1_total_wins > board.player2_total_wins:
            lines.append(f"Overall Winner: {game.player1.name}\n")
        elif board.player2_total_wins > board.player1_total_wins:
            lines.append(f"Overall Winner: {game.player2.name}\n")
        else:
            lines.append("It's a tie in overall games!\n")
        lines.append(_RULE)
        return "".join(lines)


def _ask_name(console: Console) -> str:
    return console.ask_matching(
        "Player introduce your name (only letters): ",
        _NAME_PATTERN,
        "Invalid name! Please introduce a valid name: ",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for two names and a mode on the terminal, then play."""
    parser = argparse.ArgumentParser(prog="eter", description="Play Eter on the terminal.")
    parser.parse_args(argv)
    console = Console()
    console.write(" \n        WELCOME TO ETER GAME \n \n")
    try:
        name1 = _ask_name(console)
        name2 = _ask_name(console)
        player1 = Player(name=name1, color="red")
        player2 = Player(name=name2, color="blue")
        manager = GameManager(console=console)
        mode = choose_game_mode(console)
        manager.start_new_game(player1, player2, mode)
    except EOFError:
        console.write("\nInput ended.\n")
        return 1
    return 0