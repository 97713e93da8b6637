"""The training mode: seven cards each, best of three rounds."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from eter.card import Card
from eter.console import Console
from eter.explosion import Explosion
from eter.game import Game, RoundStatus
from eter.player import Player

_HAND_VALUES = (1, 1, 2, 2, 3, 3, 4)
_OPTIONS_PROMPT = (
    "Choose an option: \n"
    "Press 1 to place a card on the board \n"
    "Press 2 to activate an illusion \n"
)


def _starting_hand(color: str) -> list[Card]:
    return [Card(value, color, True) for value in _HAND_VALUES]


class AMode:
    """Runs a training-mode match on a game, talking to the players through a console."""

    def __init__(
        self,
        game: Game,
        console: Optional[Console] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.game = game
        self.console = console if console is not None else Console()
        self._rng = rng

    def rounds_for_win(self) -> int:
        """Return how many rounds a player must win to take the match."""
        return 2

    def rounds(self) -> int:
        """Return the most rounds a match can last."""
        return 3

    def assign_cards_in_hand(self) -> None:
        """Deal both players their starting hands."""
        self.game.player1.hand = _starting_hand("red")
        self.game.player2.hand = _starting_hand("blue")

    def start_match(self) -> Player:
        """Play rounds until one player has enough wins; return the match winner."""
        game = self.game
        write = self.console.write
        count_round = 1
        write("The game has started \n")
        target = self.rounds_for_win()
        while game.player1_wins < target and game.player2_wins < target:
            write(f"Round {count_round} of {self.rounds()}\n")
            self.start_round()
            count_round += 1
            write("The round has ended. \n")
            write(f"{game.player1.name} wins: {game.player1_wins}\n")
            write(f"{game.player2.name} wins: {game.player2_wins}\n")
            self.assign_cards_in_hand()
            game.reset_board()
            game.is_used_explosion = False
        winner = game.player1 if game.player1_wins > game.player2_wins else game.player2
        write(f"Player {winner.name} wins this game!\n")
        write("GAME OVER \n")
        return winner

    def handle_option(self) -> None:
        """Let the current player choose between placing a card and playing an illusion."""
        player = self.game.current_player()
        self.console.write(f"It's {player.name}'s turn\n")
        option = self.console.ask_matching(
            _OPTIONS_PROMPT, r"[12]", "Invalid option. Please press 1 or 2: "
        )
        if option == "1":
            self._play_turn()
        else:
            self._play_illusion()

    def _ask_move(self) -> Tuple[int, int, int]:
        x = self.console.ask_int("x = ")
        y = self.console.ask_int("y = ")
        index = self.console.ask_int("index of the card = ")
        return x, y, index

    def _play_turn(self) -> None:
        game = self.game
        game.advance_returned_cards()
        player = game.current_player()
        if player.hand:
            self.console.write(player.hand_listing())
            self.console.write(
                f"{player.name} enter the coordinates (x and y) >=0 of the position on the "
                "board and the index of the card (>=0) you want to place.\n"
            )
            self._place_until_done(player)
        else:
            self.console.write(f"{player.name} has no cards left to place.\n")
        self._offer_explosion(player)
        game.switch_turn()

    def _place_until_done(self, player: Player) -> None:
        board = self.game.board
        while True:
            x, y, index = self._ask_move()
            if not 0 <= index < len(player.hand):
                self.console.write("Invalid card index.\n")
                continue
            top = board.top(x, y) if board.is_valid_position(x, y) else None
            covers_opponent = top is not None and not top.face_up and top.color != player.color
            if self.game.place_from_hand(x, y, index) or covers_opponent:
                return
            self.console.write(f"{player.name} try to place a card again\n")

    def _offer_explosion(self, player: Player) -> None:
        game = self.game
        if not game.can_activate_explosion():
            return
        write = self.console.write
        write(game.board.render())
        if not self.console.confirm(
            f"{player.name} fill the second line. Do you want to activate the explosion? (y/n) \n"
        ):
            game.activate_explosion(None)
            return
        explosion = Explosion(game.board.dim_max, game.board, rng=self._rng)
        explosion.generate_random_effects()
        write(explosion.render_effects())
        write(
            "Do you want to rotate the explosion card?\n"
            "Press l(for left rotation) r (for right rotation) or any key to end rotation.\n"
        )
        choice = self.console.ask("").strip()[:1]
        while choice in ("l", "r"):
            if choice == "l":
                explosion.rotate_counter_clockwise()
            else:
                explosion.rotate_clockwise()
            write(explosion.render_effects())
            choice = self.console.ask("").strip()[:1]
        if self.console.confirm("Do you want to continue to activate the explosion ? (y/ n) \n"):
            game.activate_explosion(explosion)
            write(game.board.render())
            write(" Returned cards: \n")
            write("".join(f"{card}\n" for card in game.returned_cards))
        else:
            game.activate_explosion(None)

    def _play_illusion(self) -> None:
        game = self.game
        player = game.current_player()
        if player.has_used_illusion:
            self.console.write("Illusion has already been used\n")
        else:
            self.console.write(player.hand_listing())
            self.console.write(
                f"{player.name} enter the coordinates (x and y) of the position on the board "
                "and the index of the card you want to use illusion on.\n"
            )
            x, y, index = self._ask_move()
            if not 0 <= index < len(player.hand):
                self.console.write("Invalid card index.\n")
            elif game.play_illusion(x, y, index):
                self.console.write(f"{player.name} has placed an illusion at ({x}, {y}).\n")
            else:
                self.console.write(f"Failed to place the illusion at ({x}, {y}).\n")
        game.switch_turn()

    def start_round(self) -> RoundStatus:
        """Play turns until the round ends, settling it by score when nobody made a line."""
        game = self.game
        write = self.console.write
        status = RoundStatus.ONGOING
        while status is RoundStatus.ONGOING:
            self.handle_option()
            status = game.verify_game_over()
            write(f"Game status: {status.value}\n")
        if status in (RoundStatus.OUT_OF_CARDS, RoundStatus.BOARD_FULL):
            choice = self.console.ask(
                "Do you want to continue the game with a single move? (YES or NO) \n"
            ).strip()
            if choice == "YES":
                self.handle_option()
            by_score = game.board.find_winner_by_score()
            if game.player1.color == by_score:
                write(f"Player {game.player1.name} wins this round!\n")
                game.player1_wins += 1
            elif game.player2.color == by_score:
                write(f"Player {game.player2.name} wins this round!\n")
                game.player2_wins += 1
            else:
                write("DRAW \n")
        write(game.board.render())
        return status

    def apply_mode_rules(self) -> Player:
        """Deal the hands and play the whole match; return its winner."""
        self.assign_cards_in_hand()
        return self.start_match()