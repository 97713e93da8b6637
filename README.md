# eter

Eter is a two-player card and board game that you play in the terminal. One player is red and the other is blue. They take turns placing numbered cards on a 7 × 7 grid. The occupied part of the grid may never be more than three cells wide or three cells tall.

## Rules in brief

- **Placing a card.** A card may go on an empty cell that touches a card already on the board, including diagonally. The first card of a round may go anywhere. A card may also go on top of a stack whose top card has a lower value.
- **The Eter card.** A card of value 5 is the Eter card. Nothing can be placed on it, and it cannot be placed on another card. Eliminating cards on a row or column does not remove it, and explosions leave it alone.
- **Illusions.** Each player may play one illusion per match. An illusion is a card placed face down on an empty cell. You cannot place a card over your own illusion.
  - When the opponent plays onto an illusion, the illusion is revealed.
  - If the new card is stronger, it covers the illusion.
  - If the new card is not stronger, it is eliminated and the turn ends.
- **Explosions.** When two lines are full (two rows, two columns, or one of each), the player whose turn it is may trigger the explosion once per round. A random pattern of effects is generated, and the player may rotate it left or right before applying it. Each effect does one of three things:
  - removes the top card;
  - returns the top card to its owner's hand;
  - replaces the cell with a hole.

  Effects that would hit an Eter card, or that would leave a card with no neighbour, are dropped. Returned cards go back to their owners' hands after a few turns.
- **Winning a round.** A round is won by three cards of your colour in a row, in a column or on a diagonal.
- **Running out.** A round can also end when a player runs out of cards or the occupied area is full. The players may then make one more move. After that the round goes to the colour with the higher score on the board. Each visible top card counts its value. A hidden card or an Eter card counts 1. A hole counts nothing.
- **Training mode (A).** Each player starts every round with the cards 1, 1, 2, 2, 3, 3, 4. The first player to win two rounds wins the match.

## Installation

```
pip install .
```

## Playing

```
eter
```

1. The game asks for both players' names. A name is letters only: one or more capital letters, then lower-case letters.
2. It then asks for a mode: `A`, `B`, `C` or `BC`.
3. On each turn, the current player presses `1` to place a card or `2` to play an illusion. They then give the row (`x`), the column (`y`) and the index of a card in their hand.

## What the package does not do

- Only training mode (`A`) is playable. Modes `B`, `C` and `BC` are accepted at the prompt, but no match is started for them and the command simply ends.
- There is no graphical interface. The game runs in the terminal only.
- The `eter` command offers no save, load or statistics menu. These features are available from Python through `GameManager`.

## Using the library

You can use the game logic without the terminal:

```python
from eter.board import Board
from eter.card import Card
from eter.player import Player

board = Board()
alice = Player("Alice", "red")
alice.add_to_hand(Card(3, "red", True))
alice.place_card(2, 2, Card(3, "red", True), board)
print(board.render())
print(board.find_winner())        # "No winner yet"
print(board.find_winner_by_score())  # "red"
```

The modules:

- `eter.card`: `Card`, with its value, colour and face-up flag.
- `eter.board`: `Board`, with the placement rules, line detection, scoring, holes, and moving or eliminating rows and columns.
- `eter.player`: `Player` and `validate_name`.
- `eter.explosion`: `Explosion` and `Effect`. Pass a `random.Random` to get repeatable patterns.
- `eter.game`: `Game`, which handles turns, covering illusions and explosions, and `RoundStatus`.
- `eter.amode`: `AMode`, which runs a training-mode match through a `Console`.
- `eter.console`: `Console`, which reads answers from any text stream and writes to any text stream.
- `eter.gamemanager`: `GameManager` and `choose_game_mode`. `GameManager` handles:
  - starting games;
  - saving and loading games, interactively or with `save_to_file` and `load_from_file`;
  - the autosave in `saves/autosave.dat` and its backup;
  - deleting saves;
  - reports of player statistics, the leaderboard and global statistics.
- `eter.savefile`: the save-file format. It provides:
  - `save_game` and `load_game`;
  - `list_save_files`, `delete_save`, `backup_file` and `analyze_saves`;
  - `Leaderboard` and `GlobalStats`, which are stored as plain lines of numbers.

Saved games are plain text. Each player is written as a header, name, colour and one line per card in hand, followed by a `---` line. Then comes `# Board` and one line per grid cell: `empty`, or the cards of the stack from the top down. Each card is written as `value colour face_up`. A file that does not follow this layout raises `SaveFormatError`.

## Running the tests

```
pip install .[test]
pytest
```