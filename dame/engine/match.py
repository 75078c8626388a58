"""
Score of a best-of-five match: the first player to win 3 games takes the match.

Independent of the rules of a single game: it only looks at the final state of each game.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from dame.core.models import GameModel
from dame.engine.pieces import GameState, Player

logger = logging.getLogger(__name__)

# For display only: the match is decided by WINS_NEEDED, there is no cut-off after TOTAL_GAMES
TOTAL_GAMES = 5
WINS_NEEDED = 3


@dataclass
class MatchScore:
    white_wins: int = 0
    black_wins: int = 0
    draws: int = 0  # count as games played, but do not bring anyone closer to winning the match
    games_played: int = 0

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        return cls(
            white_wins=model.white_wins,
            black_wins=model.black_wins,
            draws=model.draws,
            games_played=model.games_played,
        )

    def reset(self) -> None:
        self.white_wins = 0
        self.black_wins = 0
        self.draws = 0
        self.games_played = 0

    def record_game_result(self, result: GameState) -> None:
        """Tally a finished game. Unfinished games, and anything after the match has been decided, are ignored."""
        if self.is_match_over() or result == GameState.IN_PROGRESS:
            return

        if result == GameState.WHITE_WINS:
            self.white_wins += 1
        elif result == GameState.BLACK_WINS:
            self.black_wins += 1
        else:
            self.draws += 1
        self.games_played += 1
        self._log_if_decided()

    def record_forfeit(self, forfeiting_player: Player) -> None:
        """The opponent of the player giving up gets the win."""
        if self.is_match_over():
            return

        if forfeiting_player == Player.WHITE:
            self.black_wins += 1
        else:
            self.white_wins += 1
        self.games_played += 1
        self._log_if_decided()

    def is_match_over(self) -> bool:
        return self.white_wins >= WINS_NEEDED or self.black_wins >= WINS_NEEDED

    def match_winner(self) -> Optional[Player]:
        if self.white_wins >= WINS_NEEDED:
            return Player.WHITE
        if self.black_wins >= WINS_NEEDED:
            return Player.BLACK
        return None

    def current_game_number(self) -> int:
        return self.games_played + 1

    def score_display(self) -> str:
        return f"White {self.white_wins} - {self.black_wins} Black"

    def game_count_display(self) -> str:
        if self.is_match_over():
            return "Match Complete"
        return f"Game {self.current_game_number()} - First to {WINS_NEEDED}"

    def match_result_message(self) -> str:
        winner = self.match_winner()
        if winner is None:
            return ""
        return f"{winner.name} wins the match!"

    def _log_if_decided(self) -> None:
        winner = self.match_winner()
        if winner is not None:
            logger.info("Match decided: %s (%s)", winner.name, self.score_display())
