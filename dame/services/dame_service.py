"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from dame.api.models import (
    CreateSessionRequest,
    DeleteSessionRequest,
    ForfeitRequest,
    GetSessionRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveModel,
    MoveRequest,
    MoveResponse,
    ScoreModel,
    SessionResponse,
    SquareModel,
)
from dame.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RepositoryError,
)
from dame.core.models import GameModel
from dame.core.shared_types import Color, GameStatus
from dame.db.repository import SessionRepository
from dame.engine.board import Board
from dame.engine.board_state import (
    board_records,
    serialize_board,
    serialize_position,
)
from dame.engine.game import GameLogic
from dame.engine.match import MatchScore
from dame.engine.pieces import GameState, Player

logger = logging.getLogger(__name__)


class DameService:
    """
    Orchestration of layers for a Dame session.

    Every call rebuilds a fresh GameLogic + MatchScore from the stored GameModel, acts on it, and stores the result.
    No game object outlives a call, so a session is never shared between requests.
    """

    def __init__(self, repository: SessionRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Two players start a match. The first round begins at the standard starting position."""

        new_model = GameModel(
            white_player=request.white_player,
            black_player=request.black_player,
            board_state=serialize_board(Board.initial()),
            current_turn=Player.WHITE.name,
            game_state=GameState.IN_PROGRESS.name,
        )

        stored_model, session_id = self.repo.create_session(new_model)
        logger.info(
            "Session %s created: %s (white) vs %s (black)",
            session_id,
            request.white_player,
            request.black_player,
        )
        return self._create_session_response(session_id, stored_model)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """
        Retrieve current session state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        stored_model = self._fetch_session(request.session_id)
        return self._create_session_response(request.session_id, stored_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves (of the whole side, or of a single square)."""

        stored_model = self._fetch_session(request.session_id)
        player_color = self._get_player_color(stored_model, request.player_name)

        game = GameLogic.from_model(stored_model)
        if game.current_player != player_color:
            moves = []
        elif request.square is None:
            moves = game.valid_moves()
        else:
            moves = game.valid_moves_for(request.square.to_position())

        return LegalMovesResponse(
            session_id=request.session_id,
            player_name=request.player_name,
            color=Color(player_color.name),
            legal_moves=[MoveModel.from_move(move) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        1. rebuild the game, make sure the game is (still) in progress and it is your turn
        2. resolve the request against the legal moves
        3. apply it. If the round just ended, it counts towards the match score.
        4. store the new state
        """
        stored_model = self._fetch_session(request.session_id)
        player_color = self._get_player_color(stored_model, request.player_name)

        game = GameLogic.from_model(stored_model)
        score = MatchScore.from_model(stored_model)
        if game.is_game_over():
            raise GameStateError(f"Game is not in progress. state: {game.state.name}")
        self._assert_your_turn(game, player_color)

        move = game.resolve_move(request.move.to_move())
        if move is None:
            raise IllegalMoveError(f"Move not allowed: {request.move.to_move()}")

        turn_ended = game.apply_move(move)
        if game.is_game_over():
            score.record_game_result(game.state)

        after_move = self._to_model(stored_model, game, score)
        self.repo.update_session(request.session_id, after_move)

        return MoveResponse(
            session_id=request.session_id,
            move=MoveModel.from_move(move),
            turn_ended=turn_ended,
            session=self._create_session_response(request.session_id, after_move),
        )

    def forfeit_round(self, request: ForfeitRequest) -> SessionResponse:
        """A player gives up the current round: the opponent wins it."""
        stored_model = self._fetch_session(request.session_id)
        player_color = self._get_player_color(stored_model, request.player_name)

        game = GameLogic.from_model(stored_model)
        score = MatchScore.from_model(stored_model)
        if game.is_game_over():
            raise GameStateError(f"Game is not in progress. state: {game.state.name}")

        score.record_forfeit(player_color)
        game.state = GameState.winner_of(player_color.opponent())
        game.multi_jump_position = None
        logger.info("Session %s: %s forfeited the round", request.session_id, request.player_name)

        after_forfeit = self._to_model(stored_model, game, score)
        self.repo.update_session(request.session_id, after_forfeit)
        return self._create_session_response(request.session_id, after_forfeit)

    def start_new_round(self, request: GetSessionRequest) -> SessionResponse:
        """
        Next game of the match.
        ----

        * Match already decided? --> refuse (reset the match first)
        * Current round still being played? --> counts as a forfeit by the player to move
        """
        stored_model = self._fetch_session(request.session_id)
        game = GameLogic.from_model(stored_model)
        score = MatchScore.from_model(stored_model)
        if score.is_match_over():
            raise GameStateError(
                f"Match is over: {score.match_result_message()} Reset the match to play again."
            )

        if not game.is_game_over():
            score.record_forfeit(game.current_player)
        game.reset()
        logger.info("Session %s: starting game %d", request.session_id, score.current_game_number())

        new_round = self._to_model(stored_model, game, score)
        self.repo.update_session(request.session_id, new_round)
        return self._create_session_response(request.session_id, new_round)

    def reset_match(self, request: GetSessionRequest) -> SessionResponse:
        """Back to 0 - 0 with a fresh board."""
        stored_model = self._fetch_session(request.session_id)
        game = GameLogic.from_model(stored_model)
        score = MatchScore.from_model(stored_model)
        game.reset()
        score.reset()

        fresh_match = self._to_model(stored_model, game, score)
        self.repo.update_session(request.session_id, fresh_match)
        return self._create_session_response(request.session_id, fresh_match)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to delete a session record."""
        self.repo.delete_session(request.session_id)

    # -- Internal helpers --
    def _get_player_color(self, model: GameModel, player_name: str) -> Player:
        if player_name == model.white_player:
            return Player.WHITE
        if player_name == model.black_player:
            return Player.BLACK
        raise GameStateError(f"Player {player_name!r} is not part of this session.")

    def _assert_your_turn(self, game: GameLogic, player_color: Player) -> None:
        """You must wait for your turn before making a move."""
        if game.current_player != player_color:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {game.current_player.name} to make a move first."
            )

    def _to_model(self, stored: GameModel, game: GameLogic, score: MatchScore) -> GameModel:
        """Capture the updated game + score in a GameModel (players stay as stored)."""
        return GameModel(
            white_player=stored.white_player,
            black_player=stored.black_player,
            board_state=serialize_board(game.board),
            current_turn=game.current_player.name,
            game_state=game.state.name,
            multi_jump_position=serialize_position(game.multi_jump_position),
            white_wins=score.white_wins,
            black_wins=score.black_wins,
            draws=score.draws,
            games_played=score.games_played,
        )

    def _create_session_response(self, session_id: UUID, model: GameModel) -> SessionResponse:
        """Convert info in GameModel to a SessionResponse (for session with given ID.)"""
        game = GameLogic.from_model(model)
        score = MatchScore.from_model(model)
        winner = score.match_winner()
        return SessionResponse(
            session_id=session_id,
            players={Color.WHITE: model.white_player, Color.BLACK: model.black_player},
            board=board_records(game.board),
            current_turn=Color(game.current_player.name),
            game_state=GameStatus(game.state.name),
            multi_jump_position=(
                SquareModel.from_position(game.multi_jump_position)
                if game.multi_jump_position is not None
                else None
            ),
            status_message=game.status_message(),
            score=ScoreModel(
                white_wins=score.white_wins,
                black_wins=score.black_wins,
                draws=score.draws,
                games_played=score.games_played,
                match_winner=Color(winner.name) if winner is not None else None,
            ),
        )

    def _fetch_session(self, session_id: UUID) -> GameModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        stored_model = self.repo.get_session(session_id)
        if stored_model is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return stored_model
