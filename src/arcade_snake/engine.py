"""Step-based game engine composing grid, snake, food and high score."""

from __future__ import annotations

import logging

import numpy as np

from arcade_snake.config import GameConfig
from arcade_snake.food import FoodSpawner
from arcade_snake.grid import Grid
from arcade_snake.persistence import HighScoreStore, MemoryHighScoreStore
from arcade_snake.snake import Direction, Snake
from arcade_snake.state import GameState, Phase

logger = logging.getLogger(__name__)

INITIAL_DIRECTION = Direction.UP


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the :class:`GameState` and is its only writer. Phase
    changes go through :meth:`start`, :meth:`pause`, :meth:`resume` and
    :meth:`reset`; each returns ``False`` and leaves the state untouched
    when called from a phase it does not apply to. Each call to
    :meth:`step` advances an active game by one tick and returns the
    updated state dictionary.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(size=self.config.grid_size)
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.store = store if store is not None else MemoryHighScoreStore()
        self.state = self._fresh_state(high_score=self.store.read())

    def _fresh_state(self, high_score: int) -> GameState:
        center = self.config.grid_size // 2
        snake = Snake(
            center, center, INITIAL_DIRECTION,
            length=self.config.initial_length,
        )
        return GameState(
            snake=snake,
            food=self.food_spawner.place(snake),
            facing=INITIAL_DIRECTION,
            pending=INITIAL_DIRECTION,
            high_score=high_score,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def game_over(self) -> bool:
        return self.state.phase is Phase.TERMINATED

    # --- phase transitions ---

    def start(self, direction: Direction | None = None) -> bool:
        """Leave Idle, optionally queueing an initial direction."""
        if self.state.phase is not Phase.IDLE:
            return False
        if direction is not None:
            self._queue_direction(direction)
        self.state.phase = Phase.ACTIVE
        logger.debug("Game started heading %s.", self.state.pending.name)
        return True

    def pause(self) -> bool:
        if self.state.phase is not Phase.ACTIVE:
            return False
        self.state.phase = Phase.PAUSED
        return True

    def resume(self) -> bool:
        if self.state.phase is not Phase.PAUSED:
            return False
        self.state.phase = Phase.ACTIVE
        return True

    def reset(self) -> bool:
        """Return a finished game to Idle with a fresh board."""
        if self.state.phase is not Phase.TERMINATED:
            return False
        self.state = self._fresh_state(high_score=self.state.high_score)
        return True

    def set_direction(self, direction: Direction) -> bool:
        """Queue *direction* for the next step while the game is active.

        Reversals are judged against the facing direction, not the pending
        one, so two quick turns cannot add up to a 180° turn.
        """
        if self.state.phase is not Phase.ACTIVE:
            return False
        return self._queue_direction(direction)

    def _queue_direction(self, direction: Direction) -> bool:
        if direction.is_reverse_of(self.state.facing):
            return False
        self.state.pending = direction
        return True

    # --- simulation ---

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        state = self.state
        if state.phase is not Phase.ACTIVE:
            return self.get_state()

        direction = state.pending
        next_x, next_y = state.snake.next_head(direction)
        state.facing = direction

        # Checked against the pre-move body, tail included.
        if (
            not self.grid.in_bounds(next_x, next_y)
            or state.snake.occupies(next_x, next_y)
        ):
            self._terminate()
            return self.get_state()

        will_grow = state.food == (next_x, next_y)
        state.snake.advance(direction, grow=will_grow)

        if will_grow:
            state.score += self.config.food_reward
            self._record_score()
            state.food = self.food_spawner.place(state.snake)

        state.tick += 1
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.state.to_dict(self.grid)

    def _record_score(self) -> None:
        state = self.state
        # The store may be shared with other engines that set a record
        # since this one last looked.
        state.high_score = max(state.high_score, self.store.read())
        if state.score <= state.high_score:
            return
        state.high_score = state.score
        logger.info("New high score: %d.", state.high_score)
        self.store.write(state.high_score)

    def _terminate(self) -> None:
        """Freeze the board and end the game."""
        self.state.phase = Phase.TERMINATED
        self.state.tick += 1
        logger.info(
            "Snake died at tick %d with score %d.",
            self.state.tick, self.state.score,
        )
