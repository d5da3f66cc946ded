# src/catch_rl/game/core/api.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import numpy as np

from catch_rl.game.core.constants import CHANCE_PLAYER_ID
from catch_rl.game.core.errors import IllegalActionError

ActionsAndProbs = List[Tuple[int, float]]


class Game(ABC):
    """
    Static description of a turn-based game.

    A Game is immutable once built and acts as a factory for fresh States.
    Drivers only rely on the methods declared here.
    """

    @abstractmethod
    def new_initial_state(self) -> "State": ...

    @abstractmethod
    def num_distinct_actions(self) -> int: ...

    @abstractmethod
    def max_chance_outcomes(self) -> int: ...

    @abstractmethod
    def num_players(self) -> int: ...

    @abstractmethod
    def min_utility(self) -> float: ...

    @abstractmethod
    def max_utility(self) -> float: ...

    @abstractmethod
    def max_game_length(self) -> int: ...

    @abstractmethod
    def observation_tensor_shape(self) -> Tuple[int, ...]: ...

    @abstractmethod
    def information_state_tensor_shape(self) -> Tuple[int, ...]: ...


class State(ABC):
    """
    Mutable per-episode state of a Game.

    Contracts:

      - apply_action() validates the action against legal_actions() and then
        delegates to _do_apply_action(). Illegal actions raise, they are never
        silently dropped.
      - history() lists every applied action id (chance outcomes included),
        oldest first.
      - A State is owned by one driver; clone() is the only way to share it.
    """

    def __init__(self, game: Game) -> None:
        self._game = game
        self._history: list[Tuple[int, int]] = []

    @property
    def game(self) -> Game:
        return self._game

    # ---- capability set ----------------------------------------------------

    @abstractmethod
    def current_player(self) -> int: ...

    @abstractmethod
    def legal_actions(self) -> List[int]: ...

    @abstractmethod
    def chance_outcomes(self) -> ActionsAndProbs: ...

    @abstractmethod
    def is_terminal(self) -> bool: ...

    @abstractmethod
    def returns(self) -> List[float]: ...

    @abstractmethod
    def undo_action(self, player: int, action: int) -> None: ...

    @abstractmethod
    def clone(self) -> "State": ...

    @abstractmethod
    def action_to_string(self, player: int, action: int) -> str: ...

    @abstractmethod
    def observation_tensor(self, player: int = 0) -> np.ndarray: ...

    @abstractmethod
    def information_state_tensor(self, player: int = 0) -> np.ndarray: ...

    @abstractmethod
    def _do_apply_action(self, action: int) -> None: ...

    # ---- shared behaviour --------------------------------------------------

    def apply_action(self, action: int) -> None:
        a = int(action)
        legal = self.legal_actions()
        if not legal:
            raise IllegalActionError(f"no legal actions in this state (terminal={self.is_terminal()}); got action={a}")
        if a not in legal:
            raise IllegalActionError(f"action {a} is not legal here; legal={legal}")
        player = self.current_player()
        self._do_apply_action(a)
        self._history.append((int(player), a))

    def is_chance_node(self) -> bool:
        return self.current_player() == CHANCE_PLAYER_ID

    def is_player_node(self) -> bool:
        return self.current_player() >= 0

    def rewards(self) -> List[float]:
        return self.returns()

    def history(self) -> List[int]:
        return [a for _p, a in self._history]

    def full_history(self) -> List[Tuple[int, int]]:
        return list(self._history)

    def history_str(self) -> str:
        return ", ".join(str(a) for a in self.history())

    def move_number(self) -> int:
        return len(self._history)

    def legal_actions_mask(self) -> np.ndarray:
        if self.is_chance_node():
            n = max(int(self._game.max_chance_outcomes()), int(self._game.num_distinct_actions()))
        else:
            n = int(self._game.num_distinct_actions())
        return mask_from_actions(self.legal_actions(), n)

    def _pop_history(self, player: int, action: int) -> None:
        if not self._history:
            raise IllegalActionError("undo_action() called with an empty history")
        last = self._history[-1]
        if last != (int(player), int(action)):
            raise IllegalActionError(
                f"undo_action(player={player}, action={action}) does not match the last transition {last}"
            )
        self._history.pop()

    def _copy_history_from(self, other: "State") -> None:
        self._history = list(other._history)

    def __str__(self) -> str:
        return self.history_str()


def mask_from_actions(actions: Sequence[int], size: int) -> np.ndarray:
    mask = np.zeros((int(size),), dtype=np.int8)
    for a in actions:
        mask[int(a)] = 1
    return mask


__all__ = ["ActionsAndProbs", "Game", "State", "mask_from_actions"]
