"""Breadth-first solvability search over board configurations.

The implicit graph has configurations as nodes and single-piece moves
as edges.  Visited states are pruned by :func:`canonical_key`, so a
configuration is expanded at most once and the first goal match popped
from the FIFO queue is a shortest solution.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterator

from klotski.engine.gamesolver.canonical import StateKey, canonical_key
from klotski.engine.movement import move_piece
from klotski.exceptions import SolveInconclusive
from klotski.models.board import Configuration, Direction
from klotski.models.events import MoveEvent, diff_configurations
from klotski.models.level import GoalPredicate
from klotski.utils.logger import get_logger

LOGGER = get_logger(__name__)

Chain = tuple[Configuration, ...]


class Metric(StrEnum):
    """What a single edge of the search graph counts as."""

    UNIT_STEP = "unit-step"
    PIECE_MOVE = "piece-move"


class SolveStatus(StrEnum):
    FOUND = "found"
    EXHAUSTED = "exhausted"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True)
class SolverConfig:
    """Search options.

    ``max_states`` caps the number of distinct states discovered and
    ``time_limit`` the wall time in seconds; exceeding either gives an
    inconclusive result.  ``instance_keys`` keys visited states on piece
    ids instead of type ids.
    """

    metric: Metric = Metric.UNIT_STEP
    max_states: int | None = None
    time_limit: float | None = None
    instance_keys: bool = False


@dataclass(frozen=True)
class SolutionPath:
    """Configurations from the initial state to a goal state.

    Consecutive entries always differ by one unit-step.  ``cost`` is the
    optimal count under ``metric``; ``steps`` is the unit-step length.
    """

    configurations: tuple[Configuration, ...]
    metric: Metric
    cost: int

    def __len__(self) -> int:
        return len(self.configurations)

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self.configurations)

    def __getitem__(self, index: int) -> Configuration:
        return self.configurations[index]

    @property
    def initial(self) -> Configuration:
        return self.configurations[0]

    @property
    def final(self) -> Configuration:
        return self.configurations[-1]

    @property
    def steps(self) -> int:
        return len(self.configurations) - 1

    @property
    def moves(self) -> int:
        """Number of runs of consecutive steps by the same piece."""
        count = 0
        last: int | None = None
        for event in self.events():
            if event.piece_id != last:
                count += 1
                last = event.piece_id
        return count

    def events(self) -> list[MoveEvent]:
        events: list[MoveEvent] = []
        for before, after in zip(self.configurations, self.configurations[1:]):
            events.extend(diff_configurations(before, after))
        return events


@dataclass(frozen=True)
class SearchResult:
    status: SolveStatus
    path: SolutionPath | None
    explored: int
    elapsed: float

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.FOUND


class Solver:
    """Breadth-first solver; every method is static.

    Each call owns its queue and visited set, so concurrent searches on
    different threads never share state.
    """

    @staticmethod
    def solve(
        initial: Configuration,
        goal: GoalPredicate,
        config: SolverConfig | None = None,
    ) -> SolutionPath | None:
        """Return a shortest solution, or ``None`` if *initial* is unsolvable.

        Raises :class:`SolveInconclusive` when a configured budget runs
        out, so "ran out of time" is never mistaken for "unsolvable".
        """
        result = Solver.search(initial, goal, config)
        if result.status is SolveStatus.INCONCLUSIVE:
            raise SolveInconclusive(result.explored, result.elapsed)
        return result.path

    @staticmethod
    async def solve_async(
        initial: Configuration,
        goal: GoalPredicate,
        config: SolverConfig | None = None,
    ) -> SolutionPath | None:
        """Run :meth:`solve` in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(Solver.solve, initial, goal, config)

    @staticmethod
    def hint(
        configuration: Configuration,
        goal: GoalPredicate,
        config: SolverConfig | None = None,
    ) -> MoveEvent | None:
        """Return the first unit-step of a shortest solution, if any."""
        if goal(configuration):
            return None
        path = Solver.solve(configuration, goal, config)
        if path is None or path.steps == 0:
            return None
        return path.events()[0]

    @staticmethod
    def search(
        initial: Configuration,
        goal: GoalPredicate,
        config: SolverConfig | None = None,
    ) -> SearchResult:
        """Breadth-first search from *initial* for a configuration matching *goal*."""
        config = config or SolverConfig()
        started = time.monotonic()
        deadline = None if config.time_limit is None else started + config.time_limit

        LOGGER.debug(
            "Searching %dx%d board with %d pieces (metric=%s)",
            initial.width, initial.height, len(initial.pieces), config.metric.value,
        )

        root = canonical_key(initial, config.instance_keys)
        # key -> (parent key, chain of configurations reaching it, cost)
        parents: dict[StateKey, tuple[StateKey | None, Chain, int]] = {
            root: (None, (initial,), 0)
        }
        queue: deque[tuple[StateKey, Configuration]] = deque([(root, initial)])
        explored = 0

        while queue:
            key, current = queue.popleft()
            explored += 1

            if goal(current):
                path = _reconstruct(parents, key, config.metric)
                elapsed = time.monotonic() - started
                LOGGER.info(
                    "Solved: %d %s(s), %d unit-steps; %d states explored in %.2fs",
                    path.cost, config.metric.value, path.steps, explored, elapsed,
                )
                return SearchResult(SolveStatus.FOUND, path, explored, elapsed)

            if deadline is not None and time.monotonic() >= deadline:
                return _inconclusive(len(parents), explored, started)

            cost = parents[key][2] + 1
            for chain in _expand(current, config.metric):
                successor = chain[-1]
                successor_key = canonical_key(successor, config.instance_keys)
                if successor_key in parents:
                    continue
                if config.max_states is not None and len(parents) >= config.max_states:
                    return _inconclusive(len(parents), explored, started)
                parents[successor_key] = (key, chain, cost)
                queue.append((successor_key, successor))

        elapsed = time.monotonic() - started
        LOGGER.info(
            "Unsolvable: state space exhausted after %d states in %.2fs",
            explored, elapsed,
        )
        return SearchResult(SolveStatus.EXHAUSTED, None, explored, elapsed)

    # -- successor generation -------------------------------------------------

    @staticmethod
    def successors(configuration: Configuration) -> Iterator[Configuration]:
        """Every configuration one unit-step away, piece by piece."""
        for piece in configuration.pieces:
            for direction in Direction:
                moved = move_piece(piece, direction, configuration)
                if moved is not None:
                    yield moved

    @staticmethod
    def piece_moves(configuration: Configuration) -> Iterator[Chain]:
        """Every single-piece move, as the chain of unit-steps it takes.

        A piece may turn corners while the others stay put; each distinct
        end position is yielded once, via a shortest chain.
        """
        for piece in configuration.pieces:
            visited = {piece.position}
            frontier: deque[tuple[Chain, Configuration]] = deque(
                [((), configuration)]
            )
            while frontier:
                chain, base = frontier.popleft()
                current = base.piece(piece.id)
                for direction in Direction:
                    moved = move_piece(current, direction, base)
                    if moved is None:
                        continue
                    position = moved.piece(piece.id).position
                    if position in visited:
                        continue
                    visited.add(position)
                    extended = chain + (moved,)
                    yield extended
                    frontier.append((extended, moved))

    @staticmethod
    def reachable(
        initial: Configuration,
        limit: int | None = None,
        instance_keys: bool = False,
    ) -> Iterator[Configuration]:
        """Yield each distinct configuration reachable from *initial* (BFS order)."""
        seen = {canonical_key(initial, instance_keys)}
        queue = deque([initial])
        while queue:
            current = queue.popleft()
            yield current
            for successor in Solver.successors(current):
                key = canonical_key(successor, instance_keys)
                if key in seen:
                    continue
                if limit is not None and len(seen) >= limit:
                    continue
                seen.add(key)
                queue.append(successor)


# -- helpers ------------------------------------------------------------------


def _expand(configuration: Configuration, metric: Metric) -> Iterator[Chain]:
    if metric is Metric.PIECE_MOVE:
        yield from Solver.piece_moves(configuration)
    else:
        for successor in Solver.successors(configuration):
            yield (successor,)


def _inconclusive(discovered: int, explored: int, started: float) -> SearchResult:
    """Budget ran out while unexplored states were still pending."""
    elapsed = time.monotonic() - started
    LOGGER.warning(
        "Search budget exhausted: %d states discovered, %d explored in %.2fs",
        discovered, explored, elapsed,
    )
    return SearchResult(SolveStatus.INCONCLUSIVE, None, explored, elapsed)


def _reconstruct(
    parents: dict[StateKey, tuple[StateKey | None, Chain, int]],
    key: StateKey,
    metric: Metric,
) -> SolutionPath:
    cost = parents[key][2]
    chains: list[Chain] = []
    current: StateKey | None = key
    while current is not None:
        parent, chain, _ = parents[current]
        chains.append(chain)
        current = parent
    configurations: list[Configuration] = []
    for chain in reversed(chains):
        configurations.extend(chain)
    return SolutionPath(tuple(configurations), metric, cost)
