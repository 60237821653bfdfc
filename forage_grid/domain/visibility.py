"""Per-agent vision windows.

A cell is visible to an agent iff its Chebyshev distance from the agent is
at most the vision radius: a square window of side ``2 * radius + 1``
clipped to the grid. The field is derived state, rebuilt in full on every
refresh; nothing carries over between turns.
"""

from __future__ import annotations

import numpy as np

from forage_grid.domain.grid_world import Agent, GridWorld, Position


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class VisibilityField:
    """Vision windows for every agent in *world*.

    ``radius=None`` means unlimited vision: the whole board is visible.
    """

    def __init__(self, world: GridWorld, radius: int | None) -> None:
        if radius is not None and radius < 0:
            raise ValueError("radius must be >= 0 or None")
        self.world = world
        self.radius = radius
        self._visible: dict[int, frozenset[Position]] = {}

    def _window_bounds(self, pos: Position) -> tuple[int, int, int, int]:
        """Inclusive (row_lo, row_hi, col_lo, col_hi) of the clipped window."""
        world = self.world
        if self.radius is None:
            return 0, world.rows - 1, 0, world.columns - 1
        row, col = pos
        return (
            max(row - self.radius, 0),
            min(row + self.radius, world.rows - 1),
            max(col - self.radius, 0),
            min(col + self.radius, world.columns - 1),
        )

    def is_visible_from(self, origin: Position, pos: Position) -> bool:
        if not self.world.in_bounds(pos):
            return False
        return self.radius is None or chebyshev(origin, pos) <= self.radius

    def visible_cells(self, pos: Position) -> frozenset[Position]:
        """All in-bounds cells within the vision window centred on *pos*."""
        row_lo, row_hi, col_lo, col_hi = self._window_bounds(pos)
        return frozenset(
            (r, c) for r in range(row_lo, row_hi + 1) for c in range(col_lo, col_hi + 1)
        )

    def compute_visible(self, agent: Agent) -> frozenset[Position]:
        return self.visible_cells(agent.position)

    def newly_revealed(self, current: Position, candidate: Position) -> int:
        """Count cells visible from *candidate* but not from *current*."""
        return len(self.visible_cells(candidate) - self.visible_cells(current))

    def recompute(self) -> dict[int, frozenset[Position]]:
        """Rebuild the window of every agent from current positions."""
        self._visible = {
            agent.agent_id: self.compute_visible(agent) for agent in self.world.agents
        }
        return dict(self._visible)

    def visible_to(self, agent_id: int) -> frozenset[Position]:
        """Window of *agent_id* as of the last :meth:`recompute`."""
        try:
            return self._visible[agent_id]
        except KeyError:
            raise KeyError(f"no visibility computed for agent {agent_id}") from None

    def union(self) -> frozenset[Position]:
        cells: set[Position] = set()
        for window in self._visible.values():
            cells |= window
        return frozenset(cells)

    def mask(self, agent_id: int | None = None) -> np.ndarray:
        """Return (rows, columns) bool array of visible cells.

        With *agent_id* the mask covers that agent's window only; otherwise the
        union of all windows, as a renderer would shade it.
        """
        mask = np.zeros((self.world.rows, self.world.columns), dtype=bool)
        agent_ids = [agent_id] if agent_id is not None else list(self._visible)
        for aid in agent_ids:
            for row, col in self.visible_to(aid):
                mask[row, col] = True
        return mask
