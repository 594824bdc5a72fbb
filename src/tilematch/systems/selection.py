from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from esper import World

from tilematch.constants import BAD_SWAP_TIMEOUT, MOUSE_BUTTON_RIGHT, TICK_DT
from tilematch.components.pending_revert import PendingRevert
from tilematch.events.bus import (EventBus, EVENT_TICK, EVENT_TILE_CLICK, EVENT_MOUSE_PRESS,
                                  EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED, EVENT_TILE_TARGETED,
                                  EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REVERTED,
                                  EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                                  EVENT_REFILL_COMPLETED, EVENT_BOARD_SETTLED)
from tilematch.matching.match_info import ComboMatchInfo, TileChange
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import get_selection_state

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class SelectionSystem:
    """Turns tile clicks into swaps and drives their resolution or revert.

    Only one swap is in flight at a time: while a rejected swap waits to be
    swapped back, further clicks are ignored.
    """

    def __init__(self, world: World, event_bus: EventBus, board: BoardSystem, *,
                 bad_swap_timeout: float = BAD_SWAP_TIMEOUT):
        self.world = world
        self.event_bus = event_bus
        self.board = board
        self.bad_swap_timeout = bad_swap_timeout
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def state(self):
        return get_selection_state(self.world)

    @property
    def topology(self):
        return self.board.engine.topology

    @property
    def selected(self) -> Optional[Cell]:
        picked = self.state.picked
        return None if picked is None else self.topology.position_of(picked)

    def revert_pending(self) -> bool:
        return bool(self.world.get_component(PendingRevert))

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not (0 <= row < self.topology.rows and 0 <= col < self.topology.cols):
            return
        if self.revert_pending():
            logger.debug("Click on (%s, %s) ignored while a swap is being reverted", row, col)
            return
        index = self.topology.index_of(row, col)
        if self.board.store.read_tile(index).hidden:
            return
        if self._update_selection(index):
            self.swap_selected()

    def _update_selection(self, clicked: int) -> bool:
        """Apply a click to the selection; True when picked and target are ready to swap."""
        state = self.state
        if state.picked == clicked:
            self._reset_selection(reason='same_tile')
            return False
        if state.picked is not None:
            store = self.board.store
            if store.read_tile(state.picked).type_id == store.read_tile(clicked).type_id:
                self._repick(clicked)
                return False
            if state.target is None and self.topology.is_adjacent(state.picked, clicked):
                state.target = clicked
                row, col = self.topology.position_of(clicked)
                self.event_bus.emit(EVENT_TILE_TARGETED, row=row, col=col)
                return True
        self._repick(clicked)
        return False

    def _repick(self, index: int) -> None:
        state = self.state
        if state.picked is not None:
            self._reset_selection(reason='repick')
        state.picked = index
        row, col = self.topology.position_of(index)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def _reset_selection(self, reason: str) -> None:
        state = self.state
        had_selection = state.picked is not None or state.target is not None
        state.clear()
        if had_selection:
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason)

    def swap_selected(self) -> bool:
        """Swap the picked and target tiles; True when the swap produced a combo."""
        state = self.state
        picked, target = state.picked, state.target
        result = self.board.engine.attempt_swap(picked, target)
        src, dst = self.topology.position_of(picked), self.topology.position_of(target)
        if result.accepted and result.combo is not None:
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
            self._reset_selection(reason='resolved')
            self.resolve(result.combo)
            return True
        if result.swapped:
            self.world.create_entity(PendingRevert(picked, target, self.bad_swap_timeout))
            logger.debug("Revert of %s <-> %s scheduled in %.2fs", src, dst, self.bad_swap_timeout)
        else:
            self._reset_selection(reason='rejected')
        self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, delay=self.bad_swap_timeout)
        return False

    def resolve(self, combo: ComboMatchInfo) -> None:
        store = self.board.store
        cells = [self.topology.position_of(index) for index in combo.sorted_positions]
        types = [(*cell, store.read_tile(index).type_id) for cell, index in zip(cells, combo.sorted_positions)]
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=cells, size=len(cells))
        changes = self.board.engine.resolve_combo(combo)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=cells, types=types)
        moves = [
            {'from': self.topology.position_of(move.source),
             'to': self.topology.position_of(move.target),
             'type_name': move.type_name}
            for move in self.board.engine.last_moves
        ]
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        if self.board.refill:
            spawned = self.board.refill_hidden()
            if spawned:
                self.event_bus.emit(EVENT_REFILL_COMPLETED,
                                    new_tiles=[self.topology.position_of(index) for index in spawned])
                changes = self._merge_refill(changes, spawned)
        self.event_bus.emit(EVENT_BOARD_SETTLED, changes=changes)

    def _merge_refill(self, changes: List[TileChange], spawned: List[int]) -> List[TileChange]:
        by_position = {change.position: change for change in changes}
        for index in spawned:
            tile = self.board.store.read_tile(index)
            by_position[index] = TileChange(index, tile.type_id, tile.hidden)
        return [by_position[index] for index in sorted(by_position)]

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', TICK_DT)
        for ent, pending in list(self.world.get_component(PendingRevert)):
            pending.remaining -= dt
            if pending.remaining > 0.0:
                continue
            self.world.delete_entity(ent, immediate=True)
            self.board.engine.revert_swap(pending.first, pending.second)
            logger.debug("Reverted swap %s <-> %s", pending.first, pending.second)
            self._reset_selection(reason='reverted')
            self.event_bus.emit(
                EVENT_TILE_SWAP_REVERTED,
                src=self.topology.position_of(pending.first),
                dst=self.topology.position_of(pending.second),
            )

    def on_mouse_press(self, sender, **kwargs):
        # Right-click clears the current selection unless a swap is in flight.
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        if self.revert_pending():
            return
        self._reset_selection(reason='right_click')
