"""The play queue: its order, shuffling, repeating and what is playing."""

from __future__ import annotations

import logging
import random
import threading
from datetime import timedelta
from enum import Enum
from typing import Optional, Protocol, Sequence

from tuispot.command import RepeatSetting
from tuispot.config import Config
from tuispot.model.playable import Playable

logger = logging.getLogger(__name__)


class PlayerStatus(Enum):
    """What the player is doing."""

    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"
    FINISHED_TRACK = "finished_track"


class Player(Protocol):
    """The audio player the queue drives."""

    def load(self, item: Playable, start_playing: bool, position_ms: int) -> None: ...

    def update_track(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, position_ms: int) -> None: ...

    def stop(self) -> None: ...

    def toggleplayback(self) -> None: ...

    def preload(self, item: Playable) -> None: ...

    def status(self) -> PlayerStatus: ...


class QueueEvent(Enum):
    """Requests the player makes of the queue."""

    PRELOAD_TRACK_REQUEST = "preload_track_request"


class Queue:
    """The items to play, the one playing, and the shuffled order if any."""

    def __init__(
        self, player: Player, config: Config, rng: Optional[random.Random] = None
    ) -> None:
        self.player = player
        self._config = config
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.RLock()

        state = config.state.queuestate
        self._items: list[Playable] = list(state.queue)
        self._current: Optional[int] = state.current_track
        self._random_order: Optional[list[int]] = (
            None if state.random_order is None else list(state.random_order)
        )

        playable = self.current
        if playable is not None:
            progress = state.track_progress // timedelta(milliseconds=1)
            player.load(playable, False, progress)
            player.update_track()
            player.pause()
            player.seek(progress)

    @property
    def items(self) -> list[Playable]:
        """A copy of the queued items, in queue order."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def next_index(self) -> Optional[int]:
        """The index of the item after the current one, in play order."""
        with self._lock:
            if self._current is None:
                return None
            order = self._random_order
            position = self._current if order is None else order.index(self._current)
            following = position + 1
            if following < len(self._items):
                return following if order is None else order[following]
            return None

    def previous_index(self) -> Optional[int]:
        """The index of the item before the current one, in play order."""
        with self._lock:
            if self._current is None:
                return None
            order = self._random_order
            position = self._current if order is None else order.index(self._current)
            if position > 0:
                preceding = position - 1
                return preceding if order is None else order[preceding]
            return None

    @property
    def current(self) -> Optional[Playable]:
        """The item playing, if any."""
        with self._lock:
            if self._current is None:
                return None
            return self._items[self._current]

    @property
    def current_index(self) -> Optional[int]:
        """The queue index of the item playing, if any."""
        with self._lock:
            return self._current

    @property
    def random_order(self) -> Optional[list[int]]:
        """A copy of the shuffled play order, or ``None`` when not shuffling."""
        with self._lock:
            return None if self._random_order is None else list(self._random_order)

    def insert_after_current(self, track: Playable) -> None:
        """Put ``track`` right after the current item, or at the end if none plays."""
        with self._lock:
            index = self._current
            if index is None:
                self.append(track)
                return
            order = self._random_order
            if order is not None:
                position = order.index(index)
                shifted = [i + 1 if i > index else i for i in order]
                shifted.insert(position + 1, index + 1)
                self._random_order = shifted
            self._items.insert(index + 1, track)

    def append(self, track: Playable) -> None:
        """Put ``track`` at the end of the queue."""
        with self._lock:
            if self._random_order is not None:
                self._random_order.append(max(len(self._random_order) - 1, 0))
            self._items.append(track)

    def append_next(self, tracks: Sequence[Playable]) -> int:
        """Insert ``tracks`` after the current item; return the first one's index."""
        with self._lock:
            if self._random_order is not None:
                size = len(self._items)
                self._random_order.extend(range(max(size - 1, 0), size + len(tracks)))
            first = len(self._items) if self._current is None else self._current + 1
            self._items[first:first] = list(tracks)
            return first

    def remove(self, index: int) -> None:
        """Remove the item at ``index``, keeping playback on a sensible item.

        Raises ``IndexError`` if ``index`` is out of range of a non-empty queue.
        """
        with self._lock:
            if not self._items:
                logger.info("queue is empty")
                return
            if not 0 <= index < len(self._items):
                raise IndexError(f"queue index out of range: {index}")
            del self._items[index]

            size = len(self._items)
            if size == 0:
                self.stop()
                return

            current = self._current
            if current is not None:
                if current == index:
                    if current == size:
                        if self.repeat is RepeatSetting.REPEAT_PLAYLIST:
                            self.next(False)
                        else:
                            self.stop()
                    else:
                        self.play(index, False, False)
                elif current > index:
                    self._current = current - 1

            if self.shuffle:
                self._generate_random_order()

    def clear(self) -> None:
        """Stop playback and empty the queue."""
        with self._lock:
            self.stop()
            self._items.clear()
            if self._random_order is not None:
                self._random_order.clear()

    def shift(self, source: int, target: int) -> None:
        """Move the item at ``source`` to ``target``.

        Raises ``IndexError`` if either index is out of range.
        """
        with self._lock:
            size = len(self._items)
            if not 0 <= source < size or not 0 <= target < size:
                raise IndexError(f"cannot shift {source} to {target} in {size} items")
            item = self._items.pop(source)
            self._items.insert(target, item)

            current = self._current
            if current is not None:
                if current == source:
                    self._current = target
                elif current == target and source > current:
                    self._current = target + 1
                elif current == target and source < current:
                    self._current = target - 1

    def play(self, index: int, reshuffle: bool, shuffle_index: bool) -> None:
        """Start playing the item at ``index``.

        With ``shuffle_index`` and shuffle on, a random item is played instead;
        with ``reshuffle`` and shuffle on, the play order is shuffled afresh.
        """
        with self._lock:
            if shuffle_index and self.shuffle:
                index = self._rng.randrange(len(self._items))

            if 0 <= index < len(self._items):
                track = self._items[index]
                self.player.load(track, True, 0)
                self._current = index
                self.player.update_track()

            if reshuffle and self.shuffle:
                self._generate_random_order()

    def toggleplayback(self) -> None:
        """Pause or resume; when stopped, start the next item or the first."""
        with self._lock:
            status = self.player.status()
            if status in (PlayerStatus.PLAYING, PlayerStatus.PAUSED):
                self.player.toggleplayback()
            elif status is PlayerStatus.STOPPED:
                if self.next_index() is not None:
                    self.next(False)
                else:
                    self.play(0, False, False)

    def stop(self) -> None:
        """Stop playback; no item is current afterwards."""
        with self._lock:
            self._current = None
            self.player.stop()

    def next(self, manual: bool) -> None:
        """Advance to the next item, following the repeat setting.

        ``manual`` is set when the user asked for it rather than a track ending.
        """
        with self._lock:
            current = self._current
            repeat = self.repeat

            if repeat is RepeatSetting.REPEAT_TRACK and not manual:
                if current is not None:
                    self.play(current, False, False)
                return

            following = self.next_index()
            if following is not None:
                self.play(following, False, False)
                if repeat is RepeatSetting.REPEAT_TRACK and manual:
                    self.repeat = RepeatSetting.REPEAT_PLAYLIST
            elif repeat is RepeatSetting.REPEAT_PLAYLIST and self._items:
                order = self._random_order
                self.play(0 if order is None else order[0], False, False)
            else:
                self.player.stop()

    def previous(self) -> None:
        """Go back to the previous item, following the repeat setting."""
        with self._lock:
            current = self._current
            preceding = self.previous_index()
            if preceding is not None:
                self.play(preceding, False, False)
            elif self.repeat is RepeatSetting.REPEAT_PLAYLIST and self._items:
                last = len(self._items) - 1
                if self.shuffle:
                    order = self._random_order
                    self.play(0 if order is None else order[last], False, False)
                else:
                    self.play(last, False, False)
            elif current is not None:
                self.play(current, False, False)

    @property
    def repeat(self) -> RepeatSetting:
        """The repeat setting, kept in the user state."""
        return self._config.state.repeat

    @repeat.setter
    def repeat(self, value: RepeatSetting) -> None:
        self._config.update_state(lambda state: setattr(state, "repeat", value))

    @property
    def shuffle(self) -> bool:
        """Whether shuffle is on, kept in the user state."""
        return self._config.state.shuffle

    @shuffle.setter
    def shuffle(self, value: bool) -> None:
        with self._lock:
            self._config.update_state(lambda state: setattr(state, "shuffle", value))
            if value:
                self._generate_random_order()
            else:
                self._random_order = None

    def _generate_random_order(self) -> None:
        with self._lock:
            remaining = list(range(len(self._items)))
            order: list[int] = []
            if self._current is not None:
                order.append(self._current)
                del remaining[self._current]
            self._rng.shuffle(remaining)
            order.extend(remaining)
            self._random_order = order

    def handle_event(self, event: QueueEvent) -> None:
        """Act on a request from the player."""
        if event is QueueEvent.PRELOAD_TRACK_REQUEST:
            with self._lock:
                following = self.next_index()
                if following is None:
                    return
                track = self._items[following]
            logger.debug("Preloading track %s as requested by the player", track)
            self.player.preload(track)