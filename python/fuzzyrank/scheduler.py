"""Ranking runs over candidate lists, synchronous or cooperative.

A ``Ranking`` walks the candidates from the last one to the first, scoring
each and folding it into a ``TopK``. Run synchronously it never suspends.
Run under asyncio it checks the clock every ``ITEMS_PER_CHECK`` candidates
and, once ``ASYNC_INTERVAL`` has passed, yields to the event loop before
resuming at the same position. Cancellation is cooperative: it is noticed
the next time the run resumes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Generator, Optional, Sequence, Union

from fuzzyrank._utils import as_target, get_value
from fuzzyrank.constants import ASYNC_INTERVAL, ITEMS_PER_CHECK
from fuzzyrank.exceptions import CanceledError
from fuzzyrank.heap import TopK
from fuzzyrank.models import KeysResult, Prepared, Result, Results
from fuzzyrank.options import Options

logger = logging.getLogger(__name__)

Matcher = Callable[[Union[str, Prepared]], Optional[Result]]


class Ranking:
    """
    One ranking run of a query over a list of candidates.

    Args:
        targets: Candidate strings, prepared candidates, or records.
        match: Scores one extracted string or prepared candidate.
        options: Resolved options for the run.
    """

    def __init__(self, targets: Sequence[Any], match: Matcher, options: Options):
        self.targets = targets
        self.options = options
        self.cursor = len(targets) - 1
        self._match = match
        self._top = TopK(options.limit)

    def _extract(self, item: Any) -> list:
        """The zero or more matchable values of one candidate."""
        if self.options.keys is not None:
            return [as_target(get_value(item, k)) for k in self.options.keys]
        if self.options.key is not None:
            return [as_target(get_value(item, self.options.key))]
        return [as_target(item)]

    def _score_item(self, item: Any) -> Optional[Any]:
        results = [None if t is None else self._match(t) for t in self._extract(item)]

        if self.options.keys is not None:
            entry = KeysResult(results, obj=item)
            score = self.options.reducer(entry)
            if score is None:
                return None
            entry.score = score
        else:
            entry = results[0]
            if entry is None:
                return None
            if self.options.key is not None:
                entry.obj = item
            score = entry.score

        threshold = self.options.threshold
        if threshold is not None and score < threshold:
            return None
        return entry

    def _advance(self) -> int:
        """Process the candidate under the cursor; return its index."""
        i = self.cursor
        entry = self._score_item(self.targets[i])
        if entry is not None:
            self._top.push(entry)
        self.cursor -= 1
        return i

    @property
    def done(self) -> bool:
        return self.cursor < 0

    def run(self) -> Results:
        """Process every remaining candidate and return the ranked results."""
        while not self.done:
            self._advance()
        return self._top.drain()

    def steps(self) -> Generator[None, None, Results]:
        """Process candidates, yielding whenever the time budget is spent.

        The generator's return value is the ranked results.
        """
        while not self.done:
            started = time.perf_counter()
            while not self.done:
                i = self._advance()
                if i % ITEMS_PER_CHECK == 0 and time.perf_counter() - started >= ASYNC_INTERVAL:
                    break
            if not self.done:
                yield
        return self._top.drain()

    async def run_async(self, is_canceled: Callable[[], bool]) -> Results:
        """Process the candidates cooperatively on the running event loop."""
        steps = self.steps()
        while True:
            if is_canceled():
                logger.debug("Ranking canceled with %d candidates left", self.cursor + 1)
                raise CanceledError("canceled")
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value
            logger.debug("Yielding to event loop at candidate %d", self.cursor)
            await asyncio.sleep(0)


def _retrieve_exception(task: "asyncio.Task[Results]") -> None:
    # Canceled handles may be dropped without ever being awaited
    if not task.cancelled():
        task.exception()


class RankTask:
    """
    Cancelable handle on an asynchronous ranking run.

    Created by ``go_async``, which must be called while an asyncio event loop
    is running; the run is scheduled immediately. Await the handle to get the
    ``Results``. After ``cancel()``, awaiting raises ``CanceledError`` instead
    of returning partial results.

    Example:
        >>> task = fuzzyrank.go_async("mr", files)
        >>> results = await task
    """

    def __init__(self, ranking: Ranking):
        self._canceled = False
        self._task = asyncio.get_running_loop().create_task(
            ranking.run_async(lambda: self._canceled)
        )
        self._task.add_done_callback(_retrieve_exception)

    def cancel(self) -> None:
        """Request cancellation; takes effect at the next resumption.

        Does nothing once the run has finished.
        """
        if not self._task.done():
            self._canceled = True

    @property
    def canceled(self) -> bool:
        return self._canceled

    def done(self) -> bool:
        return self._task.done()

    def __await__(self) -> Generator[Any, None, Results]:
        return self._task.__await__()

    def __repr__(self) -> str:
        state = "canceled" if self._canceled else ("done" if self.done() else "pending")
        return f"RankTask({state})"


__all__ = ["Ranking", "RankTask"]
