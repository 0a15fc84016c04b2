#   Copyright 2026 UCP Authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Asyncio debouncer for form watchers."""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Set

from storefront_checkout.constants import FORM_DEBOUNCE_SECONDS


class Debouncer:
  """Runs a callback with the latest value once input stops changing.

  Each trigger restarts the timer, so only the value from the last trigger
  within the delay window reaches the callback. A callback that has already
  started is never cancelled by later triggers. Must be used from inside a
  running event loop.
  """

  def __init__(
      self,
      callback: Callable[[Any], Awaitable[None]],
      delay: float = FORM_DEBOUNCE_SECONDS,
  ):
    self.callback = callback
    self.delay = delay
    self._timer: Optional[asyncio.Task] = None
    self._running: Set[asyncio.Task] = set()

  @property
  def pending(self) -> bool:
    timer_pending = self._timer is not None and not self._timer.done()
    return timer_pending or bool(self._running)

  def trigger(self, value: Any) -> None:
    self.cancel()
    self._timer = asyncio.get_running_loop().create_task(self._wait(value))

  def cancel(self) -> None:
    """Drops the pending timer, leaving started callbacks alone."""
    if self._timer is not None and not self._timer.done():
      self._timer.cancel()
    self._timer = None

  async def settle(self) -> None:
    """Waits for the pending timer and every started callback to finish."""
    while self.pending:
      timer = self._timer
      if timer is not None and not timer.done():
        try:
          await timer
        except asyncio.CancelledError:
          if timer is self._timer:
            raise
        continue
      await asyncio.gather(*self._running)

  async def _wait(self, value: Any) -> None:
    await asyncio.sleep(self.delay)
    task = asyncio.get_running_loop().create_task(self.callback(value))
    self._running.add(task)
    task.add_done_callback(self._running.discard)
