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

"""Tests for the form watcher debouncer."""

import asyncio

from absl.testing import absltest

from storefront_checkout.helpers.debounce import Debouncer


class DebouncerTest(absltest.TestCase):

  def test_only_last_value_fires(self) -> None:
    seen = []

    async def record(value):
      seen.append(value)

    async def scenario():
      debouncer = Debouncer(record, delay=0.05)
      for value in ("U", "US"):
        debouncer.trigger(value)
        await asyncio.sleep(0.01)
      await debouncer.settle()
      self.assertFalse(debouncer.pending)

    asyncio.run(scenario())
    self.assertEqual(seen, ["US"])

  def test_cancel_drops_pending_value(self) -> None:
    seen = []

    async def record(value):
      seen.append(value)

    async def scenario():
      debouncer = Debouncer(record, delay=0.05)
      debouncer.trigger("GB")
      debouncer.cancel()
      await debouncer.settle()

    asyncio.run(scenario())
    self.assertEqual(seen, [])

  def test_started_callback_is_not_cancelled(self) -> None:
    finished = []

    async def scenario():
      gate = asyncio.Event()

      async def slow(value):
        gate.set()
        await asyncio.sleep(0.02)
        finished.append(value)

      debouncer = Debouncer(slow, delay=0)
      debouncer.trigger("first")
      await gate.wait()
      debouncer.trigger("second")
      await debouncer.settle()

    asyncio.run(scenario())
    self.assertEqual(finished, ["first", "second"])


if __name__ == "__main__":
  absltest.main()
