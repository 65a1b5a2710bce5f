"""Clients for the work queue that connects the generator to the verifiers."""

import queue
import urllib.error
import urllib.request
from collections import defaultdict
from typing import Protocol
from urllib.parse import quote

from zarankiewicz.errors import QueueError


class WorkQueue(Protocol):
    """The two queue operations the search relies on."""

    def offer(self, queue_name: str, item: str) -> bool:
        """Publish `item`, returning whether the queue accepted it."""
        ...

    def poll(self, queue_name: str, timeout: int) -> str:
        """Take the next item, waiting up to `timeout` seconds.

        Raises:
            QueueError: if no item arrived in time or the queue could not be reached.
        """
        ...


class HazelcastRestQueue:
    """Queue client for a Hazelcast member's REST endpoint.

    Offers are `POST /hazelcast/rest/queues/<name>` and polls are
    `GET /hazelcast/rest/queues/<name>/<timeout>`, which answers 204 when the timeout expires.
    """

    def __init__(self, host: str, port: int | str, *, publish_timeout: float = 10.0) -> None:
        self.base_url = f"http://{host}:{port}/hazelcast/rest/queues"
        self.publish_timeout = publish_timeout

    def _url(self, *parts: object) -> str:
        return "/".join([self.base_url, *(quote(str(part), safe="") for part in parts)])

    def offer(self, queue_name: str, item: str) -> bool:
        request = urllib.request.Request(
            self._url(queue_name),
            data=item.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.publish_timeout) as response:
                return response.status == 200
        except urllib.error.HTTPError as e:
            # 503 means the queue is full
            if e.code == 503:
                return False
            raise QueueError(f"Offer to queue '{queue_name}' failed: HTTP {e.code}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise QueueError(f"Offer to queue '{queue_name}' failed: {e}") from e

    def poll(self, queue_name: str, timeout: int) -> str:
        request = urllib.request.Request(self._url(queue_name, timeout), method="GET")
        try:
            # Leave the server time to answer 204 before the socket gives up
            with urllib.request.urlopen(request, timeout=timeout + 5) as response:
                if response.status == 204:
                    raise QueueError(f"Poll on queue '{queue_name}' timed out after {timeout}s")
                return response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            raise QueueError(f"Poll on queue '{queue_name}' failed: HTTP {e.code}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise QueueError(f"Poll on queue '{queue_name}' failed: {e}") from e


class LocalQueue:
    """In-process queue with the same interface, for tests and single-machine runs."""

    def __init__(self, maxsize: int = 0) -> None:
        self._queues: defaultdict[str, queue.Queue[str]] = defaultdict(
            lambda: queue.Queue(maxsize)
        )

    def offer(self, queue_name: str, item: str) -> bool:
        try:
            self._queues[queue_name].put_nowait(item)
        except queue.Full:
            return False
        return True

    def poll(self, queue_name: str, timeout: int) -> str:
        try:
            return self._queues[queue_name].get(timeout=timeout)
        except queue.Empty:
            raise QueueError(
                f"Poll on queue '{queue_name}' timed out after {timeout}s"
            ) from None

    def qsize(self, queue_name: str) -> int:
        """Approximate number of items waiting in `queue_name`."""
        return self._queues[queue_name].qsize()
