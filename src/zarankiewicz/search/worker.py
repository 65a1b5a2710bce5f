"""Per-process state and task function for local-mode worker processes."""

from dataclasses import dataclass
from multiprocessing.sharedctypes import Synchronized

from setproctitle import setproctitle

from zarankiewicz.letters import word_from_str, word_to_str
from zarankiewicz.search.checks import Checker


@dataclass(kw_only=True)
class WorkerState:
    """Global state maintained by each worker process."""

    worker_idx: int
    """Index of the worker process."""

    checker: Checker
    """Pruning predicates, including this worker's copy of the distance map."""


worker_state: WorkerState | None = None
"""Global state for each worker process."""


def init_worker_globals(worker_ctr: "Synchronized[int]", checker: Checker) -> None:
    """Initialize global variables for worker processes.

    Args:
        worker_ctr (Synchronized[int]): Shared counter for workers.
        checker (Checker): Pruning predicates to use in this worker.
    """
    global worker_state  # noqa: PLW0603
    with worker_ctr.get_lock():
        # Get and set the shared worker counter atomically, using the obtained value
        # as the worker index
        worker_idx = worker_ctr.value
        worker_ctr.value += 1

    worker_state = WorkerState(worker_idx=worker_idx, checker=checker)
    setproctitle(f"zarankiewicz: worker {worker_idx}")


def worker_task(word: str) -> list[str]:
    """Run check2 on a serialized word.

    Args:
        word (str): The word, in its space-separated text form.

    Returns:
        The dominating reorderings, in text form.
    """
    if not worker_state:
        raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")

    checker = worker_state.checker
    better_words = checker.check2(word_from_str(word, checker.scorer.n))
    return [word_to_str(better) for better in better_words]
