"""Local mode: generate candidates in-process and verify them on a process pool."""

import os
import traceback
from collections.abc import Iterable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from multiprocessing import Value
from multiprocessing.sharedctypes import Synchronized
from time import time
from typing import Literal, TextIO

from zarankiewicz.errors import InvariantViolation
from zarankiewicz.letters import Word, word_to_str
from zarankiewicz.search.checks import Checker
from zarankiewicz.search.worker import init_worker_globals, worker_task
from zarankiewicz.util import int_comma, time_str


@dataclass
class Result:
    """Wrapper for worker task results."""

    word: str
    status: Literal["survivor", "dominated", "error"]
    better_words: list[str] = field(default_factory=list)
    err_msg: str | None = None


def _worker_task(word: str) -> Result:
    """Run `worker_task`, converting failures into an error Result."""
    try:
        better_words = worker_task(word)
        return Result(
            word=word,
            status="dominated" if better_words else "survivor",
            better_words=better_words,
        )
    except Exception as e:
        return Result(
            word=word,
            status="error",
            err_msg=f"Worker encountered an error: {str(e)}\n{traceback.format_exc()}",
        )


def get_executor(checker: Checker, *, n_workers: int | None = None) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor whose workers share a copy of `checker`.

    Args:
        checker (Checker): Pruning predicates to hand to every worker.
        n_workers (int | None): Number of worker processes to create.  If None,
            defaults to number of CPU cores minus one.
    """
    worker_ctr: Synchronized[int] = Value("i", 0)

    cpus = os.cpu_count() or 1
    if n_workers is None:
        n_workers = max(1, cpus - 1)
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(worker_ctr, checker),
    )


def verify_in_parallel(
    executor: ProcessPoolExecutor, words: Iterable[Word], logf: TextIO
) -> list[Result]:
    """Run check2 on every word and collect the results, sorted by word.

    Raises:
        InvariantViolation: if any worker fails.
    """
    futures = [executor.submit(_worker_task, word_to_str(word)) for word in words]
    results: list[Result] = []
    for future in as_completed(futures):
        result = future.result()
        if result.status == "error":
            print(f"Error verifying {result.word}:", file=logf, flush=True)
            print(result.err_msg, file=logf, flush=True)
            raise InvariantViolation(f"Verification of {result.word} failed")
        print(
            f"{result.word}: {len(result.better_words)} dominating reorderings",
            file=logf,
            flush=True,
        )
        results.append(result)

    results.sort(key=lambda result: result.word)
    return results


def run_local(
    checker: Checker, logf: TextIO, word: Word, *, max_workers: int | None = None
) -> list[Result]:
    """Extend `word` by every check1-surviving letter and verify the extensions in parallel.

    Args:
        checker (Checker): Pruning predicates.
        logf (TextIO): Stream for progress messages.
        word (Word): Word to extend.
        max_workers (int | None): Number of worker processes, see `get_executor`.

    Returns:
        One Result per extension, sorted by word.
    """
    start_time = time()
    candidates = list(checker.extensions(word))
    print(
        f"Generated {int_comma(len(candidates))} extensions of {word_to_str(word)}",
        file=logf,
        flush=True,
    )
    if not candidates:
        return []

    with get_executor(checker, n_workers=max_workers) as executor:
        try:
            results = verify_in_parallel(executor, candidates, logf)
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

    survivors = [result for result in results if result.status == "survivor"]
    print(
        f"{int_comma(len(survivors))} of {int_comma(len(results))} words have no dominating "
        f"reordering ({time_str(time() - start_time)})",
        file=logf,
        flush=True,
    )
    for result in survivors:
        print(f"  {result.word}", file=logf, flush=True)
    return results
