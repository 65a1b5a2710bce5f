"""Generator and verifier roles of the search, and the per-run entry point."""

import sys
from dataclasses import dataclass, field
from itertools import permutations
from pathlib import Path
from time import time
from typing import Literal, TextIO

from setproctitle import setproctitle

from zarankiewicz.distance_map import get_distance_map
from zarankiewicz.errors import QueueError, SearchError
from zarankiewicz.letters import BASE, Word, base_letter, word_from_str, word_to_str
from zarankiewicz.scoring import Scorer
from zarankiewicz.search.checks import BoundTable, Checker
from zarankiewicz.search.config import SearchConfig
from zarankiewicz.search.config import config as search_config
from zarankiewicz.search.parallel import run_local
from zarankiewicz.search.work_queue import HazelcastRestQueue, WorkQueue
from zarankiewicz.util import (
    FILENAME_TIMESTAMP_FMT,
    int_comma,
    rate_str,
    time_str,
    timestamp_str,
)

Mode = Literal["generator", "verifier", "local"]


@dataclass(kw_only=True)
class SearchContext:
    """Everything a search role needs, built once per process."""

    checker: Checker
    """Pruning predicates, holding the scorer and distance map."""

    work_queue: WorkQueue
    """Queue that candidate words travel through."""

    queue_name: str = "to_check"
    """Name of the candidate queue."""

    poll_timeout: int = 3
    """Seconds a verifier waits for the next word."""

    report_interval: int = 10_000
    """Number of candidates between progress reports."""

    @classmethod
    def from_config(cls, cfg: SearchConfig, *, out: TextIO | None = None) -> "SearchContext":
        """Load or build the distance map and connect to the configured queue service."""
        distance_map = get_distance_map(cfg.distance_map_path, out=out)
        checker = Checker(Scorer(distance_map), BoundTable(), deterministic=cfg.deterministic)
        return cls(
            checker=checker,
            work_queue=HazelcastRestQueue(
                cfg.queue_host, cfg.queue_port, publish_timeout=cfg.publish_timeout
            ),
            queue_name=cfg.queue_name,
            poll_timeout=cfg.poll_timeout,
            report_interval=cfg.report_interval,
        )


@dataclass
class RunStats:
    """Counters reported at the end of a role."""

    examined: int = 0
    """Candidate letters examined (generator) or words checked (verifier)."""

    accepted: int = 0
    """Words published (generator) or words with no dominating reordering (verifier)."""

    start_time: float = field(default_factory=time)
    """Timestamp when the role started, in seconds since the epoch."""

    def summary(self, unit: str) -> str:
        """Return a one-line summary of the counters and throughput."""
        elapsed = time() - self.start_time
        return (
            f"{int_comma(self.examined)} {unit} examined, {int_comma(self.accepted)} accepted "
            f"in {time_str(elapsed)} ({rate_str(self.examined, elapsed, unit)})"
        )


def run_generator(ctx: SearchContext, logf: TextIO, word: Word | None = None) -> RunStats:
    """Publish every check1-surviving one-letter extension of `word` to the work queue.

    Args:
        ctx (SearchContext): The search context.
        logf (TextIO): Stream for progress messages.
        word (Word | None): Word to extend. Defaults to the base letter alone.

    Raises:
        QueueError: if the queue rejects a word or cannot be reached.
    """
    setproctitle(f"zarankiewicz: generator [{ctx.queue_name}]")
    checker = ctx.checker
    if word is None:
        word = (base_letter(checker.scorer.n),)
    antisum = checker.scorer.antisum(word)
    print(f"Extending {word_to_str(word)} (antisum {antisum})", file=logf, flush=True)

    stats = RunStats()
    for letter in permutations(base_letter(checker.scorer.n)):
        stats.examined += 1
        if checker.check1(word, letter, antisum):
            new_word = word + (letter,)
            if not ctx.work_queue.offer(ctx.queue_name, word_to_str(new_word)):
                message = (
                    f"Queue '{ctx.queue_name}' rejected {word_to_str(new_word)} after "
                    f"{int_comma(stats.accepted)} words published "
                    f"({int_comma(stats.examined - 1)} candidates examined)"
                )
                print(message, file=logf, flush=True)
                raise QueueError(message)
            stats.accepted += 1
        if stats.examined % ctx.report_interval == 0:
            print(
                f"{int_comma(stats.examined)} candidates, {int_comma(stats.accepted)} published",
                file=logf,
                flush=True,
            )

    print(f"Generator finished: {stats.summary('candidates')}", file=logf, flush=True)
    return stats


def verify_word(checker: Checker, text: str) -> tuple[Word, list[Word]]:
    """Parse a serialized word and return it with its dominating reorderings."""
    word = word_from_str(text, checker.scorer.n)
    return word, checker.check2(word)


def run_verifier(ctx: SearchContext, logf: TextIO, max_words: int | None = None) -> RunStats:
    """Poll the work queue and run check2 on each word until the queue fails.

    Args:
        ctx (SearchContext): The search context.
        logf (TextIO): Stream that results are written to.
        max_words (int | None): Stop after this many words. If None, poll forever.

    Raises:
        QueueError: when a poll times out or fails; this ends the verifier.
    """
    setproctitle(f"zarankiewicz: verifier [{ctx.queue_name}]")
    stats = RunStats()
    while max_words is None or stats.examined < max_words:
        text = ctx.work_queue.poll(ctx.queue_name, ctx.poll_timeout)
        word, better_words = verify_word(ctx.checker, text)
        stats.examined += 1
        if not better_words:
            stats.accepted += 1
        print(
            f"{word_to_str(word)}: {len(better_words)} dominating reorderings",
            file=logf,
            flush=True,
        )
        for better in better_words:
            print(f"  {word_to_str(better)}", file=logf, flush=True)

    print(f"Verifier finished: {stats.summary('words')}", file=logf, flush=True)
    return stats


def run(mode: Mode, cfg: SearchConfig = search_config) -> None:
    """Run one search role, logging to a new file under `cfg.log_dir`.

    Args:
        mode (Mode): Which role to run.
        cfg (SearchConfig): Search configuration.
    """
    logfile = Path(cfg.log_dir) / mode / f"{timestamp_str(time(), FILENAME_TIMESTAMP_FMT)}.log"
    print(f"Log file: {logfile}")
    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        print(f"Mode: {mode}", file=logf, flush=True)
        print(f"Start time: {timestamp_str(time())}", file=logf, flush=True)
        print(f"Config: {cfg.model_dump()}", file=logf, flush=True)
        try:
            ctx = SearchContext.from_config(cfg, out=logf)
            seed = word_from_str(cfg.seed_word) if cfg.seed_word else (BASE,)
            if mode == "generator":
                run_generator(ctx, logf, seed)
            elif mode == "verifier":
                run_verifier(ctx, logf)
            else:
                run_local(ctx.checker, logf, seed, max_workers=cfg.max_workers)
        except SearchError as e:
            print(f"Fatal: {e}", file=logf, flush=True)
            raise
        except KeyboardInterrupt:
            print("Search interrupted by user.", file=logf, flush=True)
            print("Search interrupted by user.")
            sys.exit(1)
