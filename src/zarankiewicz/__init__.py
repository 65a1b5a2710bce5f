"""Search for a counter-example to the Zarankiewicz bound on antisums.

Candidate (k, n)-sets are words over permutations of `0..n-1`.  A generator process extends
a word by every letter that can still meet the bound and publishes the extensions to a work
queue.  Verifier processes take words from the queue and look for reorderings that
dominate them.
"""

from sys import argv, exit, stderr

from .errors import SearchError
from .search.driver import Mode, run


def get_mode(args: list[str]) -> Mode:
    """Select the role from command-line tokens: "host" for the generator, "local" for a
    single-machine run, anything else for a verifier."""
    if "host" in args:
        return "generator"
    if "local" in args:
        return "local"
    return "verifier"


def main() -> None:
    """Main entry point for the search."""
    try:
        run(get_mode(argv[1:]))
    except SearchError as e:
        print(f"Fatal: {e}", file=stderr)
        exit(1)
