"""Run the search with `python -m zarankiewicz [host|local]`."""

from zarankiewicz import main

main()
