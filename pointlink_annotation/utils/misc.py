import itertools


def incrf(start: int = 1):
    """Endless counter, used to mint point identifiers."""
    return itertools.count(start)
