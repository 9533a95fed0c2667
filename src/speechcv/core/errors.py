# errors.py
"""Exception and warning types raised by the evaluation core."""


class InvalidFoldIndex(ValueError):
    """Fold index outside ``1..k``."""


class InvalidInput(ValueError):
    """Mismatched lengths, unknown labels, empty grids and similar misuse."""


class DegenerateFoldWarning(UserWarning):
    """A metric had a zero denominator and was reported as 0."""
