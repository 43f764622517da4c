"""Module with project-wide numeric utilities."""


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """
    Clamp a value to an inclusive range.

    Args:
        value (float): Value to be clamped.
        lower (float, optional): Lower bound. Defaults to 0.0.
        upper (float, optional): Upper bound. Defaults to 1.0.

    Returns:
        float: The value limited to [lower, upper].
    """
    return max(lower, min(upper, value))


def capped(value: float, cap: float) -> float:
    """Clip a non-negative accumulator at `cap` and rescale it to [0, 1]."""
    return clamp(value, 0.0, cap) / cap


def to_score(value: float) -> int:
    """
    Convert a value on the 0-100 scale into an integer score.

    Args:
        value (float): Possibly out of range value.

    Returns:
        int: Rounded value clamped to [0, 100].
    """
    return round(clamp(value, 0.0, 100.0))


def map_score_to_confidence(score: float) -> float:
    """
    Turn a probability into confidence as its distance from the undecided 0.5.

    Args:
        score (float): Probability, clamped to [0, 1] first.

    Returns:
        float: 0.0 at 0.5, rising linearly to 1.0 at either end.
    """
    return abs(clamp(score) - 0.5) * 2
