def overlaps(a_start: int, a_duration: int, b_start: int, b_duration: int) -> bool:
    """Half-open overlap test for [start, start + duration) intervals in minutes.

    An interval ending exactly when the other begins does not overlap it.
    """
    return a_start < b_start + b_duration and a_start + a_duration > b_start
