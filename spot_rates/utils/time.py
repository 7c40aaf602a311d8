import time


def current_millis() -> int:
    """Returns the current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)
