"""Wall-clock helpers in microseconds."""

import time
import warnings


def get_system_time():
    """Current wall-clock time in integer microseconds."""
    return time.time_ns() // 1000


def get_time_second():
    """Current wall-clock time in seconds."""
    return get_system_time() * 0.000001


def absolute_wait(start_time, wait_time):
    """Block until ``wait_time`` microseconds have passed since ``start_time``.

    Warns with :class:`RuntimeWarning` if that moment has already passed.
    """
    elapsed = get_system_time() - start_time
    if elapsed > wait_time:
        warnings.warn(
            f"The wait_time={wait_time} of absolute_wait is not enough! "
            f"The program has already cost {elapsed}us.",
            RuntimeWarning,
            stacklevel=2,
        )
    remaining = wait_time - (get_system_time() - start_time)
    if remaining > 100:
        time.sleep((remaining - 100) * 1e-6)
    while get_system_time() - start_time < wait_time:
        time.sleep(50e-6)