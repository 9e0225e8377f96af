from datetime import UTC, datetime


def utc_now() -> datetime:
    """Returns the current time as an aware UTC datetime."""
    return datetime.now(UTC)

def elapsed_ms(start: float, end: float) -> int:
    """Converts two perf_counter readings into whole milliseconds."""
    return int((end - start) * 1000)
