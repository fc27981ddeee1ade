"""Caller-facing argument checks.

Every public search, answer and conversation operation runs these before
touching a provider or a store.
"""

from vita.exceptions import InvalidInputError

MAX_TEMPERATURE = 2.0


def require_text(value: str | None, name: str) -> str:
    """Return ``value`` if it has non-whitespace content."""
    if value is None or not value.strip():
        raise InvalidInputError(f"{name} must not be empty")
    return value


def check_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidInputError(f"limit must be an integer >= 1, got {limit!r}")
    return limit


def check_threshold(threshold: float) -> float:
    if not 0.0 <= threshold <= 1.0:
        raise InvalidInputError(f"threshold must be between 0 and 1, got {threshold!r}")
    return float(threshold)


def check_temperature(temperature: float) -> float:
    if not 0.0 <= temperature <= MAX_TEMPERATURE:
        raise InvalidInputError(
            f"temperature must be between 0 and {MAX_TEMPERATURE:g}, got {temperature!r}"
        )
    return float(temperature)


def check_search_args(limit: int, threshold: float) -> tuple[int, float]:
    return check_limit(limit), check_threshold(threshold)
