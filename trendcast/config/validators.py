"""Shared validators for Pydantic config models."""


def validate_weights_sum(
    values: dict[str, float],
    tolerance: float = 0.01,
    expected_sum: float = 1.0,
) -> None:
    """Validate that numeric values sum to expected value.

    Args:
        values: Dictionary of field names to weight values
        tolerance: Allowed deviation from expected_sum
        expected_sum: Expected sum of all weights

    Raises:
        ValueError: If sum deviates from expected by more than tolerance
    """
    total = sum(values.values())
    if abs(total - expected_sum) > tolerance:
        raise ValueError(f"Weights must sum to {expected_sum} (got {total:.2f}). Values: {values}")


def normalize_keyword_list(values: list[str]) -> list[str]:
    """Strip keywords, drop blanks and duplicates while keeping order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        keyword = value.strip()
        if keyword and keyword not in seen:
            seen.add(keyword)
            result.append(keyword)
    return result


__all__ = [
    "validate_weights_sum",
    "normalize_keyword_list",
]
