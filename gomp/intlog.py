"""Integer base-2 logarithm."""

_UINT64 = (1 << 64) - 1


def fast_int_log2(value: int) -> int:
    """Return floor(log2(value)) treating ``value`` as an unsigned 64-bit int; -1 for 0."""
    return (value & _UINT64).bit_length() - 1