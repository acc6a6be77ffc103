"""Fixed-width number formatting used by the on-screen info panel."""

from __future__ import annotations

__all__ = ["lli_to_str", "numlen", "ftoa"]


def _trunc_div10(n: int) -> int:
    """Divide by ten, rounding toward zero like C integer division."""
    quotient = abs(n) // 10
    return quotient if n >= 0 else -quotient


def lli_to_str(n: float, length: int) -> str:
    """Write the last ``length`` decimal digits of ``n``, zero padded.

    ``n`` is truncated toward zero first. Digits beyond ``length`` are
    dropped from the left. A negative ``n`` yields remainder characters
    below ``'0'``, exactly as the digit arithmetic produces them.
    """
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    value = int(n)
    digits = []
    for _ in range(length):
        quotient = _trunc_div10(value)
        digits.append(chr(ord("0") + value - quotient * 10))
        value = quotient
    return "".join(reversed(digits))


def numlen(n: float) -> int:
    """Return the printed width of ``n``: its digit count, plus one if negative."""
    value = int(n)
    return len(str(abs(value))) + (1 if value < 0 else 0)


def ftoa(n: float, length: int) -> str:
    """Format ``n`` as a fixed-point string of about ``length`` characters.

    The integer part keeps its natural width; the remaining room after the
    dot holds the truncated fractional digits. When exactly no room is left
    for decimals, the integer part is widened by one leading zero instead.
    """
    whole = int(n)
    whole_len = numlen(whole)
    dec_len = length - whole_len - 1
    if dec_len == 0:
        whole_len += 1
    text = lli_to_str(whole, whole_len)
    if dec_len > 0:
        fraction = (n - whole) * 10.0 ** dec_len
        text = f"{text}.{lli_to_str(fraction, dec_len)}"
    return text