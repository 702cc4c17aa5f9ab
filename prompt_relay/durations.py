"""Human readable durations in the style of Go's time.Duration"""

NS_PER_US = 1_000
NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000


def _with_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10 ** digits)
    text = str(whole)
    if frac:
        text += "." + f"{frac:0{digits}d}".rstrip("0")
    return text


def format_duration(nanoseconds: int) -> str:
    """
    Format a duration given in nanoseconds.

    Examples: 0 -> "0s", 750 -> "750ns", 123456789 -> "123.456789ms",
    1500000000 -> "1.5s", 123000000000 -> "2m3s".
    """
    if nanoseconds < 0:
        return "-" + format_duration(-nanoseconds)
    if nanoseconds == 0:
        return "0s"
    if nanoseconds < NS_PER_US:
        return f"{nanoseconds}ns"
    if nanoseconds < NS_PER_MS:
        return _with_fraction(nanoseconds, 3) + "µs"
    if nanoseconds < NS_PER_S:
        return _with_fraction(nanoseconds, 6) + "ms"

    whole_seconds, frac_ns = divmod(nanoseconds, NS_PER_S)
    hours, rest = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = _with_fraction(seconds * NS_PER_S + frac_ns, 9) + "s"
    if hours:
        return f"{hours}h{minutes}m{text}"
    if minutes:
        return f"{minutes}m{text}"
    return text
