from typing import Union

SIZE_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_size(num_bytes: Union[int, float]) -> str:
    """
    Format a byte count with binary units, e.g. 1536 -> '1.5 KiB'.

    At most one decimal is shown and a trailing '.0' is dropped.
    """
    size = float(num_bytes)
    unit = SIZE_UNITS[0]
    for unit in SIZE_UNITS:
        if abs(size) < 1024 or unit == SIZE_UNITS[-1]:
            break
        size /= 1024
    text = f"{size:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {unit}"
