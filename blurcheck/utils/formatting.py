# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Human-readable sizes for download progress."""

_UNITS = ("b", "kb", "mb", "gb", "tb", "pb", "eb")
_SCALE = 1024


def format_size(size: int) -> str:
    """
    Render a byte count the way the progress line shows it.

    A unit is kept until the value reaches twice the next unit, so 1500
    bytes stays "1500 b" and 3000 bytes becomes "2.93 kb". Bytes are shown
    as an integer, everything else with two decimals.
    """
    if size < 2 * _SCALE:
        return f"{size} {_UNITS[0]}"

    for index in range(2, len(_UNITS) + 1):
        if size < 2 * (_SCALE**index):
            return f"{size / (_SCALE ** (index - 1)):.2f} {_UNITS[index - 1]}"

    return f"{size / (_SCALE ** (len(_UNITS) - 1)):.2f} {_UNITS[-1]}"
