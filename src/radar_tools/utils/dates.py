"""
Month name lookup

Converts English month names (or abbreviations) to zero-padded month
numbers, as used in file names and time stamps ("Jan" -> "01").
"""

from typing import List, Optional, Sequence, Union

from ..constants import MONTH_NAMES
from ..exceptions import UnrecognizedMonth


def _match_month(name: str, length: Optional[int], ignore_case: bool) -> str:
    """Return the two-digit number of the month that `name` abbreviates."""
    n = len(name) if length is None else length
    key = name[:n]
    if not key:
        raise UnrecognizedMonth(name, MONTH_NAMES)

    for number, month in enumerate(MONTH_NAMES, start=1):
        candidate = month[:n]
        if ignore_case:
            match = key.lower() == candidate.lower()
        else:
            match = key == candidate
        if match:
            return f"{number:02d}"

    raise UnrecognizedMonth(name, MONTH_NAMES)


def month_to_number(
    names: Union[str, Sequence[str]],
    length: Optional[int] = None,
    ignore_case: bool = False
) -> Union[str, List[str]]:
    """
    Convert month names to two-digit month numbers.

    Parameters
    ----------
    names : str or sequence of str
        Month name(s) or abbreviation(s)
    length : int, optional
        Number of leading characters to compare. If None, the whole input
        is compared against the start of each month name. Default: None
    ignore_case : bool, optional
        Compare case-insensitively. Default: False

    Returns
    -------
    number : str or list of str
        "01" to "12"; a list (one entry per input) when a sequence is given

    Raises
    ------
    UnrecognizedMonth
        If an input matches none of the twelve month names
    ValueError
        If length is not positive

    Notes
    -----
    Matching is case-sensitive unless ignore_case is set, so
    ``month_to_number('january', length=7)`` raises UnrecognizedMonth while
    ``month_to_number('january', length=7, ignore_case=True)`` and
    ``month_to_number('January', length=7)`` both return '01'. Lower-case
    input is never folded to title case implicitly.

    Examples
    --------
    >>> month_to_number('Jan', length=3, ignore_case=True)
    '01'
    >>> month_to_number(['Sept', 'OCTOBER'], ignore_case=True)
    ['09', '10']
    >>> month_to_number('Janvier', length=3)
    '01'
    """
    if length is not None and length <= 0:
        raise ValueError(f"length must be positive, got {length}")

    if isinstance(names, str):
        return _match_month(names, length, ignore_case)

    return [_match_month(name, length, ignore_case) for name in names]


__all__ = [
    'month_to_number',
]
