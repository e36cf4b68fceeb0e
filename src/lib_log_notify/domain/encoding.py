"""Output encoding enumeration for the primary log stream.

Purpose
-------
Standardise the encodings a :class:`~lib_log_notify.logger.NotifyLogger` can
render records with before handing them to its output stream.

Contents
--------
* :class:`OutputEncoding` enumeration with parsing helpers.
"""

from __future__ import annotations

from enum import Enum


class OutputEncoding(Enum):
    """Define the supported encodings for the primary output.

    Examples
    --------
    >>> OutputEncoding.JSON.value
    'json'
    >>> OutputEncoding.TEXT.name
    'TEXT'
    """

    JSON = "json"
    TEXT = "text"

    @classmethod
    def from_name(cls, name: str) -> "OutputEncoding":
        """Return the matching enum member for a case-insensitive name.

        Raises
        ------
        ValueError
            If the provided name is not recognised.

        Examples
        --------
        >>> OutputEncoding.from_name('JSON') is OutputEncoding.JSON
        True
        >>> OutputEncoding.from_name('  text  ') is OutputEncoding.TEXT
        True
        >>> OutputEncoding.from_name('yaml')
        Traceback (most recent call last):
        ...
        ValueError: Unsupported output encoding: 'yaml'
        """

        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported output encoding: {name!r}")


__all__ = ["OutputEncoding"]
