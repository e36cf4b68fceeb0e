"""Page/offset arithmetic for list endpoints.

Independent of the logging core; shipped alongside it because services
built on :mod:`lib_log_notify` usually expose paginated APIs too.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100


def normalize(page: int, page_size: int) -> tuple[int, int, int]:
    """Return ``(page, page_size, offset)`` with defaults and the size cap applied.

    Examples
    --------
    >>> normalize(0, 0)
    (1, 100, 0)
    >>> normalize(2, 50)
    (2, 50, 50)
    >>> normalize(3, 1000)
    (3, 100, 200)
    """

    if page < 1:
        page = DEFAULT_PAGE
    if page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE
    elif page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE
    return page, page_size, (page - 1) * page_size


def compute_totals(total_count: int, page_size: int) -> int:
    """Return the number of pages needed for ``total_count`` items.

    Examples
    --------
    >>> compute_totals(250, 100)
    3
    >>> compute_totals(10, 0)
    0
    >>> compute_totals(-150, 100)
    0
    """

    if page_size <= 0 or total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


@dataclass(frozen=True, slots=True)
class Pagination:
    """Pagination block returned next to list payloads."""

    page: int
    page_size: int
    total_count: int
    total_pages: int

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "Pagination":
        """Return the block for an already normalised ``page``/``page_size``."""

        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=compute_totals(total_count, page_size),
        )

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


__all__ = ["DEFAULT_PAGE", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "Pagination", "compute_totals", "normalize"]
