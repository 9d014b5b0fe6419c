"""Short name collision detection across feed definitions."""

from yt2pod.config.errors import DuplicateKeyError


class ShortNameRegistry:
    """
    Short names seen so far during one load.

    Owned by a single load call and dropped afterwards.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, short_name: object) -> bool:
        return short_name in self._seen

    def claim(self, short_name: str) -> None:
        """
        Record a short name.

        Raises:
            DuplicateKeyError: If the short name was already claimed.
        """
        if short_name in self._seen:
            raise DuplicateKeyError(short_name)
        self._seen.add(short_name)

