"""Ordered, read-only catalog of supplier profiles."""

from collections.abc import Iterable, Iterator

from invoice_extract.models.profile import Profile


class ProfileNotFoundError(KeyError):
    """Raised when a profile code is requested that the registry does not hold.

    This is a configuration defect, distinct from "no supplier detected".
    """


class ProfileRegistry:
    """Supplier profiles keyed by code, iterated in insertion order.

    Detection is first-match-wins over this order, so the order in which
    profiles are registered is part of the configuration.
    """

    def __init__(self, profiles: Iterable[Profile] = ()):
        entries: dict[str, Profile] = {}
        for profile in profiles:
            if profile.code in entries:
                raise ValueError(f"Duplicate profile code: '{profile.code}'")
            entries[profile.code] = profile
        self._profiles = entries

    def get(self, code: str) -> Profile:
        try:
            return self._profiles[code]
        except KeyError:
            raise ProfileNotFoundError(
                f"No supplier profile registered for code '{code}'"
            ) from None

    def find(self, code: str | None) -> Profile | None:
        if code is None:
            return None
        return self._profiles.get(code)

    def all(self) -> list[tuple[str, Profile]]:
        return list(self._profiles.items())

    def codes(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, code: object) -> bool:
        return code in self._profiles

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"ProfileRegistry({self.codes()!r})"
