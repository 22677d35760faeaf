"""Source repositories and `owner/name` references."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_REPOSITORIES: tuple[str, ...] = (
    "codepath/puter",
    "codepath/chatbox",
    "codepath/dokploy",
    "codepath/scalar",
    "codepath/omi",
    "codepath/superset",
)


class InvalidRepositoryError(ValueError):
    """Raised when a repository identifier is not of the form 'owner/name'."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid repository format: {value!r} (expected 'owner/name')")
        self.value = value


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> RepositoryRef:
        owner, sep, name = value.strip().strip("/").partition("/")
        owner = owner.strip()
        name = name.strip()
        if not sep or not owner or not name or "/" in name:
            raise InvalidRepositoryError(value)
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def fork_for(self, user: str) -> RepositoryRef:
        """Return the reference of this repository's fork under `user`."""

        return RepositoryRef(owner=user, name=self.name)

    def is_owned_by(self, user: str) -> bool:
        # GitHub logins are case-insensitive.
        return self.owner.lower() == user.strip().lower()

    def __str__(self) -> str:
        return self.full_name
