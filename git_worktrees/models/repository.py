"""Repository model."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Remote:
    """A configured remote and its fetch URL."""
    name: str
    url: str


@dataclass(frozen=True)
class Repository:
    """Repository facts resolved once per command."""
    root_path: str
    default_branch: str
    remotes: tuple[Remote, ...] = field(default_factory=tuple)

    @property
    def remote_names(self) -> list[str]:
        return [remote.name for remote in self.remotes]

    @property
    def remote_url(self) -> Optional[str]:
        """URL of ``origin``, or of the first remote when there is no origin."""
        for remote in self.remotes:
            if remote.name == "origin":
                return remote.url
        return self.remotes[0].url if self.remotes else None

    def to_dict(self) -> dict:
        return {
            "root_path": self.root_path,
            "default_branch": self.default_branch,
            "remotes": [{"name": r.name, "url": r.url} for r in self.remotes],
        }
