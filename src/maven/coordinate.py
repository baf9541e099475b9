"""Maven coordinates and their repository-relative URLs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from contract.artifacts import MAVEN_CENTRAL
from errors import MalformedInputError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def _normalize_repo(repo: str) -> str:
    return repo if repo.endswith("/") else f"{repo}/"


@dataclass(frozen=True)
class MavenCoordinate:
    """Maven coordinate ``groupId:artifactId:version`` plus candidate repositories.

    Repositories are tried in order during resolution. Use
    :meth:`with_repos` to point a coordinate at mirrors before resolving it.
    """

    group_id: str
    artifact_id: str
    version: str
    repos: tuple[str, ...] = field(default=(MAVEN_CENTRAL,))

    def __post_init__(self) -> None:
        for label, value in (
            ("groupId", self.group_id),
            ("artifactId", self.artifact_id),
            ("version", self.version),
        ):
            if not value or not value.strip():
                msg = f"Maven coordinate has an empty {label}"
                raise MalformedInputError(msg)
            if any(ch.isspace() or not ch.isprintable() for ch in value):
                msg = f"Maven coordinate {label} contains whitespace: {value!r}"
                raise MalformedInputError(msg)
        object.__setattr__(
            self, "repos", tuple(_normalize_repo(repo) for repo in self.repos)
        )

    @classmethod
    def from_string(cls, coords: str) -> MavenCoordinate:
        """Parse ``g:a:v`` or ``g:a:packaging:v``."""
        parts = coords.strip().split(":")
        if len(parts) == 3:
            group_id, artifact_id, version = parts
        elif len(parts) == 4:
            group_id, artifact_id, _packaging, version = parts
        else:
            msg = f"Invalid Maven coordinate: {coords!r}"
            raise MalformedInputError(msg)
        return cls(group_id, artifact_id, version)

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> MavenCoordinate:
        """Build a coordinate from a ``{groupId, artifactId, version}`` mapping."""
        try:
            return cls(
                str(record["groupId"]),
                str(record["artifactId"]),
                str(record["version"]),
            )
        except KeyError as exc:
            msg = f"Coordinate record is missing {exc.args[0]!r}"
            raise MalformedInputError(msg) from exc

    def with_repos(self, repos: Sequence[str] | None) -> MavenCoordinate:
        """Return a copy resolving against ``repos``; empty keeps the current list."""
        if not repos:
            return self
        return replace(self, repos=tuple(repos))

    @property
    def product(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def to_url(self, repo: str) -> str:
        group_path = self.group_id.replace(".", "/")
        return f"{_normalize_repo(repo)}{group_path}/{self.artifact_id}/{self.version}"

    def jar_url(self, repo: str) -> str:
        return f"{self.to_url(repo)}/{self.artifact_id}-{self.version}.jar"

    def pom_url(self, repo: str) -> str:
        return f"{self.to_url(repo)}/{self.artifact_id}-{self.version}.pom"

    def __str__(self) -> str:
        return self.coordinate


__all__ = ["MavenCoordinate"]
