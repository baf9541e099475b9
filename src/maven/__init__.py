"""Maven coordinate handling and POM dependency resolution."""

from maven.coordinate import MavenCoordinate
from maven.fetch import Fetcher, HttpFetcher, MavenResolver
from maven.pom import resolve_dependency_set

__all__ = [
    "Fetcher",
    "HttpFetcher",
    "MavenCoordinate",
    "MavenResolver",
    "resolve_dependency_set",
]
