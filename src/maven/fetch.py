"""POM and JAR retrieval with repository fallback."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import httpx

from errors import FetchError, MalformedInputError, NotFoundError
from maven.pom import resolve_dependency_set

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from artifacts.models.artifacts.dependencies import DependencySet
    from maven.coordinate import MavenCoordinate

logger = logging.getLogger(__name__)

NOT_FOUND_STATUSES = frozenset({404, 410})


class Fetcher(Protocol):
    """Retrieves the body at a URL.

    Raises NotFoundError when the URL does not exist and FetchError on
    transport failures.
    """

    def fetch(self, url: str) -> bytes: ...


class HttpFetcher:
    """Fetcher backed by a synchronous httpx client."""

    def __init__(
        self, *, timeout: float = 30.0, client: httpx.Client | None = None
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, url: str) -> bytes:
        logger.debug("HTTP GET: %s", url)
        try:
            response = self._client.get(url)
        except httpx.InvalidURL as exc:
            msg = f"Invalid URL {url!r}: {exc}"
            raise MalformedInputError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Error retrieving URL {url}: {exc}"
            raise FetchError(msg) from exc

        if response.status_code in NOT_FOUND_STATUSES:
            msg = f"Could not find URL: {url}"
            raise NotFoundError(msg)
        if response.is_error:
            msg = f"Error retrieving URL {url}: HTTP {response.status_code}"
            raise FetchError(msg)
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class MavenResolver:
    """Downloads POM and JAR files for coordinates and resolves dependencies."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    def _fetch_first(self, urls: Sequence[str], what: str) -> bytes:
        """Return the first body served, trying ``urls`` in order."""
        failed: list[str] = []
        for url in urls:
            try:
                return self.fetcher.fetch(url)
            except NotFoundError:
                logger.debug("Not found: %s", url)
            except FetchError as exc:
                logger.warning("%s, trying next repository", exc)
                failed.append(url)

        if failed:
            msg = f"Could not retrieve {what}: {', '.join(failed)}"
            raise FetchError(msg)
        msg = f"{what} not found in any repository"
        raise NotFoundError(msg)

    def download_pom(self, coordinate: MavenCoordinate) -> bytes:
        urls = [coordinate.pom_url(repo) for repo in coordinate.repos]
        return self._fetch_first(urls, f"POM for {coordinate}")

    def download_jar(self, coordinate: MavenCoordinate) -> Path:
        """Download the JAR into a temporary file the caller must delete."""
        logger.debug("Downloading JAR for %s", coordinate)
        urls = [coordinate.jar_url(repo) for repo in coordinate.repos]
        content = self._fetch_first(urls, f"JAR for {coordinate}")

        with tempfile.NamedTemporaryFile(
            prefix="fasten", suffix=".jar", delete=False
        ) as handle:
            handle.write(content)
        return Path(handle.name)

    def resolve_dependencies(self, coordinate: MavenCoordinate) -> DependencySet:
        return resolve_dependency_set(self.download_pom(coordinate))


__all__ = ["Fetcher", "HttpFetcher", "MavenResolver", "NOT_FOUND_STATUSES"]
