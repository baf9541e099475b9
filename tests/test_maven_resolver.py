from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from errors import FetchError, MalformedInputError, NotFoundError
from maven.coordinate import MavenCoordinate
from maven.fetch import HttpFetcher, MavenResolver

if TYPE_CHECKING:
    from conftest import FakeFetcher

POMS = Path(__file__).parent / "fixtures" / "poms"

PRIMARY = "https://primary.example.org/m2/"
MIRROR = "https://mirror.example.org/m2/"


def _coordinate() -> MavenCoordinate:
    return MavenCoordinate.from_string("com.example:demo:1.0.0").with_repos([PRIMARY, MIRROR])


def test_resolver_falls_back_to_next_repository(fake_fetcher: FakeFetcher) -> None:
    coord = _coordinate()
    fake_fetcher.responses[coord.pom_url(MIRROR)] = (POMS / "properties.pom").read_bytes()

    depset = MavenResolver(fake_fetcher).resolve_dependencies(coord)

    assert fake_fetcher.requested == [coord.pom_url(PRIMARY), coord.pom_url(MIRROR)]
    assert len(depset) == 1


def test_resolver_stops_at_first_hit(fake_fetcher: FakeFetcher) -> None:
    coord = _coordinate()
    fake_fetcher.responses[coord.pom_url(PRIMARY)] = b"<project/>"

    assert MavenResolver(fake_fetcher).download_pom(coord) == b"<project/>"
    assert fake_fetcher.requested == [coord.pom_url(PRIMARY)]


def test_missing_everywhere_is_not_found(fake_fetcher: FakeFetcher) -> None:
    with pytest.raises(NotFoundError):
        MavenResolver(fake_fetcher).download_pom(_coordinate())


def test_transport_failure_after_all_repositories_is_fetch_error(
    fake_fetcher: FakeFetcher,
) -> None:
    coord = _coordinate()
    fake_fetcher.responses[coord.pom_url(PRIMARY)] = FetchError("connection reset")

    with pytest.raises(FetchError):
        MavenResolver(fake_fetcher).download_pom(coord)
    assert fake_fetcher.requested == [coord.pom_url(PRIMARY), coord.pom_url(MIRROR)]


def test_transport_failure_recovered_by_mirror(fake_fetcher: FakeFetcher) -> None:
    coord = _coordinate()
    fake_fetcher.responses[coord.jar_url(PRIMARY)] = FetchError("HTTP 503")
    fake_fetcher.responses[coord.jar_url(MIRROR)] = b"PK\x03\x04jar-bytes"

    jar = MavenResolver(fake_fetcher).download_jar(coord)
    try:
        assert jar.suffix == ".jar"
        assert jar.name.startswith("fasten")
        assert jar.read_bytes() == b"PK\x03\x04jar-bytes"
    finally:
        jar.unlink()


def _mock_fetcher(transport: httpx.MockTransport) -> HttpFetcher:
    return HttpFetcher(client=httpx.Client(transport=transport))


def test_http_fetcher_returns_body() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"body"))

    with _mock_fetcher(transport) as fetcher:
        assert fetcher.fetch("https://repo.example.org/a.pom") == b"body"


@pytest.mark.parametrize("status", [404, 410])
def test_http_fetcher_missing_is_not_found(status: int) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status))

    with _mock_fetcher(transport) as fetcher, pytest.raises(NotFoundError):
        fetcher.fetch("https://repo.example.org/a.pom")


@pytest.mark.parametrize("status", [401, 500, 503])
def test_http_fetcher_other_errors_are_fetch_errors(status: int) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status))

    with _mock_fetcher(transport) as fetcher, pytest.raises(FetchError):
        fetcher.fetch("https://repo.example.org/a.pom")


def test_http_fetcher_transport_error_is_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    with _mock_fetcher(httpx.MockTransport(handler)) as fetcher, pytest.raises(FetchError):
        fetcher.fetch("https://repo.example.org/a.pom")


def test_http_fetcher_invalid_url_is_malformed_input() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"body"))

    with _mock_fetcher(transport) as fetcher, pytest.raises(MalformedInputError):
        fetcher.fetch("https://repo.example.org/g/a/1\n0/a-1\n0.pom")


def test_resolver_over_http_uses_mirror_after_404() -> None:
    coord = _coordinate()
    pom = (POMS / "profiles.pom").read_bytes()

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == coord.pom_url(MIRROR):
            return httpx.Response(200, content=pom)
        return httpx.Response(404)

    with _mock_fetcher(httpx.MockTransport(handler)) as fetcher:
        depset = MavenResolver(fetcher).resolve_dependencies(coord)

    assert len(depset) == 3
