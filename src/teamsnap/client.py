import logging
import time
from typing import Generator, Iterable, Optional, Union

import httpx
from pydantic import ValidationError

from .core.config import ROOT_URL, TeamSnapConfig
from .core.errors import (
    ClientNotInitializedError,
    RelationNotFoundError,
    TeamSnapHTTPError,
    TeamSnapParseError,
)
from .core.links import find_href
from .core.observability import log_api_call, log_event
from .models import BaseLinkedModel, Link, Response

JSON_HEADERS = {"Content-Type": "application/json"}

LinkSource = Union[Iterable[Link], BaseLinkedModel, Response]


class BearerAuth(httpx.Auth):
    def __init__(self, token: str):
        self._header = f"Bearer {token}"

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._header
        yield request


class TeamSnapClient:
    """
    Navigating client for the TeamSnap Collection+JSON API.
    - initialize() reads the root collection and keeps its links
    - fetch()/fetch_root() resolve a rel to an href and GET it, one attempt each
    - Transport errors (httpx) propagate unwrapped; bodies that are not a
      collection envelope raise TeamSnapParseError
    """

    def __init__(
        self,
        *,
        auth_token: str,
        root_url: str = ROOT_URL,
        timeout_seconds: Optional[float] = None,
        raise_for_status: bool = False,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        auth_token = (auth_token or "").strip()
        root_url = (root_url or "").strip()

        if not auth_token:
            raise ValueError("auth_token must be provided.")
        if not root_url:
            raise ValueError("root_url must be provided.")

        self.root_url = root_url
        self.raise_for_status = raise_for_status
        self.log = logger or logging.getLogger("teamsnap.client")

        # Written once by initialize(), read-only afterwards.
        self.version = ""
        self.root_links: list[Link] = []
        self._initialized = False

        # Sent per request so an injected client gets them too.
        self._auth = BearerAuth(auth_token)

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_config(cls, config: TeamSnapConfig, **kwargs) -> "TeamSnapClient":
        return cls(
            auth_token=config.auth_token,
            root_url=config.root_url,
            timeout_seconds=config.timeout_seconds,
            raise_for_status=config.raise_for_status,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "TeamSnapClient":
        return cls.from_config(TeamSnapConfig.from_env(), **kwargs)

    @classmethod
    async def connect(cls, **kwargs) -> "TeamSnapClient":
        """Build a client and initialize it; only initialized clients escape."""
        client = cls(**kwargs)
        try:
            await client.initialize()
        except BaseException:
            await client.aclose()
            raise
        return client

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TeamSnapClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def initialize(self) -> Response:
        """
        GET the root collection; store its version and links.
        Must succeed before fetch_root().
        """
        response = await self.query(self.root_url, rel="root")
        self.version = response.collection.version
        self.root_links = list(response.collection.links)
        self._initialized = True

        log_event(
            "client_initialized",
            url=self.root_url,
            version=self.version,
            links=len(self.root_links),
        )
        return response

    async def fetch_root(self, rel: str) -> Response:
        if not self._initialized:
            raise ClientNotInitializedError(
                "initialize() must complete before fetching root relations."
            )
        return await self.fetch(rel, self.root_links)

    async def fetch(self, rel: str, links: LinkSource) -> Response:
        """
        Resolve `rel` within `links` (first exact match) and GET the href.
        `links` may be a list of Link, or an Item/Collection/Response whose
        own links are used.
        Raises RelationNotFoundError without sending a request if no link
        matches.
        """
        link_set = _link_set(links)
        try:
            href = find_href(link_set, rel)
        except RelationNotFoundError:
            log_event(
                "rel_not_found",
                self.log,
                level=logging.DEBUG,
                rel=rel,
                available=[link.rel for link in link_set],
            )
            raise
        return await self.query(href, rel=rel)

    async def query(self, href: str, *, rel: Optional[str] = None) -> Response:
        """
        Single GET against an href taken from a server response.
        The body is parsed whatever the status code unless raise_for_status
        is set.
        """
        start = time.perf_counter()
        try:
            resp = await self.http.request(
                "GET", href, headers=JSON_HEADERS, auth=self._auth
            )
        except httpx.HTTPError as exc:
            log_api_call(method="GET", url=href, rel=rel, started=start, error=exc)
            raise

        log_api_call(
            method="GET", url=href, rel=rel, started=start, status=resp.status_code
        )

        if self.raise_for_status and not resp.is_success:
            raise TeamSnapHTTPError(
                status_code=resp.status_code,
                method="GET",
                url=str(resp.request.url),
                response_text=(resp.text or "")[:500],
            )

        return self._parse(resp)

    def _parse(self, resp: httpx.Response) -> Response:
        url = str(resp.request.url)
        try:
            payload = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            log_event(
                "parse_failed",
                self.log,
                level=logging.WARNING,
                url=url,
                status=resp.status_code,
                error_type=type(exc).__name__,
            )
            raise TeamSnapParseError(
                f"Expected JSON from GET {url} (status {resp.status_code}), "
                f"got body snippet: {snippet!r}"
            ) from exc

        try:
            return Response.model_validate(payload)
        except ValidationError as exc:
            log_event(
                "parse_failed",
                self.log,
                level=logging.WARNING,
                url=url,
                status=resp.status_code,
                error_type=type(exc).__name__,
            )
            raise TeamSnapParseError(
                f"Response from GET {url} (status {resp.status_code}) "
                f"is not a collection envelope: {exc}"
            ) from exc


def _link_set(source: LinkSource) -> list[Link]:
    if isinstance(source, (BaseLinkedModel, Response)):
        return list(source.links)
    return list(source or ())


__all__ = ["TeamSnapClient", "BearerAuth", "JSON_HEADERS", "LinkSource"]
