"""Fluent async client for the Prepr REST and GraphQL APIs."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .bucketing import calculate_bucket
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientOptions
from .errors import AddressParseError, DecodeError, RequestTimeoutError
from .metrics import REQUEST_LATENCY, record_request
from .models import ClientConfig, PendingRequest

logger = logging.getLogger("propr.client")

AB_TESTING_HEADER = "Prepr-ABTesting"
RESPONSE_TYPES = ("json", "text", "bytes")
GRAPHQL_BODY_KWARGS = frozenset({"content", "data", "files"})

URLTypes = Union[str, httpx.URL]


def _parse_url(value: URLTypes) -> httpx.URL:
    try:
        return httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as exc:
        raise AddressParseError(f"Invalid URL: {value!r}") from exc


def _parse_base_url(value: URLTypes) -> httpx.URL:
    url = _parse_url(value)
    if not url.scheme or not url.host:
        raise AddressParseError(f"Base URL must be absolute: {value!r}")
    return url


def _decode(response: httpx.Response, response_type: str) -> Any:
    if response_type == "bytes":
        return response.content
    if response_type == "text":
        return response.text
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Invalid JSON response: {exc}",
            details={"status": response.status_code, "url": str(response.request.url)},
        ) from exc


class PreprClient:
    """
    Chainable request builder for the Prepr API.

    Setters return the client itself; ``fetch`` sends one request built from
    the accumulated state. Query parameters and the GraphQL payload are
    cleared after every ``fetch``, while the token, base URL, timeout, path
    and user bucket persist.

    Overlapping ``fetch`` calls on one instance are not supported: their
    transient state interleaves. Use one client per concurrent chain.

    Example:
        async with create_prepr_client("token") as client:
            articles = await client.sort("publishedAt").limit(10).path("/articles").fetch()

    """

    def __init__(self, options: ClientOptions, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._config = ClientConfig(base_url=_parse_base_url(options.base_url), timeout=options.timeout)
        self._pending = PendingRequest()
        # the deadline in fetch() is the only timeout applied to a request
        self._client = httpx.AsyncClient(timeout=None, transport=transport)
        self.token(options.token)
        self.user_id(options.user_id)

    async def __aenter__(self) -> "PreprClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def query(self) -> Mapping[str, str]:
        """Query parameters that will be sent with the next request."""
        return dict(self._pending.query)

    # Long-lived settings

    def token(self, token: str) -> "PreprClient":
        self._config.headers["Authorization"] = f"Bearer {token}"
        return self

    def base_url(self, base_url: URLTypes) -> "PreprClient":
        self._config.base_url = _parse_base_url(base_url)
        return self

    def timeout(self, seconds: float) -> "PreprClient":
        self._config.timeout = seconds
        return self

    def user_id(self, user_id: Optional[str] = None) -> "PreprClient":
        """Set the A/B-testing bucket from ``user_id``, or drop it when empty."""
        self._config.bucket_id = calculate_bucket(user_id) if user_id else None
        return self

    # Per-request settings

    def sort(self, field: str) -> "PreprClient":
        self._pending.query["sort"] = field
        return self

    def limit(self, limit: int) -> "PreprClient":
        self._pending.query["limit"] = f"{limit}"
        return self

    def skip(self, skip: int) -> "PreprClient":
        self._pending.query["skip"] = f"{skip}"
        return self

    def path(self, path: str) -> "PreprClient":
        self._pending.path = path
        return self

    def graphql_query(self, graphql_query: str) -> "PreprClient":
        self._pending.graphql_query = graphql_query
        return self

    def graphql_variables(self, graphql_variables: Optional[Dict[str, Any]]) -> "PreprClient":
        self._pending.graphql_variables = dict(graphql_variables or {})
        return self

    # Dispatch

    def _resolve_url(self, target: URLTypes, params: Optional[Mapping[str, Any]] = None) -> httpx.URL:
        target_url = _parse_url(target)
        if target_url.is_absolute_url:
            url = target_url
        else:
            relative = str(target).lstrip("/")
            if relative:
                base = str(self._config.base_url).rstrip("/")
                url = _parse_url(f"{base}/{relative}")
            else:
                url = self._config.base_url

        if self._pending.query:
            url = url.copy_merge_params(self._pending.query)
        if params:
            url = url.copy_merge_params({k: v for k, v in params.items() if v is not None})
        return url

    def _request_headers(self, extra: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        headers = httpx.Headers(self._config.headers)
        if self._config.bucket_id is not None:
            headers[AB_TESTING_HEADER] = str(self._config.bucket_id)
        if extra:
            headers.update(extra)
        return headers

    async def fetch(
        self,
        request: Optional[URLTypes] = None,
        *,
        method: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        response_type: str = "json",
        **request_kwargs: Any,
    ) -> Any:
        """
        Send the configured request and return the decoded response.

        Args:
            request: Path relative to the base URL, or an absolute URL.
                Defaults to the path set with :meth:`path`.
            method: HTTP method, ``GET`` by default. Ignored when a GraphQL
                query is set, which always sends ``POST``.
            headers: Extra headers, applied over the client's own.
            params: Extra query parameters, applied over the pending ones.
            response_type: ``"json"``, ``"text"`` or ``"bytes"``.
            **request_kwargs: Passed through to ``httpx.AsyncClient.request``.

        Returns:
            The decoded body. Empty JSON bodies decode to ``None``.

        Raises:
            AddressParseError: The target URL is malformed.
            RequestTimeoutError: The timeout elapsed before a response arrived.
            DecodeError: The body is not valid for ``response_type``.
            httpx.HTTPError: Transport failures and non-2xx responses.
            ValueError: Unsupported ``response_type``, or a request body passed
                alongside a GraphQL query.

        """
        target = self._pending.path if request is None else request
        mode = "graphql" if self._pending.graphql_query else "rest"
        outcome = "error"
        try:
            try:
                if response_type not in RESPONSE_TYPES:
                    raise ValueError(f"Unsupported response_type: {response_type!r}")

                url = self._resolve_url(target, params)
                request_headers = self._request_headers(headers)

                payload = self._pending.graphql_payload()
                if payload is not None:
                    conflicting = sorted(GRAPHQL_BODY_KWARGS.intersection(request_kwargs))
                    if conflicting:
                        raise ValueError(f"Cannot combine a GraphQL query with {', '.join(conflicting)}")
                    method = "POST"
                    request_kwargs["json"] = payload.model_dump(mode="json")
            except ValueError:
                outcome = "invalid"
                raise
            method = (method or "GET").upper()

            timeout = self._config.timeout
            logger.debug("Dispatching %s %s mode=%s", method, url, mode)
            started = time.perf_counter()
            try:
                response = await asyncio.wait_for(
                    self._client.request(method, url, headers=request_headers, **request_kwargs),
                    timeout=timeout,
                )
            except asyncio.TimeoutError as exc:
                outcome = "timeout"
                logger.warning("Prepr request timed out after %ss url=%s", timeout, url)
                raise RequestTimeoutError(
                    f"Request timed out after {timeout} seconds",
                    timeout=timeout,
                    details={"url": str(url)},
                ) from exc
            except asyncio.CancelledError:
                outcome = "cancelled"
                raise
            except httpx.HTTPError:
                outcome = "transport_error"
                raise
            finally:
                REQUEST_LATENCY.labels(mode=mode).observe(time.perf_counter() - started)

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError:
                outcome = "http_error"
                logger.error("Prepr request failed status=%s body=%s", response.status_code, response.text)
                raise

            try:
                result = _decode(response, response_type)
            except DecodeError:
                outcome = "decode_error"
                raise
            outcome = "success"
            return result
        finally:
            record_request(mode, outcome)
            self._pending.reset()

    async def aclose(self) -> None:
        await self._client.aclose()


def create_prepr_client(
    token: str,
    *,
    base_url: URLTypes = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    user_id: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PreprClient:
    options = ClientOptions(token=token, base_url=base_url, timeout=timeout, user_id=user_id)
    return PreprClient(options, transport=transport)


__all__ = ["AB_TESTING_HEADER", "PreprClient", "create_prepr_client"]
