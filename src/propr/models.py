"""State records and request bodies for the Prepr client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field


class GraphQLRequest(BaseModel):
    query: str = Field(..., min_length=1)
    variables: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class ClientConfig:
    """Settings that outlive a single dispatch."""

    base_url: httpx.URL
    timeout: float
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    bucket_id: Optional[int] = None


@dataclass
class PendingRequest:
    """Per-dispatch settings, cleared by :meth:`reset` once a request finishes."""

    path: str = ""
    query: Dict[str, str] = field(default_factory=dict)
    graphql_query: Optional[str] = None
    graphql_variables: Dict[str, Any] = field(default_factory=dict)

    def graphql_payload(self) -> Optional[GraphQLRequest]:
        if not self.graphql_query:
            return None
        return GraphQLRequest(query=self.graphql_query, variables=self.graphql_variables)

    def reset(self) -> None:
        # path survives a reset
        self.query = {}
        self.graphql_query = None
        self.graphql_variables = {}


__all__ = ["ClientConfig", "GraphQLRequest", "PendingRequest"]
