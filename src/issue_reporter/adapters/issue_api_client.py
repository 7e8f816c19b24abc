"""Issue tracking backend API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from issue_reporter.domain.issues import IssueSubmission


class IssueBackend(Protocol):
    """Interface for the issue tracking backend."""

    async def create_issue(self, submission: IssueSubmission) -> str:
        """Create an issue and return its id."""

    async def upload_media_from_url(self, url: str) -> str:
        """Copy media from a URL into the backend and return the stored URL."""


@dataclass
class HttpxIssueApiClient(IssueBackend):
    """HTTPX-backed issue backend client with lazy token authentication."""

    base_url: str
    username: str
    password: str
    http_client: httpx.AsyncClient
    _token: str | None = None

    @classmethod
    def create(cls, base_url: str, username: str, password: str) -> "HttpxIssueApiClient":
        """Create an issue backend client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            username=username,
            password=password,
            http_client=httpx.AsyncClient(),
        )

    async def authenticate(self) -> str:
        """Log in with the service account and cache the bearer token."""
        response = await self.http_client.post(
            f"{self.base_url}/auth/local",
            json={"username": self.username, "password": self.password},
            timeout=15,
        )
        response.raise_for_status()
        token = response.json().get("token")
        if not token:
            raise RuntimeError("Issue backend authentication returned no token")
        self._token = token
        return token

    async def create_issue(self, submission: IssueSubmission) -> str:
        """Create an issue (a pin) and return its id."""
        response = await self.http_client.post(
            f"{self.base_url}/pins",
            json=submission.to_payload(),
            headers=await self._headers(),
            timeout=15,
        )
        response.raise_for_status()
        payload = response.json()
        issue_id = payload.get("_id") or payload.get("id")
        if not issue_id:
            raise RuntimeError("Issue backend did not return an issue id")
        return str(issue_id)

    async def upload_media_from_url(self, url: str) -> str:
        """Ask the backend to fetch and store media from a URL."""
        response = await self.http_client.post(
            f"{self.base_url}/photos/upload_from_url",
            json={"url": url},
            headers=await self._headers(),
            timeout=30,
        )
        response.raise_for_status()
        stored_url = response.json().get("url")
        if not stored_url:
            raise RuntimeError("Issue backend did not return a media url")
        return str(stored_url)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _headers(self) -> dict[str, str]:
        token = self._token or await self.authenticate()
        return {"Authorization": f"Bearer {token}"}
