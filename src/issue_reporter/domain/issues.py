"""Domain models for issue submissions."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IssueLocation:
    """Where the reported issue is."""

    coordinates: tuple[float, float] | None
    title: str | None
    desc: str | None


@dataclass(frozen=True)
class IssueSubmission:
    """Issue record sent to the issue backend."""

    categories: list[str]
    created_time: int
    detail: str
    location: IssueLocation
    owner: str
    user: dict[str, object]
    photos: list[str]
    provider: str
    tags: list[str]
    organization: str
    status: str = "unverified"
    videos: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body expected by the issue backend."""
        coordinates = self.location.coordinates
        return {
            "categories": list(self.categories),
            "created_time": self.created_time,
            "detail": self.detail,
            "location": {
                "coordinates": list(coordinates) if coordinates else None,
                "title": self.location.title,
                "desc": self.location.desc,
            },
            "owner": self.owner,
            "user": dict(self.user),
            "photos": list(self.photos),
            "videos": list(self.videos),
            "provider": self.provider,
            "status": self.status,
            "tags": list(self.tags),
            "organization": self.organization,
        }
