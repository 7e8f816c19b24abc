"""Domain models for conversation sessions."""

from dataclasses import dataclass, field
from enum import StrEnum


class ConversationState(StrEnum):
    """States of the issue reporting conversation."""

    NONE = "none"
    WAIT_INTENT = "wait_intent"
    WAIT_IMAGE = "wait_image"
    WAIT_LOCATION = "wait_location"
    WAIT_LOCATION_DETAIL = "wait_location_detail"
    WAIT_DESC = "wait_desc"
    WAIT_TAGS = "wait_tags"
    DISABLED = "disabled"


class Postback(StrEnum):
    """Payloads carried by postback buttons."""

    NEW_ISSUE = "new_pin"
    CONTACT_US = "contact_us"
    ENGLISH = "english"
    THAI = "thai"


class QuickReplyPayload(StrEnum):
    """Payloads carried by marker quick replies."""

    DONE = "done"
    SKIP = "skip"


class Category(StrEnum):
    """Issue categories offered as quick replies."""

    REPAIR = "repair"
    SERVICE = "service"
    IT = "it"
    SUGGESTION = "suggestion"
    CLASSROOM = "classroom"
    SAFETY = "safety"
    SANITARY = "sanitary"
    TRAFFIC = "traffic"
    OTHERS = "others"


@dataclass
class SessionRecord:
    """Per-user conversation state plus the report collected so far."""

    state: ConversationState = ConversationState.NONE
    first_received: int | None = None
    last_received: int | None = None
    last_sent: int | None = None
    locale_override: str | None = None
    profile: dict[str, object] | None = None
    photos: list[str] = field(default_factory=list)
    videos: list[str] = field(default_factory=list)
    desc: list[str] = field(default_factory=list)
    desc_length: int = 0
    hashtags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    location: tuple[float, float] | None = None
    location_title: str | None = None
    location_description: str | None = None

    def append_description(self, fragment: str) -> None:
        """Append a description fragment and keep the running length in sync."""
        self.desc.append(fragment)
        self.desc_length += len(fragment)

    def add_media(self, kind: str, url: str) -> None:
        """Record an uploaded media URL under photos or videos."""
        if kind == "image":
            self.photos.append(url)
        else:
            self.videos.append(url)

    def to_dict(self) -> dict[str, object]:
        """Serialize the session to a JSON-compatible dict."""
        return {
            "state": self.state.value,
            "first_received": self.first_received,
            "last_received": self.last_received,
            "last_sent": self.last_sent,
            "locale_override": self.locale_override,
            "profile": self.profile,
            "photos": list(self.photos),
            "videos": list(self.videos),
            "desc": list(self.desc),
            "desc_length": self.desc_length,
            "hashtags": list(self.hashtags),
            "categories": list(self.categories),
            "location": list(self.location) if self.location else None,
            "location_title": self.location_title,
            "location_description": self.location_description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "SessionRecord":
        """Build a session from stored data, tolerating missing keys."""
        try:
            state = ConversationState(data.get("state") or ConversationState.NONE)
        except ValueError:
            state = ConversationState.NONE
        location = data.get("location")
        profile = data.get("profile")
        return cls(
            state=state,
            first_received=_as_int(data.get("first_received")),
            last_received=_as_int(data.get("last_received")),
            last_sent=_as_int(data.get("last_sent")),
            locale_override=_as_str(data.get("locale_override")),
            profile=profile if isinstance(profile, dict) else None,
            photos=_as_str_list(data.get("photos")),
            videos=_as_str_list(data.get("videos")),
            desc=_as_str_list(data.get("desc")),
            desc_length=_as_int(data.get("desc_length")) or 0,
            hashtags=_as_str_list(data.get("hashtags")),
            categories=_as_str_list(data.get("categories")),
            location=(
                (float(location[0]), float(location[1]))
                if isinstance(location, list | tuple) and len(location) == 2
                else None
            ),
            location_title=_as_str(data.get("location_title")),
            location_description=_as_str(data.get("location_description")),
        )


def _as_int(value: object) -> int | None:
    if isinstance(value, int | float):
        return int(value)
    return None


def _as_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _as_str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
