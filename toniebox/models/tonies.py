"""
Household and Creative-Tonie domain models.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Protocol, Self, runtime_checkable

from toniebox.exceptions import TonieNotBoundError


@dataclass(frozen=True, kw_only=True)
class Household:
    """
    A group of users sharing Tonieboxes and Creative-Tonies.

    Snapshot returned by the household listing; never persisted by the client.
    """

    id: str
    name: str = ""
    image: str = ""
    foreign_creative_tonie_content: bool = False
    access: str = ""
    can_leave: bool = False
    owner_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            image=data.get("image") or "",
            foreign_creative_tonie_content=bool(data.get("foreignCreativeTonieContent")),
            access=data.get("access") or "",
            can_leave=bool(data.get("canLeave")),
            owner_name=data.get("ownerName") or "",
        )


@dataclass(frozen=True, kw_only=True)
class Chapter:
    """One audio track on a Creative-Tonie."""

    id: str
    file: str = ""
    title: str = ""
    seconds: float = 0.0
    transcoding: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            file=data.get("file") or "",
            title=data.get("title") or "",
            seconds=float(data.get("seconds") or 0),
            transcoding=bool(data.get("transcoding")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file,
            "title": self.title,
            "seconds": self.seconds,
            "transcoding": self.transcoding,
        }


@runtime_checkable
class TonieExecutor(Protocol):
    """Network operations a bound Creative-Tonie routes its calls through."""

    def refresh(self, tonie: "CreativeTonie") -> None:
        """Overwrite the tonie's fields with the server state."""
        ...

    def commit(self, tonie: "CreativeTonie", *, force: bool = False) -> bool:
        """Persist the tonie's local changes. Returns True if a request was sent."""
        ...

    def upload_file(self, tonie: "CreativeTonie", path: str | Path, title: str) -> Chapter:
        """Upload an audio file and append it as a new chapter."""
        ...


@dataclass(frozen=True, slots=True)
class TonieBinding:
    """
    Non-serialized association between a Creative-Tonie and the client it came from.

    Attributes:
        household: Household the tonie belongs to.
        executor: Service that performs the tonie's network operations.
    """

    household: Household
    executor: TonieExecutor


@dataclass(kw_only=True)
class CreativeTonie:
    """
    A Creative-Tonie figurine and its chapters.

    Local changes only reach the server on commit(). The tonie is dirty
    whenever its wire representation differs from the last synced one, so
    in-place edits (e.g. `tonie.chapters.reverse()`) count as changes too.
    """

    id: str
    name: str = ""
    live: bool = False
    private: bool = False
    image_url: str = ""
    transcoding_errors: list[str] = field(default_factory=list)
    transcoding: bool = False
    seconds_present: float = 0.0
    seconds_remaining: float = 0.0
    chapters_present: int = 0
    chapters_remaining: int = 0
    chapters: list[Chapter] = field(default_factory=list)
    household_id: str = ""

    binding: TonieBinding | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._synced_state: dict[str, Any] | None = self.to_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, binding: TonieBinding | None = None) -> Self:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            live=bool(data.get("live")),
            private=bool(data.get("private")),
            image_url=data.get("imageUrl") or "",
            transcoding_errors=list(data.get("transcodingErrors") or []),
            transcoding=bool(data.get("transcoding")),
            seconds_present=float(data.get("secondsPresent") or 0),
            seconds_remaining=float(data.get("secondsRemaining") or 0),
            chapters_present=int(data.get("chaptersPresent") or 0),
            chapters_remaining=int(data.get("chaptersRemaining") or 0),
            chapters=[Chapter.from_dict(c) for c in data.get("chapters") or []],
            household_id=data.get("householdId") or "",
            binding=binding,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation sent on commit. The binding is never included."""
        return {
            "id": self.id,
            "name": self.name,
            "live": self.live,
            "private": self.private,
            "imageUrl": self.image_url,
            "transcodingErrors": list(self.transcoding_errors),
            "transcoding": self.transcoding,
            "secondsPresent": self.seconds_present,
            "secondsRemaining": self.seconds_remaining,
            "chaptersPresent": self.chapters_present,
            "chaptersRemaining": self.chapters_remaining,
            "chapters": [c.to_dict() for c in self.chapters],
            "householdId": self.household_id,
        }

    @property
    def is_dirty(self) -> bool:
        """Check if the wire state differs from the one last synced with the server."""
        return self._synced_state is None or self.to_dict() != self._synced_state

    @property
    def household(self) -> Household | None:
        """Household this tonie was listed from, if bound."""
        return self.binding.household if self.binding is not None else None

    def mark_dirty(self) -> None:
        """Treat the tonie as changed until the next mark_clean(), whatever its state."""
        self._synced_state = None

    def mark_clean(self) -> None:
        """Record the current wire state as the one known to the server."""
        self._synced_state = self.to_dict()

    def update_from(self, other: "CreativeTonie") -> None:
        """
        Overwrite every wire field with the values of another instance.

        Identity and binding of this instance are preserved; the tonie is clean afterwards.
        """
        for name in _WIRE_FIELDS:
            value = getattr(other, name)
            setattr(self, name, list(value) if isinstance(value, list) else value)
        self.mark_clean()

    def find_chapter_by_title(self, title: str) -> Chapter | None:
        """
        Find the first chapter whose title matches exactly.

        Args:
            title: Title to look for (case-sensitive, no normalization).

        Returns:
            The chapter, or None if not found.
        """
        for chapter in self.chapters:
            if chapter.title == title:
                return chapter
        return None

    def append_chapter(self, chapter: Chapter) -> None:
        self.chapters.append(chapter)

    def delete_chapter(self, chapter: Chapter) -> int:
        """
        Remove every chapter sharing the given chapter's id.

        Local only: call commit() to persist.

        Returns:
            Number of chapters removed.
        """
        kept = [c for c in self.chapters if c.id != chapter.id]
        removed = len(self.chapters) - len(kept)
        if removed:
            self.chapters = kept
        return removed

    def refresh(self) -> None:
        """Reload this tonie from the server, discarding local changes."""
        self._require_binding().executor.refresh(self)

    def commit(self, *, force: bool = False) -> bool:
        """
        Save local changes to the server.

        Args:
            force: Send the tonie even if no local change was recorded.

        Returns:
            True if a PATCH request was sent.
        """
        return self._require_binding().executor.commit(self, force=force)

    def upload_file(self, path: str | Path, title: str) -> Chapter:
        """
        Upload an audio file and append it as a new chapter.

        Local only until commit() is called.
        """
        return self._require_binding().executor.upload_file(self, path, title)

    def _require_binding(self) -> TonieBinding:
        if self.binding is None:
            raise TonieNotBoundError()
        return self.binding


_WIRE_FIELDS = frozenset(f.name for f in fields(CreativeTonie) if f.name != "binding")


@dataclass(frozen=True, kw_only=True)
class UploadFields:
    """Signed-policy form fields for a presigned object storage POST."""

    key: str
    policy: str = ""
    x_amz_algorithm: str = ""
    x_amz_credential: str = ""
    x_amz_date: str = ""
    x_amz_signature: str = ""
    x_amz_security_token: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            key=data["key"],
            policy=data.get("policy") or "",
            x_amz_algorithm=data.get("x-amz-algorithm") or "",
            x_amz_credential=data.get("x-amz-credential") or "",
            x_amz_date=data.get("x-amz-date") or "",
            x_amz_signature=data.get("x-amz-signature") or "",
            x_amz_security_token=data.get("x-amz-security-token") or "",
        )

    def form_fields(self) -> list[tuple[str, str]]:
        """Form fields in the order object storage expects them, before the file."""
        return [
            ("key", self.key),
            ("x-amz-algorithm", self.x_amz_algorithm),
            ("x-amz-credential", self.x_amz_credential),
            ("x-amz-date", self.x_amz_date),
            ("policy", self.policy),
            ("x-amz-signature", self.x_amz_signature),
            ("x-amz-security-token", self.x_amz_security_token),
        ]


@dataclass(frozen=True, kw_only=True)
class UploadTicket:
    """
    Single-use object storage destination for one chapter upload.

    Attributes:
        file_id: Server-assigned file identifier, referenced by the new chapter.
        url: Storage URL suggested by the API.
        fields: Signed-policy form fields.
    """

    file_id: str
    url: str
    fields: UploadFields

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        request = data.get("request") or {}
        return cls(
            file_id=data["fileId"],
            url=request.get("url") or "",
            fields=UploadFields.from_dict(request["fields"]),
        )
