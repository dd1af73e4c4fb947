"""
Local artwork gallery (JSON)
Keeps saved artwork strings with their metadata in one JSON document.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
import dataclasses
from datetime import datetime, timezone
from typing import Dict, List, Optional
import json
import logging
import os
import tempfile
import uuid

logger = logging.getLogger(__name__)

GALLERY_LIMIT = 12
FORMAT_VERSION = 1


class ArtworkStoreError(Exception):
    """Base class for gallery failures."""


class ArtworkNotFoundError(ArtworkStoreError):
    def __init__(self, piece_id: str):
        super().__init__(f"No artwork found with id: {piece_id}")
        self.piece_id = piece_id


class GalleryFullError(ArtworkStoreError):
    def __init__(self, existing: List["ArtworkRecord"], limit: int):
        super().__init__(
            f"Gallery is full. You've reached the limit of {limit} artworks. "
            "Please select an artwork to replace."
        )
        self.existing = existing
        self.limit = limit


class StorageError(ArtworkStoreError):
    """Reading or writing the gallery file failed."""


def default_device_id() -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"{uuid.getnode():012x}"))


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ArtworkRecord:
    piece_id: str
    device_id: str
    artwork_string: str
    timestamp: datetime
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d["timestamp"] = self.timestamp.isoformat()
        return d

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "ArtworkRecord":
        try:
            return ArtworkRecord(
                piece_id=str(data["piece_id"]),
                device_id=str(data["device_id"]),
                artwork_string=str(data["artwork_string"]),
                timestamp=datetime.fromisoformat(str(data["timestamp"])),
                title=None if data.get("title") is None else str(data["title"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed artwork record: {e}") from e


class GalleryStore:
    """
    A device-scoped collection of at most `limit` artworks persisted at `path`.
    """

    def __init__(self, path: str, device_id: Optional[str] = None, limit: int = GALLERY_LIMIT):
        self.path = path
        self.device_id = device_id or default_device_id()
        self.limit = limit

    # ---- persistence ----
    def _load(self) -> List[ArtworkRecord]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read gallery '{self.path}': {e}") from e
        if not isinstance(payload, dict):
            raise StorageError(f"Gallery file '{self.path}' is not a gallery document")
        return [ArtworkRecord.from_dict(d) for d in payload.get("pieces", [])]

    def _write(self, records: List[ArtworkRecord]) -> None:
        payload = {"version": FORMAT_VERSION, "pieces": [r.to_dict() for r in records]}
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".gallery_", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp_path, self.path)
            except Exception:
                # leave no partial temp file behind
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except OSError as e:
            raise StorageError(f"Could not write gallery '{self.path}': {e}") from e

    # ---- queries ----
    def list(self) -> List[ArtworkRecord]:
        """Artworks of this device, newest first."""
        mine = [r for r in self._load() if r.device_id == self.device_id]
        return sorted(mine, key=lambda r: r.timestamp, reverse=True)

    def get(self, piece_id: str) -> ArtworkRecord:
        """Lookup by id across all devices."""
        for r in self._load():
            if r.piece_id == piece_id:
                return r
        raise ArtworkNotFoundError(piece_id)

    # ---- mutations ----
    def save(self, artwork_string: str, title: Optional[str] = None) -> ArtworkRecord:
        records = self._load()
        mine = [r for r in records if r.device_id == self.device_id]
        if len(mine) >= self.limit:
            raise GalleryFullError(sorted(mine, key=lambda r: r.timestamp, reverse=True), self.limit)
        record = ArtworkRecord(
            piece_id=uuid.uuid4().hex,
            device_id=self.device_id,
            artwork_string=artwork_string,
            timestamp=_now(),
            title=title,
        )
        records.append(record)
        self._write(records)
        logger.info("saved artwork %s (%d/%d)", record.piece_id, len(mine) + 1, self.limit)
        return record

    def update(self, piece_id: str, artwork_string: str) -> ArtworkRecord:
        """Replace the artwork string of an existing piece, keeping its id and title."""
        records = self._load()
        for i, r in enumerate(records):
            if r.piece_id == piece_id:
                updated = dataclasses.replace(r, artwork_string=artwork_string, timestamp=_now())
                records[i] = updated
                self._write(records)
                logger.info("updated artwork %s", piece_id)
                return updated
        raise ArtworkNotFoundError(piece_id)

    def rename(self, piece_id: str, title: Optional[str]) -> ArtworkRecord:
        """Change only the title of an existing piece."""
        records = self._load()
        for i, r in enumerate(records):
            if r.piece_id == piece_id:
                renamed = dataclasses.replace(r, title=title)
                records[i] = renamed
                self._write(records)
                logger.info("renamed artwork %s", piece_id)
                return renamed
        raise ArtworkNotFoundError(piece_id)

    def replace(self, piece_id: str, artwork_string: str, title: Optional[str] = None) -> ArtworkRecord:
        """
        Drop one of this device's pieces and store a new artwork in its place
        (used when the gallery is full). The new piece gets a fresh id.
        """
        records = self._load()
        kept = [r for r in records if not (r.piece_id == piece_id and r.device_id == self.device_id)]
        if len(kept) == len(records):
            raise ArtworkNotFoundError(piece_id)
        record = ArtworkRecord(
            piece_id=uuid.uuid4().hex,
            device_id=self.device_id,
            artwork_string=artwork_string,
            timestamp=_now(),
            title=title,
        )
        kept.append(record)
        self._write(kept)
        logger.info("replaced artwork %s with %s", piece_id, record.piece_id)
        return record

    def delete(self, piece_id: str) -> None:
        records = self._load()
        kept = [r for r in records if r.piece_id != piece_id]
        if len(kept) == len(records):
            raise ArtworkNotFoundError(piece_id)
        self._write(kept)
        logger.info("deleted artwork %s", piece_id)
