"""
Asset records and slot binding for the runtime preview.
NO UI DEPENDENCIES.

The project manifest comes from an external planner as JSON. This module reads
it, receives saves from the editors, and resolves the named slots the runtime
preview draws (idle/run/jump/tile/background/enemy) through one interface.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, NamedTuple, Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ManifestError
from .bitmap import load_bitmap, to_data_url
from .physics import MovementState

logger = logging.getLogger(__name__)

STRIP_PATTERN = re.compile(r"strip(\d+)", re.IGNORECASE)


def frames_from_filename(filename: str) -> Optional[int]:
    """Frame count from a `_strip8`-style filename token, if present."""
    match = STRIP_PATTERN.search(filename)
    return max(1, int(match.group(1))) if match else None


# =============================================================================
# MANIFEST
# =============================================================================

class AssetMetadata(BaseModel):
    """Declared geometry of an asset."""

    width: Optional[int] = None
    height: Optional[int] = None
    frames: Optional[int] = None


class AssetRecord(BaseModel):
    """One generated asset, as listed in the project manifest."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: Literal["Characters", "Environment", "UI"]
    group: Optional[str] = None
    name: str
    filename: str
    description: str = ""
    status: Literal["pending", "generating", "done", "error"] = "pending"
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    metadata: AssetMetadata = Field(default_factory=AssetMetadata)

    @property
    def frame_count(self) -> int:
        """Declared frame count if positive, else the filename's strip<N> token, else 1."""
        if self.metadata.frames is not None and self.metadata.frames >= 1:
            return self.metadata.frames
        return frames_from_filename(self.filename) or 1

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match on name or filename."""
        keyword = keyword.lower()
        return keyword in self.name.lower() or keyword in self.filename.lower()


class ProjectManifest(BaseModel):
    """A planned asset set."""

    model_config = ConfigDict(populate_by_name=True)

    theme: str = ""
    palette_description: str = Field(default="", alias="paletteDescription")
    design_docs: str = Field(default="", alias="designDocs")
    assets: List[AssetRecord] = Field(default_factory=list)
    master_style_image: Optional[str] = Field(default=None, alias="masterStyleImage")

    def get(self, asset_id: str) -> Optional[AssetRecord]:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    def apply_save(self, asset_id: str, png_bytes: bytes, frame_count: Optional[int] = None) -> bool:
        """
        Receive an editor save for `asset_id`.

        Replaces the image, marks the asset done and updates its frame count
        only when one is supplied. If the asset was the master style image, the
        master follows the new image.
        """
        asset = self.get(asset_id)
        if asset is None:
            logger.warning(f"Save for unknown asset {asset_id} ignored")
            return False

        url = to_data_url(png_bytes)
        was_master = asset.image_url is not None and asset.image_url == self.master_style_image

        asset.image_url = url
        asset.status = "done"
        if frame_count is not None:
            asset.metadata.frames = frame_count
        if was_master:
            self.master_style_image = url

        logger.info(f"Applied save to {asset.filename} (frames: {asset.frame_count})")
        return True


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a project manifest from a JSON file.

    Raises:
        ManifestError: unreadable file, malformed JSON or schema mismatch
    """
    try:
        with open(path) as f:
            data = json.load(f)
        return ProjectManifest.model_validate(data)
    except OSError as e:
        raise ManifestError(path, e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"malformed JSON ({e.msg} at line {e.lineno})") from e
    except ValidationError as e:
        raise ManifestError(path, f"{e.error_count()} schema error(s): {e.errors()[0]['msg']}") from e


# =============================================================================
# SLOT RESOLUTION
# =============================================================================

class AssetSlot(Enum):
    """Semantic slots the runtime preview draws."""
    IDLE = "idle"
    RUN = "run"
    JUMP = "jump"
    TILE = "tile"
    BACKGROUND = "background"
    ENEMY = "enemy"


class ResolvedAsset(NamedTuple):
    bitmap: Image.Image
    frame_count: int


class AssetResolver(ABC):
    """Maps a semantic slot to a decoded bitmap and its frame count."""

    @abstractmethod
    def resolve(self, slot: AssetSlot) -> Optional[ResolvedAsset]:
        """Return the slot's asset, or None if the catalog has nothing for it."""


class ManifestResolver(AssetResolver):
    """
    Resolves slots from a manifest by keyword matching on names and filenames.
    """

    def __init__(self, manifest: ProjectManifest, base_dir: Optional[Path] = None):
        self.manifest = manifest
        self.base_dir = base_dir

    def _find(self, category: str, keyword: str) -> Optional[AssetRecord]:
        for asset in self.manifest.assets:
            if asset.category == category and asset.matches(keyword):
                return asset
        return None

    def _first(self, category: str) -> Optional[AssetRecord]:
        for asset in self.manifest.assets:
            if asset.category == category:
                return asset
        return None

    def _enemy(self) -> Optional[AssetRecord]:
        for asset in self.manifest.assets:
            if asset.category != "Characters":
                continue
            if "player" in asset.name.lower() or "player" in (asset.group or "").lower():
                continue
            return asset
        return None

    def find_record(self, slot: AssetSlot) -> Optional[AssetRecord]:
        """Pick the manifest record for a slot without decoding it."""
        if slot == AssetSlot.IDLE:
            return self._find("Characters", "idle") or self._first("Characters")
        if slot == AssetSlot.RUN:
            return self._find("Characters", "run")
        if slot == AssetSlot.JUMP:
            return self._find("Characters", "jump")
        if slot == AssetSlot.TILE:
            return self._find("Environment", "tile") or self._find("Environment", "floor")
        if slot == AssetSlot.BACKGROUND:
            return self._find("Environment", "bg") or self._find("Environment", "background")
        return self._enemy()

    def _source(self, image_url: str):
        if image_url.startswith("data:") or self.base_dir is None:
            return image_url
        path = Path(image_url)
        return path if path.is_absolute() else self.base_dir / path

    def resolve(self, slot: AssetSlot) -> Optional[ResolvedAsset]:
        record = self.find_record(slot)
        if record is None or not record.image_url:
            return None
        bitmap = load_bitmap(self._source(record.image_url))
        logger.info(f"Bound {slot.value} -> {record.filename} ({record.frame_count} frames)")
        return ResolvedAsset(bitmap, record.frame_count)


STATE_SLOTS = {
    MovementState.IDLE: AssetSlot.IDLE,
    MovementState.RUN: AssetSlot.RUN,
    MovementState.JUMP: AssetSlot.JUMP,
}


@dataclass
class AssetBinding:
    """Slots resolved once at load time."""

    slots: Dict[AssetSlot, Optional[ResolvedAsset]] = field(default_factory=dict)

    @classmethod
    def resolve(cls, resolver: AssetResolver) -> "AssetBinding":
        """
        Resolve every slot once. Missing run/jump fall back to idle.

        Raises:
            DecodeFailure: if a matched asset cannot be decoded
        """
        slots = {slot: resolver.resolve(slot) for slot in AssetSlot}
        for slot in (AssetSlot.RUN, AssetSlot.JUMP):
            if slots[slot] is None:
                slots[slot] = slots[AssetSlot.IDLE]
        return cls(slots=slots)

    def get(self, slot: AssetSlot) -> Optional[ResolvedAsset]:
        return self.slots.get(slot)

    def for_state(self, state: MovementState) -> Optional[ResolvedAsset]:
        return self.get(STATE_SLOTS[state])

    def frame_count(self, state: MovementState) -> int:
        resolved = self.for_state(state)
        return resolved.frame_count if resolved else 1
