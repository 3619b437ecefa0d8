"""
Visual asset data models.

Defines the user-supplied moodboard images and the per-asset outcome of
turning them into request parts.
"""

import mimetypes
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, Field, model_validator


DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class AssetOrigin(str, Enum):
    """Where an asset came from."""
    FILE = "file"
    URL = "url"


class VisualAsset(BaseModel):
    """One image on the moodboard."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique identifier within a session")
    origin: AssetOrigin = Field(..., description="Local file or remote URL")
    file_path: Optional[str] = Field(None, description="Path to a local image file")
    url: Optional[str] = Field(None, description="Remote image URL")
    mime_type: Optional[str] = Field(None, description="Declared MIME type of a local file")
    preview: Optional[str] = Field(None, description="Renderable preview reference")
    
    @model_validator(mode="after")
    def validate_handle(self) -> "VisualAsset":
        if self.origin == AssetOrigin.FILE:
            if not self.file_path:
                raise ValueError("File assets require a file_path")
        else:
            if not self.url:
                raise ValueError("URL assets require a url")
            if urlparse(self.url).scheme not in ("http", "https"):
                raise ValueError(f"Unsupported URL scheme: {self.url}")
        if self.preview is None:
            self.preview = self.file_path if self.origin == AssetOrigin.FILE else self.url
        return self
    
    @classmethod
    def from_file(cls, file_path: Union[str, Path], mime_type: Optional[str] = None) -> "VisualAsset":
        """Create an asset for a local file."""
        return cls(origin=AssetOrigin.FILE, file_path=str(file_path), mime_type=mime_type)
    
    @classmethod
    def from_url(cls, url: str) -> "VisualAsset":
        """Create an asset for a remote image."""
        return cls(origin=AssetOrigin.URL, url=url.strip())
    
    @property
    def handle(self) -> str:
        """The file path or URL that owns this asset."""
        return self.file_path if self.origin == AssetOrigin.FILE else self.url
    
    def resolved_mime_type(self) -> str:
        """Declared MIME type, else guessed from the extension, else JPEG."""
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.handle)
        if guessed and guessed.startswith("image/"):
            return guessed
        return DEFAULT_IMAGE_MIME_TYPE


class InlineDataPart(BaseModel):
    """Raw bytes (base64) plus a MIME type."""
    mime_type: str
    data: str = Field(..., description="Base64 payload")


class TextPart(BaseModel):
    """Plain text fragment."""
    text: str


RequestPart = Union[InlineDataPart, TextPart]


class EncodedAsset(BaseModel):
    """An asset that produced a request part."""
    asset_id: str
    part: RequestPart
    
    @property
    def degraded(self) -> bool:
        """True when only a textual reference could be sent."""
        return isinstance(self.part, TextPart)


class SkippedAsset(BaseModel):
    """An asset that is left out of the request."""
    asset_id: str
    reason: str


EncodingOutcome = Union[EncodedAsset, SkippedAsset]
