"""
Node Items - Data structures flowing through workflows.

Items are plain dicts of the form {"json": {...}, "binary": {...}}.
Binary attachments arrive in several shapes depending on the producing
node; BinaryData normalizes them to raw bytes plus file metadata.
"""

from __future__ import annotations

import base64
import binascii
import zlib
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class BinaryData(BaseModel):
    """
    Binary attachment for a node item.

    Binary data is stored separately and referenced by key.
    """
    model_config = ConfigDict(extra="forbid")

    data: bytes = Field(..., description="Raw binary data")
    mime_type: str = Field("application/octet-stream", description="MIME type")
    file_name: Optional[str] = Field(None, description="Original filename")
    file_extension: Optional[str] = Field(None, description="File extension")

    @property
    def size(self) -> int:
        """Get size of binary data."""
        return len(self.data)

    def to_base64(self) -> str:
        """Encode the raw bytes as standard base64 text."""
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def from_entry(cls, entry: Any) -> "BinaryData":
        """
        Build from a host binary entry.

        Accepts a BinaryData instance, or a dict with camelCase
        (fileName/mimeType) or snake_case keys whose "data" is raw bytes
        or base64 text.

        Raises:
            ValidationError: If the entry is not a dict or its data cannot be decoded
        """
        if isinstance(entry, BinaryData):
            return entry
        if not isinstance(entry, dict):
            raise ValidationError(f"Unsupported binary entry: {type(entry).__name__}")

        raw = entry.get("data") or b""
        if isinstance(raw, str):
            try:
                raw = decode_binary_string(raw)
            except (binascii.Error, ValueError) as e:
                raise ValidationError("Binary data is not valid base64") from e

        try:
            return cls(
                data=raw,
                mime_type=entry.get("mimeType") or entry.get("mime_type") or "application/octet-stream",
                file_name=entry.get("fileName") or entry.get("file_name"),
                file_extension=entry.get("fileExtension") or entry.get("file_extension"),
            )
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid binary entry: {e.error_count()} field(s) rejected",
                description=str(e),
            ) from e


def decode_binary_string(data_str: str) -> bytes:
    """
    Convert a base64 binary payload into raw bytes.

    Supports:
    - data: base64 of raw bytes (common case)
    - data: urlsafe base64 without padding
    - data: base64(zlib.compress(base64(raw))) as written by parser nodes

    A payload that merely inflates as zlib is left compressed; only the
    parser-node wrapping above is unwrapped.

    Raises:
        binascii.Error: If the text is not base64 in either alphabet
    """
    if not data_str:
        return b""
    try:
        first = base64.b64decode(data_str, validate=True)
    except (binascii.Error, ValueError):
        fixed = data_str.replace("-", "+").replace("_", "/")
        pad = len(fixed) % 4
        if pad:
            fixed += "=" * (4 - pad)
        first = base64.b64decode(fixed, validate=True)

    try:
        inflated = zlib.decompress(first)
    except zlib.error:
        return first
    try:
        return base64.b64decode(inflated, validate=True)
    except (binascii.Error, ValueError):
        return first


def make_item(json_data: Dict[str, Any], item_index: int) -> Dict[str, Any]:
    """Build an output item paired with its source item."""
    return {"json": json_data, "pairedItem": {"item": item_index}}
