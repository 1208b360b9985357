"""Listing image helpers for the presentation boundary."""

import asyncio
import base64
import mimetypes
import os
from pathlib import Path
from typing import Union

from pydantic import BaseModel

PLACEHOLDER_IMAGE = os.environ.get("PLACEHOLDER_IMAGE", "/placeholder.svg")


def display_images(images: list[str]) -> list[str]:
    """Images to render for a listing; never empty."""
    return list(images) if images else [PLACEHOLDER_IMAGE]


def to_display_dict(listing: BaseModel) -> dict:
    """Serialize a listing for output with the placeholder substituted for missing images."""
    data = listing.model_dump(mode="json")
    data["images"] = display_images(data.get("images") or [])
    return data


def _read_data_url(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{payload}"


async def encode_image(path: Union[str, Path]) -> str:
    """Read an uploaded image file into a data URL without blocking the event loop."""
    return await asyncio.to_thread(_read_data_url, Path(path))


async def encode_images(paths: list[Union[str, Path]]) -> list[str]:
    """Encode several uploads, preserving their order."""
    return list(await asyncio.gather(*(encode_image(p) for p in paths)))
