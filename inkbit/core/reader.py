"""Image loading into a PixelGrid."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageOps

from inkbit.core.grid import WHITE, PixelGrid

SUPPORTED_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp")


def detect_format(path: Path) -> str:
    """Detect image format from file extension."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported format: {suffix}")
    if suffix == ".jpeg":
        return "jpg"
    if suffix == ".tif":
        return "tiff"
    return suffix.lstrip(".")


def _flatten(img: Image.Image) -> Image.Image:
    """Composite transparent pixels onto white and return an RGB image."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, WHITE + (255,))
        background.alpha_composite(rgba)
        return background.convert("RGB")
    return img.convert("RGB")


def load_image(path: str | Path) -> PixelGrid:
    """Decode an image file into an RGB PixelGrid.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        ValueError: if the extension is not a supported image format.
    """
    local_path = Path(path)
    if not local_path.exists():
        raise FileNotFoundError(f"The file {local_path} does not exist.")
    detect_format(local_path)  # rejects unsupported extensions

    with Image.open(local_path) as img:
        img = ImageOps.exif_transpose(img)
        return PixelGrid.from_image(_flatten(img))
