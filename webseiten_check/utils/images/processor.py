"""
Image processing utilities for Webseiten-Check.

Screenshots are resized and compressed to comply with Claude's image limits
before they are sent with a scoring call.
"""

import base64
from PIL import Image
import io


def resize_screenshot_if_needed(
    screenshot_bytes: bytes, max_dimension: int = 7500, max_file_size: int = 5_242_880
) -> str:
    """
    Resize and compress a screenshot to comply with Claude's limits:
    - 8000px maximum dimension
    - 5 MB maximum file size

    Uses JPEG compression with quality reduction until under max_file_size.

    Args:
        screenshot_bytes: Original screenshot bytes (any format Pillow reads)
        max_dimension: Maximum width/height in pixels (default 7500)
        max_file_size: Maximum file size in bytes (default 5MB)

    Returns:
        Base64-encoded JPEG
    """
    image = Image.open(io.BytesIO(screenshot_bytes))
    width, height = image.size

    if width > max_dimension or height > max_dimension:
        scale = max_dimension / max(width, height)
        new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
        image = image.resize(new_size, Image.Resampling.LANCZOS)

    # JPEG doesn't support transparency
    if image.mode == "RGBA":
        rgb_image = Image.new("RGB", image.size, (255, 255, 255))
        rgb_image.paste(image, mask=image.split()[3])
        image = rgb_image
    elif image.mode != "RGB":
        image = image.convert("RGB")

    quality = 90
    buffer = io.BytesIO()

    while quality > 20:  # Don't go below 20% quality
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality, optimize=True)
        if buffer.tell() <= max_file_size:
            break
        quality -= 10

    # Still too large after max compression: shrink dimensions
    scale_factor = 0.8
    while buffer.tell() > max_file_size and scale_factor > 0.3:
        resized = image.resize(
            (int(image.width * scale_factor), int(image.height * scale_factor)),
            Image.Resampling.LANCZOS,
        )
        buffer = io.BytesIO()
        resized.save(buffer, format="JPEG", quality=75, optimize=True)
        scale_factor -= 0.1

    return base64.b64encode(buffer.getvalue()).decode("utf-8")
