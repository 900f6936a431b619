"""
Image Processing for ESC/POS Thermal Printers.

Converts images to the 1-bit, LSB-first raster rows streamed after the
DC2 v bitmap command. The print head is 384 dots wide, so every row is
48 bytes.
"""

from io import BytesIO
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from PIL import Image

# Print head geometry
PRINT_WIDTH = 384
BYTES_PER_ROW = PRINT_WIDTH // 8
MAX_IMAGE_HEIGHT = 0xFFFF  # Height is sent as a 16-bit value

# Pixels darker than this (0.0 black - 1.0 white) are printed
BRIGHTNESS_THRESHOLD = 0.5

ImageSource = Union[str, Path, bytes, Image.Image]


class ImageSizeError(ValueError):
    """Image dimensions do not match the print head."""

    pass


def brightness(pixel: tuple[int, int, int]) -> float:
    """
    HSL lightness of an RGB pixel, normalized to 0.0-1.0.

    (max + min) / 2 of the three channels.
    """
    return (max(pixel) + min(pixel)) / 2 / 255


class ImageProcessor:
    """Rasterize images for the thermal print head."""

    def __init__(self, threshold: float = BRIGHTNESS_THRESHOLD,
                 is_ink: Optional[Callable[[tuple[int, int, int]], bool]] = None):
        """
        Initialize processor.

        Args:
            threshold: Brightness below which a pixel is printed (0.0-1.0)
            is_ink: Optional replacement for the threshold test, called
                with an (r, g, b) tuple
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be within 0.0-1.0, got {threshold}")
        self.threshold = threshold
        self._is_ink = is_ink or (lambda px: brightness(px) < self.threshold)

    def load(self, source: ImageSource) -> Image.Image:
        """
        Load an image from various sources.

        Args:
            source: File path, encoded image bytes, or PIL Image

        Returns:
            PIL Image object

        Raises:
            FileNotFoundError: If a path does not exist
            ValueError: If source type is unsupported
            OSError: If the image data cannot be decoded
        """
        if isinstance(source, Image.Image):
            return source
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"Image file not found: {path}")
            with Image.open(path) as image:
                image.load()
                return image.copy()
        if isinstance(source, bytes):
            image = Image.open(BytesIO(source))
            image.load()
            return image
        raise ValueError(f"Unsupported source type: {type(source)}")

    @staticmethod
    def validate(image: Image.Image):
        """
        Check the image fits the print head.

        Raises:
            ImageSizeError: If width is not 384 or height exceeds 65535
        """
        if image.width != PRINT_WIDTH or image.height > MAX_IMAGE_HEIGHT:
            raise ImageSizeError(
                f"Image width must be {PRINT_WIDTH}px and height cannot exceed "
                f"{MAX_IMAGE_HEIGHT}px, got {image.width}x{image.height}"
            )

    def pack_row(self, pixels: list[tuple[int, int, int]]) -> bytes:
        """
        Pack one row of RGB pixels, 8 per byte.

        Bit n of each byte is the pixel at offset n of its 8-pixel group
        (LSB first). Set bits are printed.
        """
        row = bytearray((len(pixels) + 7) // 8)
        for col, pixel in enumerate(pixels):
            if self._is_ink(pixel):
                row[col // 8] |= 1 << (col % 8)
        return bytes(row)

    def iter_rows(self, image: Image.Image) -> Iterator[bytes]:
        """
        Iterate over image rows as packed bytes, top to bottom.

        Yields one row of packed bytes at a time.
        """
        if image.mode.startswith("I;16"):
            image = image.convert("I")
        if image.mode == "I":
            # 16-bit samples, scaled down before Pillow clips them to 0-255
            image = image.point(lambda v: v * (1 / 256)).convert("L")
        if image.mode != "RGB":
            image = image.convert("RGB")

        pixels = image.load()
        for y in range(image.height):
            yield self.pack_row([pixels[x, y] for x in range(image.width)])

    def to_bytes(self, image: Image.Image) -> bytes:
        """Convert an image to its full raster (all rows concatenated)."""
        return b"".join(self.iter_rows(image))


def create_test_pattern(width: int = PRINT_WIDTH, height: int = 96) -> Image.Image:
    """Create a simple test pattern image: border and diagonals."""
    img = Image.new("1", (width, height), color=1)  # White background

    # Draw a border
    for x in range(width):
        img.putpixel((x, 0), 0)
        img.putpixel((x, height - 1), 0)
    for y in range(height):
        img.putpixel((0, y), 0)
        img.putpixel((width - 1, y), 0)

    # Draw diagonal lines
    for i in range(min(width, height)):
        img.putpixel((i, i), 0)
        img.putpixel((width - 1 - i, i), 0)

    return img
