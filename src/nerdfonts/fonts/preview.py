"""Preview image generation for installed fonts."""

import logging
from pathlib import Path

import click
from PIL import Image, ImageDraw, ImageFont

from nerdfonts.core.exceptions import FontNotInstalledError, NoFontFileError, PreviewError

from .utils import find_font_files, font_directory

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_TEXT = (
    "ABCDEFGHIJKLM\nabcdefghijklm\n1234567890\n!@#$%^&*()\n"
    "The quick brown fox jumps over the lazy dog"
)
PREVIEW_SIZE = (600, 400)
POINT_SIZE = 24


def normalize_preview_text(text: str | None) -> str:
    """Turn literal ``\\n`` sequences from the command line into newlines."""
    if not text:
        return DEFAULT_PREVIEW_TEXT
    return text.replace("\\n", "\n")


class FontPreviewer:
    """Renders sample text with an installed font."""

    def __init__(self, fonts_dir: Path, previews_dir: Path):
        self.fonts_dir = fonts_dir
        self.previews_dir = previews_dir

    def generate(self, font: str, text: str = DEFAULT_PREVIEW_TEXT) -> Path:
        """
        Render a preview PNG for ``font``.

        Raises:
            InvalidSelectionError: If the name escapes the fonts directory
            FontNotInstalledError: If the font directory does not exist
            NoFontFileError: If the directory holds no font file
            PreviewError: If rendering fails
        """
        font_dir = font_directory(self.fonts_dir, font)
        if not font_dir.is_dir():
            raise FontNotInstalledError(font)

        font_files = find_font_files(font_dir)
        if not font_files:
            raise NoFontFileError(font)

        self.previews_dir.mkdir(parents=True, exist_ok=True)
        preview_file = self.previews_dir / f"{font}.png"

        try:
            image_font = ImageFont.truetype(str(font_files[0]), POINT_SIZE)
            image = Image.new("RGB", PREVIEW_SIZE, color="white")
            draw = ImageDraw.Draw(image)
            center = (PREVIEW_SIZE[0] // 2, PREVIEW_SIZE[1] // 2)
            draw.multiline_text(
                center, text, font=image_font, fill="black", anchor="mm", align="center"
            )
            image.save(preview_file)
        except OSError as e:
            raise PreviewError(f"Failed to render preview for {font}: {e}") from e

        logger.info(f"Preview generated at: {preview_file}")
        return preview_file

    def show(self, preview_file: Path) -> None:
        """Open the preview with the system image viewer."""
        try:
            click.launch(str(preview_file))
        except Exception as e:
            logger.info(f"Could not open preview ({e}); file is at {preview_file}")
