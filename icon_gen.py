"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

BAND_COLOR = "#D22F20"
_BAND_HEIGHT = 16
_FONT_CANDIDATES = ("segoeuib.ttf", "DejaVuSans-Bold.ttf", "Arial Bold.ttf")


def _load_font(size: int) -> ImageFont.FreeTypeFont | None:
    for name in _FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return None


def create_icon_image(day: date) -> Image.Image:
    """Return a 64×64 RGBA tear-off calendar page showing *day*'s day of month."""
    size = 64
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, _BAND_HEIGHT - 1), fill=BAND_COLOR)

    text = str(day.day)
    avail_h = size - _BAND_HEIGHT

    # Find the largest font size that fits below the band
    font_size = 60
    font = None
    while font_size > 10:
        font = _load_font(font_size)
        if font is None:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), text, font=font)
        tw = bbox[2] - bbox[0]
        th = bbox[3] - bbox[1]
        if tw <= size - 4 and th <= avail_h - 4:
            break
        font_size -= 1

    # Centre the visible pixels in the area below the band
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = _BAND_HEIGHT + (avail_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
