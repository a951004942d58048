"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu


def tray_title(today: date) -> str:
    return f"Calendar Picker – {today.strftime('%d.%m.%Y')}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    today: date,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    menu = Menu(
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
        Menu.SEPARATOR,
        MenuItem("Exit", lambda _icon, _item: on_exit()),
    )
    return pystray.Icon("calendar-picker", icon_image, tray_title(today), menu)
