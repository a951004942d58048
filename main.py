"""Entry point: runs pystray in a daemon thread and tkinter on the main thread."""

import logging
import threading
from datetime import date

from calendar_window import CalendarPickerWindow
from icon_gen import create_icon_image
from settings import load_settings
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()

    def on_select(d: date) -> None:
        logger.info("Selected %s", d.isoformat())
        picker.root.clipboard_clear()
        picker.root.clipboard_append(d.isoformat())

    picker = CalendarPickerWindow(settings, on_select=on_select)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.root.destroy()
        picker.root.after(0, _quit)

    today = date.today()
    tray = create_tray(create_icon_image(today), on_show, on_exit, today)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    logger.info("Calendar picker running (week starts on %d)", settings["week_starts_on"])
    picker.root.mainloop()


if __name__ == "__main__":
    main()
