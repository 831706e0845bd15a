"""
OpenCV HighGUI window: shows composited frames and delivers mouse clicks.
"""

import logging

import cv2
import numpy as np

logger = logging.getLogger("display")


class DisplayWindow:
    """A named HighGUI window with an optional mouse callback."""

    def __init__(self, name: str, autosize: bool = False):
        self.name = name
        self.autosize = autosize
        self._open = False
        self._seen_visible = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, on_mouse=None) -> None:
        flags = cv2.WINDOW_AUTOSIZE if self.autosize else cv2.WINDOW_NORMAL
        cv2.namedWindow(self.name, flags)
        if on_mouse is not None:
            cv2.setMouseCallback(self.name, on_mouse)
        # Lets the GUI backend (GTK) service the window from its own thread
        try:
            cv2.startWindowThread()
        except cv2.error as e:
            logger.debug("startWindowThread unavailable: %s", e)
        self._open = True

    def show(self, image: np.ndarray) -> None:
        if not self._open:
            return
        cv2.imshow(self.name, image)

    def poll(self, delay_ms: int = 1) -> bool:
        """
        Pump window events.

        Returns:
            False once the window has been closed by the user, True otherwise.
            A negative property (backend cannot tell) counts as closed only
            after the window has been reported visible at least once.
        """
        if not self._open:
            return False
        cv2.waitKey(delay_ms)
        try:
            visible = cv2.getWindowProperty(self.name, cv2.WND_PROP_VISIBLE)
        except cv2.error:
            visible = -1
        if visible >= 1:
            self._seen_visible = True
            return True
        if visible == 0:
            return False
        return not self._seen_visible

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        try:
            cv2.destroyWindow(self.name)
        except cv2.error as e:
            # Already gone, e.g. closed from the title bar
            logger.debug("destroyWindow(%s): %s", self.name, e)
