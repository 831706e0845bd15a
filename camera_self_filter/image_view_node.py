#!/usr/bin/env python3
"""
Self-mask image view: subscribe to a BGRA image stream whose alpha channel
holds the robot self mask, blend the mask over the camera image and display
it. Left-click the window to save the displayed frame as frame0000.jpg,
frame0001.jpg, ...

Usage:
    ros2 run camera_self_filter image_view [transport] --ros-args -r image:=<image topic>
"""

import argparse
import sys
import uuid

import rclpy
from rclpy.executors import ExternalShutdownException
from rclpy.logging import get_logger
from rclpy.node import Node
from rclpy.utilities import remove_ros_args
from rcl_interfaces.msg import ParameterDescriptor
from sensor_msgs.msg import CompressedImage, Image
from cv_bridge import CvBridge

from camera_self_filter.compositor import DEFAULT_BLEND_ALPHA, Compositor
from camera_self_filter.display import DisplayWindow
from camera_self_filter.frame_saver import DEFAULT_FILENAME_FORMAT, FrameSaver
from camera_self_filter.frame_source import FrameSourceAdapter, process_message
from camera_self_filter.frame_store import FrameStore

DEFAULT_TOPIC = "/image"
TRANSPORTS = ("raw", "compressed")


def main(args=None):
    rclpy.init(args=args)

    argv = remove_ros_args(args=args if args is not None else sys.argv)[1:]
    arg_parser = argparse.ArgumentParser(prog="image_view")
    arg_parser.add_argument(
        "transport",
        nargs="?",
        default="raw",
        help="Image transport: raw or compressed",
    )
    parsed, _ = arg_parser.parse_known_args(argv)

    try:
        node = ImageViewNode(
            transport=parsed.transport,
            node_name=f"image_view_{uuid.uuid4().hex[:8]}",
        )
    except ValueError as e:
        get_logger("image_view").error(str(e))
        rclpy.shutdown()
        return 1

    try:
        rclpy.spin(node)
    except (KeyboardInterrupt, ExternalShutdownException):
        pass
    finally:
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()
    return 0


class ImageViewNode(Node):
    """Displays the camera stream with its self mask overlaid; saves frames on click."""

    def __init__(self, transport="raw", node_name="image_view"):
        super().__init__(node_name)
        self._window = None

        topic = self.resolve_topic_name("image")
        if topic == DEFAULT_TOPIC:
            self.get_logger().warning(
                "image_view: image has not been remapped! Typical command-line usage:\n"
                "\t$ ros2 run camera_self_filter image_view [transport] --ros-args -r image:=<image topic>"
            )

        self.declare_parameter("window_name", topic)
        self.declare_parameter("autosize", False)
        self.declare_parameter("filename_format", DEFAULT_FILENAME_FORMAT)
        # YAML launch values like 1 arrive as int; Compositor coerces and validates
        self.declare_parameter(
            "blend_alpha", DEFAULT_BLEND_ALPHA, ParameterDescriptor(dynamic_typing=True)
        )
        self.declare_parameter("shutdown_on_close", True)
        self.declare_parameter("queue_size", 1)

        window_name = self.get_parameter("window_name").value or topic
        autosize = bool(self.get_parameter("autosize").value)
        filename_format = self.get_parameter("filename_format").value
        self._shutdown_on_close = bool(self.get_parameter("shutdown_on_close").value)
        queue_size = int(self.get_parameter("queue_size").value)

        self._bridge = CvBridge()
        if transport == "raw":
            msg_type, sub_topic = Image, topic
            converter = self._bridge.imgmsg_to_cv2
        elif transport == "compressed":
            msg_type, sub_topic = CompressedImage, topic.rstrip("/") + "/compressed"
            converter = self._bridge.compressed_imgmsg_to_cv2
        else:
            raise ValueError(f"Unknown transport '{transport}', expected one of {TRANSPORTS}")

        # Validation errors surface here, before any window is created
        self._store = FrameStore()
        self._compositor = Compositor(self.get_parameter("blend_alpha").value)
        self._saver = FrameSaver(self._store, filename_format, logger=self.get_logger())
        self._source = FrameSourceAdapter(converter, logger=self.get_logger())

        self._window = DisplayWindow(window_name, autosize=autosize)
        self._window.open(on_mouse=self._saver.on_mouse)

        self._sub = self.create_subscription(
            msg_type, sub_topic, self._on_image, max(1, queue_size)
        )
        self._gui_timer = self.create_timer(0.03, self._poll_window)

        self.get_logger().info(
            f"Viewing {sub_topic} ({transport}) in window '{window_name}', "
            f"alpha={self._compositor.alpha}, saving to '{filename_format}'"
        )

    def _on_image(self, msg) -> None:
        """Convert, blend, store and display one frame."""
        process_message(
            msg,
            self._source,
            self._compositor,
            self._store,
            show=self._window.show,
            logger=self.get_logger(),
        )

    def _poll_window(self) -> None:
        if self._window.poll():
            return
        self._gui_timer.cancel()
        self._window.close()
        if self._shutdown_on_close:
            self.get_logger().info("Window closed, shutting down")
            if rclpy.ok():
                rclpy.shutdown()
        else:
            self.get_logger().info("Window closed, display disabled")

    def destroy_node(self, *args, **kwargs):
        if self._window is not None:
            self._window.close()
        super().destroy_node(*args, **kwargs)


if __name__ == "__main__":
    sys.exit(main())
