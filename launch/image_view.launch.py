from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    return LaunchDescription([
        DeclareLaunchArgument("image", default_value="/camera/image_raw", description="Image topic to view"),
        DeclareLaunchArgument("transport", default_value="raw", description="Image transport: raw or compressed"),
        DeclareLaunchArgument(
            "window_name",
            default_value="",
            description="Window title (empty = resolved image topic)",
        ),
        DeclareLaunchArgument("autosize", default_value="false", description="Resize window to the image"),
        DeclareLaunchArgument(
            "filename_format",
            default_value="frame%04i.jpg",
            description="Template for frames saved on left click",
        ),
        DeclareLaunchArgument("blend_alpha", default_value="0.7", description="Weight of the camera image vs. self mask"),
        Node(
            package="camera_self_filter",
            executable="image_view",
            name="image_view",
            arguments=[LaunchConfiguration("transport")],
            remappings=[("image", LaunchConfiguration("image"))],
            parameters=[{
                "window_name": LaunchConfiguration("window_name"),
                "autosize": LaunchConfiguration("autosize"),
                "filename_format": LaunchConfiguration("filename_format"),
                "blend_alpha": LaunchConfiguration("blend_alpha"),
            }],
        ),
    ])
