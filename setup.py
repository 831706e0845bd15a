from setuptools import find_packages, setup

package_name = "camera_self_filter"

setup(
    name=package_name,
    version="0.1.0",
    packages=find_packages(exclude=["test"]),
    data_files=[
        ("share/ament_index/resource_index/packages", ["resource/" + package_name]),
        ("share/" + package_name, ["package.xml"]),
        ("share/" + package_name + "/launch", ["launch/image_view.launch.py"]),
    ],
    install_requires=["setuptools", "numpy", "opencv-python"],
    extras_require={"test": ["pytest"]},
    zip_safe=True,
    maintainer="dgx-ros2",
    maintainer_email="user@example.com",
    description="Displays a camera stream with its self mask overlaid; click to save frames",
    license="Apache-2.0",
    entry_points={
        "console_scripts": [
            "image_view = camera_self_filter.image_view_node:main",
        ],
    },
)
