from pathlib import Path

from setuptools import find_packages, setup

setup(
    name="pointlink_annotation",
    version=Path("./pointlink_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["pointlink_annotation", "pointlink_annotation.*"]),
    package_data={"pointlink_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "easydict",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
