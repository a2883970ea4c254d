"""
SubtitleForge setuptools build script.

Usage:
    # Development (editable install):
    pip install -e .

    # Generate subtitles:
    subtitler path/to/video.mp4
"""

from setuptools import setup, find_namespace_packages

APP_NAME = "subtitleforge"

setup(
    name=APP_NAME,
    version="1.0.0",
    description="Video to SRT subtitles via ffmpeg and whisper.cpp",
    packages=find_namespace_packages(include=["subtitler", "subtitler.*"]),
    py_modules=["main"],
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "subtitler=main:main",
        ],
    },
)
