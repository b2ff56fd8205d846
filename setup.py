from setuptools import setup, find_packages

setup(
    name="timed-lyrics",
    version="0.1.0",
    description="Validate, convert and time-tag karaoke lyrics written in the LRC / UltraStar / CD+G timed markup",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"timed_lyrics": ["py.typed"]},
    install_requires=[
        "colorama>=0.4.6",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "ruff",
            "mypy",
        ]
    },
    entry_points={
        "console_scripts": [
            "timed-lyrics=timed_lyrics.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Text Processing :: Markup",
    ],
    keywords="lyrics karaoke lrc ultrastar cdg timing",
)
