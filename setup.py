"""Setup configuration for foliobot - portfolio chat widget"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="foliobot",
    version="0.1.0",
    author="Umme Athiya",
    author_email="uathiya4@gmail.com",
    description="foliobot — portfolio chat widget answering from a small local knowledge base",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://ummeathiya.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "foliobot=foliobot.cli:main",
        ],
    },
)
