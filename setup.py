"""
Setup script for Device Detect.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="device-detect",
    version="0.1.0",
    description="Desktop / tablet / mobile classification of web clients with sticky session anchoring",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Device Detect Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "user-agents>=2.2.0",
        "pandas>=1.3.0",
        "numpy>=1.21.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "device-detect=device_detect.cli:main",
        ],
    },
)
