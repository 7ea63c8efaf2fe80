"""
setup.py for limebuild

Runtime Requirements:
- Python >= 3.10 (glob.glob root_dir support)
- A POSIX-style filesystem

Configuration:
- Build options are read from ./limebuild.yaml, or the file named by LIMEBUILD_CONFIG
- Any option can be overridden with LIMEBUILD_<OPTION>, e.g. LIMEBUILD_DRY_RUN=1
"""

from pathlib import Path

from setuptools import find_packages, setup

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="limebuild",
    version="0.1.0",
    description="Minimalist self-rebuilding incremental build helper for build scripts written in Python",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["limebuild", "limebuild.*"]),
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
    ],
)
