"""
setuptools build script for the rlenv reinforcement-learning environment library.

Package metadata is read from ``rlenv/__init__.py`` without importing the
package, and dependencies come from ``requirements.txt`` /
``requirements-dev.txt`` so there is a single source for each list.
"""

import pathlib  # Path handling for README and requirements files
import re  # Version extraction from the package initializer

import setuptools  # >=61.0.0 - setup() and package discovery

HERE = pathlib.Path(__file__).parent
PACKAGE_DIR = HERE / "rlenv"
INIT_PATH = PACKAGE_DIR / "__init__.py"
README_PATH = HERE / "README.md"
REQUIREMENTS_PATH = HERE / "requirements.txt"
DEV_REQUIREMENTS_PATH = HERE / "requirements-dev.txt"

PACKAGE_NAME = "rlenv"
AUTHOR = "rlenv Development Team"
DESCRIPTION = (
    "Standard contract for reinforcement-learning environments: typed spaces, "
    "the reset/step lifecycle and composable wrappers"
)
LICENSE = "MIT"

KEYWORDS = [
    "reinforcement learning",
    "environment",
    "spaces",
    "wrappers",
    "gymnasium-style",
]

CLASSIFIERS = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "License :: OSI Approved :: MIT License",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
]


def read_requirements(requirements_file: pathlib.Path) -> list:
    """Return requirement specifiers from a requirements file, ignoring comments.

    A missing file yields an empty list so callers can fall back to defaults.
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            requirements.append(line)
    return requirements


def read_long_description() -> str:
    if README_PATH.exists():
        return README_PATH.read_text(encoding="utf-8")
    return DESCRIPTION


def get_version_from_package() -> str:
    """Extract ``__version__`` from ``rlenv/__init__.py`` without importing it."""
    match = re.search(
        r'^__version__\s*=\s*["\']([^"\']+)["\']',
        INIT_PATH.read_text(encoding="utf-8"),
        re.MULTILINE,
    )
    if not match:
        raise RuntimeError(f"Unable to find __version__ in {INIT_PATH}")
    return match.group(1)


def setup_package():
    """Configure and run ``setuptools.setup()``."""
    install_requires = read_requirements(REQUIREMENTS_PATH) or [
        "numpy>=1.26.0",
        "pydantic>=2.0.0",
    ]
    dev_requirements = read_requirements(DEV_REQUIREMENTS_PATH) or [
        "pytest>=8.0.0",
        "pytest-cov>=4.0.0",
        "hypothesis>=6.0.0",
    ]

    setuptools.setup(
        name=PACKAGE_NAME,
        version=get_version_from_package(),
        description=DESCRIPTION,
        long_description=read_long_description(),
        long_description_content_type="text/markdown",
        author=AUTHOR,
        license=LICENSE,
        keywords=KEYWORDS,
        classifiers=CLASSIFIERS,
        packages=setuptools.find_packages(include=["rlenv", "rlenv.*"]),
        install_requires=install_requires,
        extras_require={
            "dev": dev_requirements,
            "test": [
                "pytest>=8.0.0",
                "pytest-cov>=4.0.0",
                "hypothesis>=6.0.0",
            ],
            "ops": [
                "loguru>=0.7.0",
            ],
        },
        python_requires=">=3.10",
        zip_safe=False,
        include_package_data=True,
    )


if __name__ == "__main__":
    setup_package()
