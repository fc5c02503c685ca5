"""
Setup script for naval-referee.

The store, hub and protocol helpers can be compiled with Cython when it
is installed (``pip install .[dev]``). The referee, record model, errors
and CLI always ship as plain Python.
"""

from pathlib import Path

from setuptools import setup, find_packages, Extension

try:
    from Cython.Build import cythonize
except ImportError:
    cythonize = None

SRC = Path("src")

# Engine helpers compiled when Cython is available
COMPILED_MODULES = [
    "naval_referee._engine.store",
    "naval_referee._engine.database",
    "naval_referee._engine.auth",
    "naval_referee._engine.hub",
    "naval_referee._engine.snapshot",
    "naval_referee._engine.game_code",
    "naval_referee._shared.protocol",
    "naval_referee._shared.logging_config",
]


def build_ext_modules():
    """Cythonize COMPILED_MODULES, or return [] for a source-only build."""
    if cythonize is None:
        return []
    extensions = []
    for name in COMPILED_MODULES:
        source = SRC.joinpath(*name.split(".")).with_suffix(".py")
        if source.exists():
            extensions.append(Extension(name=name, sources=[str(source)]))
    return cythonize(extensions, compiler_directives={"language_level": "3"})


ext_modules = build_ext_modules()

setup(
    name="naval-referee",
    version="1.0.0",
    description="Naval Referee - authenticated two-player battleship match engine",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "cython>=3.0",
        ],
    },
    package_data={
        "naval_referee._engine": ["schema.sql", "*.so", "*.pyd"],
        "naval_referee._shared": ["*.so", "*.pyd"],
    },
    entry_points={
        "console_scripts": [
            "naval-referee=naval_referee.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
