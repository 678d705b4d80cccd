from setuptools import setup, find_packages


setup(
    name="band-mean",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "matplotlib>=3.0",
        "numpy>=1.20",
        "scipy>=1.7",
        "rich>=10.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "band-mean=band_mean.cli.main:main",
        ],
    },
    python_requires=">=3.9",
    description="Banded-matrix running means with sparse, dense and direct benchmarks",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
)
