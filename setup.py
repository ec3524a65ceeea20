from pathlib import Path

from setuptools import find_packages
from setuptools import setup


HERE = Path(__file__).resolve().parent


def get_version():
    for line in (HERE / "tracewire" / "__init__.py").read_text().splitlines():
        if line.startswith("__version__"):
            return line.split("=")[1].strip().strip('"')
    raise RuntimeError("Unable to find the tracewire version")


setup(
    name="tracewire",
    version=get_version(),
    description="Trace and service payload encoders (msgpack, JSON) for trace agents",
    packages=find_packages(exclude=["tests*", "benchmarks*", "scripts*"]),
    package_data={"tracewire": ["py.typed"]},
    python_requires=">=3.8",
    zip_safe=False,
    install_requires=[
        "envier>=0.5,<1.0",
        "msgpack>=1.0.0",
    ],
    extras_require={
        "tests": [
            "hypothesis",
            "mock",
            "pytest",
            "pytest-benchmark",
        ],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3 :: Only",
    ],
)
