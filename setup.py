"""Install configuration for the route_boxer package"""

from setuptools import find_packages, setup

setup(
    name="route_boxer",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["route_boxer*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21",
        "geopy>=2.2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
