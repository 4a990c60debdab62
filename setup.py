from setuptools import setup, find_packages

setup(
    name="udpmsg",
    version="1.0.0",
    description="Point-to-point UDP messenger with connection-check signals",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "colorama",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "udpmsg = udpmsg.client:main",
        ],
    },
    python_requires=">=3.10",
)
