from setuptools import setup, find_packages

setup(
    name="prt7-decoder",
    version="0.1.0",
    description="Decoder for the PRT-7 serial frame protocol",
    packages=find_packages(include=["prt7", "prt7.*"]),
    python_requires=">=3.11",
    install_requires=[
        "aioserial==1.3.0",
        "pyserial==3.5",
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    entry_points={
        "console_scripts": ["prt7-decoder=prt7.main:main"],
    },
)
