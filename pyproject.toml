[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdump"
version = "1.0.0"
description = "Send a file over a serial port, save incoming serial data to a file, and run a loopback self-test"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["serial", "uart", "rs232", "file transfer", "loopback", "com port"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sdump = "sdump.dump:main"
sload = "sdump.load:main"
stest = "sdump.loopback:main"

[tool.hatch.build.targets.wheel]
packages = ["sdump"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
