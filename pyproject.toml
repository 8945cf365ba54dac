[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jzlog"
version = "0.1.0"
description = "Named, thread-safe log libraries with stream-style helpers, message capture and an Itanium C++ symbol demangler"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "log", "demangle", "itanium", "stacktrace"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jzlog-demangle = "jzlog.demangle:main"

[tool.hatch.build.targets.wheel]
packages = ["jzlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
