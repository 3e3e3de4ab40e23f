[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archlab"
version = "0.1.0"
description = "Course tools for computer architecture and operating systems: a Unix V6 disk image reader, an ARM simulator command shell, a typed string list and small shell exercises"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "education",
    "operating-systems",
    "filesystem",
    "unix-v6",
    "simulator",
    "arm",
    "shell",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
diskimageaccess = "archlab.v6fs.cli:main"
arm-sim = "archlab.armsim.shell:main"
ring = "archlab.minishell.ring:main"
pipeline-shell = "archlab.minishell.pipeline:main"
strproc-tester = "archlab.strproc.tester:main"

[tool.hatch.build.targets.wheel]
packages = ["archlab"]

[tool.pytest.ini_options]
addopts = "-ra"
