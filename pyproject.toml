[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dalec"
version = "0.1.0"
description = "Package spec model and generators for Debian and RPM packaging files"
requires-python = ">=3.10"
dependencies = []
keywords = ["packaging", "debian", "rpm", "systemd", "tdnf", "github-actions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Packaging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
test2json2gha = "dalec.test2json2gha:main"

[tool.hatch.build.targets.wheel]
packages = ["dalec"]

[tool.pytest.ini_options]
addopts = "-ra"
