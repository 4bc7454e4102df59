[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gomp"
version = "0.1.0"
description = "A small entity-component-system toolkit with sparse sets, chunked storage and staged system scheduling"
requires-python = ">=3.10"
dependencies = []
keywords = ["ecs", "entity-component-system", "game", "sparse-set", "gamedev"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gomp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
