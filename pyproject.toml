[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kasumi"
version = "0.1.0"
description = "Minecraft: Java Edition protocol building blocks: VarInts, codecs, packet framing, packets, chunks, NBT and registry data"
requires-python = ">=3.10"
dependencies = []
keywords = ["minecraft", "protocol", "varint", "nbt", "packets", "networking"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Internet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kasumi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
