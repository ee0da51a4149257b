[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apicula"
version = "0.1.0"
description = "Building blocks for Nintendo DS Nitro files: LZ77 decompression, texture decoding, GPU command parsing, resource matching and glTF/COLLADA helpers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "nintendo-ds",
    "nitro",
    "nsbmd",
    "nsbtx",
    "lz77",
    "texture",
    "gltf",
    "collada",
]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["apicula"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
