[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "safeheaders"
version = "0.1.0"
description = "Small loaders for JSON tokens, JSON documents, glTF, WAV, raw deflate and images, with chunked concurrent helpers"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "json",
    "tokenizer",
    "gltf",
    "wav",
    "deflate",
    "image",
    "concurrency",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
safeheaders-tokenize = "safeheaders.tokenizer:main"

[tool.hatch.build.targets.wheel]
packages = ["safeheaders"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
