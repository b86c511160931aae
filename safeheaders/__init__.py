"""Loaders for JSON tokens, JSON objects, glTF, WAV, raw deflate and images."""

__version__ = "0.1.0"

__all__ = ["deflate", "gltf", "imageload", "jsondoc", "tokenizer", "wav"]