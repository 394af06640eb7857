"""Inference backend for underscoreai."""

from .client import InferenceClient, build_payload

__all__ = ["InferenceClient", "build_payload"]
