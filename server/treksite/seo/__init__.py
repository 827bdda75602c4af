"""Heuristic SEO suggestions and the strategy-based optimizer."""

from .heuristics import generate_local_suggestions, generate_slug
from .optimizer import LocalSeoStrategy, RemoteSeoStrategy, SeoOptimizer, SeoStrategy

__all__ = [
    "generate_local_suggestions",
    "generate_slug",
    "LocalSeoStrategy",
    "RemoteSeoStrategy",
    "SeoOptimizer",
    "SeoStrategy",
]
