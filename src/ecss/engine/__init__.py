"""Styling engine: selector matching and the per-cycle pipeline."""

from ecss.engine.matcher import SelectorMatcher
from ecss.engine.pipeline import StylePipeline

__all__ = ["SelectorMatcher", "StylePipeline"]
