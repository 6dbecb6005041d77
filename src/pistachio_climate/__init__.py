"""
Pistachio Climate Analysis

This package derives agronomic indices (ETo, ETc, growing degree days, chill
and frost hours) from daily weather records, scores a site's suitability for
pistachio and ranks cultivars against a conservative climate profile.
"""

__version__ = "0.1.0"
__description__ = "Pistachio climate suitability and cultivar recommendation"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "PistachioClimateApp":
        from .main import PistachioClimateApp
        return PistachioClimateApp
    if name == "ClimateAnalysisPipeline":
        from .pipeline import ClimateAnalysisPipeline
        return ClimateAnalysisPipeline
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PistachioClimateApp",
    "ClimateAnalysisPipeline",
]
