"""
Scaling package — composable value -> visual-encoding pipelines.

Public API:
    ScaleLink, ScaleChain, compose, bubble_chain,
    NormalizationScale, LinearScale, GammaFunction
"""

from scaling.protocols import ScaleLink
from scaling.links import NormalizationScale, LinearScale, GammaFunction
from scaling.chain import ScaleChain, compose, bubble_chain

__all__ = [
    # Protocols
    "ScaleLink",
    # Links
    "NormalizationScale",
    "LinearScale",
    "GammaFunction",
    # Chain
    "ScaleChain",
    "compose",
    "bubble_chain",
]
