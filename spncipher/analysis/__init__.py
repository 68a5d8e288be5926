"""
Analysis Package

Statistical checks of the cipher's diffusion properties.
"""

from .avalanche import avalanche_effect, hamming_distance

__all__ = ['avalanche_effect', 'hamming_distance']
