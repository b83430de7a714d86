"""
minifft-search - Mini-FFT Candidate Search

This package contains the modules for searching short complex spectra:
- search_params: Tunable parameters and validation
- lengths: Padded FFT length selection
- response: Interpolation response, kernel placement, spreading, correlation
- kernel: Interpolation kernel cache, spreading/normalization, interbinning
- harmonics: Power spectra and incoherent harmonic summation
- candidates: Fixed-size top-K candidate selection
- search: The search operation tying the stages together
"""

from minifft_search.search import MiniFFTSearch, search_minifft
from minifft_search.kernel import KernelCache
from minifft_search.search_params import SearchConfig, DEFAULT_CONFIG

__version__ = "1.0.0"

__all__ = [
    'MiniFFTSearch',
    'search_minifft',
    'KernelCache',
    'SearchConfig',
    'DEFAULT_CONFIG',
]
