"""
Search Module - Mini-FFT Candidate Search

Searches a short complex spectrum (usually produced by a MiniFFT binary
search) for the strongest periodic signals, using interbinning to recover
power lost between Fourier bins and optional incoherent harmonic summing.

PROCESSING PIPELINE:
1. Validate inputs
2. Choose the padded length and fetch the interpolation kernel from the cache
3. Spread, normalize and interpolate the spectrum
4. Build the (harmonic-summed) power array
5. Select the top candidates, sorted by decreasing power

Frequencies are returned in Fourier bins of the input spectrum, on a grid of
1 / numbetween bins.
"""

import logging
import math
import warnings
from typing import Optional, Tuple

import numpy as np

from minifft_search.search_params import SearchConfig, DEFAULT_CONFIG, validate_config
from minifft_search.lengths import pad_fft_length, is_power_of_two
from minifft_search.kernel import KernelCache, spread_and_normalize, interpolate_spectrum
from minifft_search.harmonics import harmonic_sum
from minifft_search.candidates import select_candidates

logger = logging.getLogger(__name__)

# Smallest spectrum giving a non-zero pad (and kernel) width
MIN_MINIFFT_LEN: int = 8


def _validate_inputs(
    spectrum: np.ndarray,
    power_count: int,
    norm: float,
    harmonic_order: int,
    candidate_count: int,
    max_harmonic_order: int
) -> None:
    if spectrum.ndim != 1:
        raise ValueError(f"spectrum must be 1D, got shape {spectrum.shape}")
    if not is_power_of_two(power_count) or power_count < MIN_MINIFFT_LEN:
        raise ValueError(
            f"power_count must be a power of two >= {MIN_MINIFFT_LEN}, got {power_count}"
        )
    if len(spectrum) < power_count:
        raise ValueError(
            f"spectrum has {len(spectrum)} points, fewer than power_count={power_count}"
        )
    if not (math.isfinite(norm) and norm > 0):
        raise ValueError(f"norm must be positive and finite, got {norm}")
    if not (1 <= harmonic_order <= max_harmonic_order):
        raise ValueError(
            f"harmonic_order must be in [1, {max_harmonic_order}], got {harmonic_order}"
        )
    if candidate_count < 1:
        raise ValueError(f"candidate_count must be >= 1, got {candidate_count}")


def search_minifft(
    spectrum: np.ndarray,
    power_count: int,
    norm: float,
    harmonic_order: int,
    candidate_count: int,
    out_powers: Optional[np.ndarray] = None,
    out_freqs: Optional[np.ndarray] = None,
    cache: Optional[KernelCache] = None,
    config: SearchConfig = DEFAULT_CONFIG
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Search a mini-spectrum and return its highest powers and their frequencies.

    CONTRACT:
    - Input: spectrum (>= power_count,) complex in half-complex packing
      (bin 0 imaginary part holds the Nyquist value)
    - Input: power_count power of two >= 8, norm > 0,
      harmonic_order >= 1, candidate_count >= 1
    - Output: (powers, freqs), both (candidate_count,)
    - powers sorted by decreasing value; freqs[i] belongs to powers[i]
    - DC (index 0) is never returned
    - out_powers / out_freqs, when given, are filled in place and returned

    Parameters:
        spectrum: Complex mini-spectrum to search
        power_count: Number of complex points of `spectrum` to use
        norm: Value multiplying each power to give a normalized power spectrum
        harmonic_order: Number of harmonics to sum (1 = no summing)
        candidate_count: Number of candidates to return
        out_powers: Optional caller-allocated array for the powers
        out_freqs: Optional caller-allocated array for the frequencies
        cache: Kernel cache to use (None = build a fresh kernel for this call)
        config: Search configuration

    Returns:
        Tuple of (powers, freqs)
    """
    validate_config(config)
    spectrum = np.asarray(spectrum)
    _validate_inputs(
        spectrum, power_count, norm, harmonic_order, candidate_count,
        config.harmonics.max_harmonic_order
    )

    numbetween = config.interp.numbetween
    accuracy = config.interp.accuracy
    if cache is None:
        cache = KernelCache(
            numbetween=numbetween, roffset=config.interp.roffset, accuracy=accuracy
        )
    elif cache.numbetween != numbetween or cache.accuracy != accuracy:
        raise ValueError(
            f"cache (numbetween={cache.numbetween}, accuracy={cache.accuracy!r}) does not "
            f"match config (numbetween={numbetween}, accuracy={accuracy!r})"
        )

    if len(spectrum) > power_count:
        warnings.warn(
            f"spectrum has {len(spectrum)} points, only the first {power_count} are searched"
        )
        spectrum = spectrum[:power_count]

    numtosearch = numbetween * power_count if harmonic_order == 1 else 2 * numbetween * power_count - 1
    if candidate_count > numtosearch:
        warnings.warn(
            f"candidate_count={candidate_count} exceeds the {numtosearch} searchable "
            f"points, trailing candidates will be zero"
        )

    fftlen, _ = pad_fft_length(power_count, numbetween, accuracy)
    kernel = cache.get(power_count)

    spread, nyquist = spread_and_normalize(spectrum, fftlen, norm, numbetween)
    interpolated = interpolate_spectrum(spread, kernel)

    sumpows = harmonic_sum(
        interpolated, power_count, nyquist, harmonic_order,
        dc_placeholder=config.harmonics.dc_placeholder,
        numbetween=numbetween
    )

    cands = select_candidates(
        sumpows, candidate_count, numbetween,
        out_powers=out_powers, out_freqs=out_freqs
    )

    logger.debug(
        f"Searched minifft: n={power_count}, fftlen={fftlen}, harmonics={harmonic_order}, "
        f"top power={cands.powers[0]:.3f} at r={cands.freqs[0]:.1f}"
    )

    return cands.as_tuple()


class MiniFFTSearch:
    """
    Mini-FFT searcher owning its interpolation kernel cache.

    Repeated searches of spectra with the same length reuse one kernel.
    Not safe for concurrent use; create one searcher per thread.

    Example usage:
        searcher = MiniFFTSearch()
        powers, freqs = searcher.search(spectrum, len(spectrum), norm, 2, 10)
    """

    def __init__(self, config: SearchConfig = DEFAULT_CONFIG) -> None:
        validate_config(config)
        self.config = config
        self.cache = KernelCache(
            numbetween=config.interp.numbetween,
            roffset=config.interp.roffset,
            accuracy=config.interp.accuracy
        )

    def search(
        self,
        spectrum: np.ndarray,
        power_count: Optional[int] = None,
        norm: float = 1.0,
        harmonic_order: Optional[int] = None,
        candidate_count: Optional[int] = None,
        out_powers: Optional[np.ndarray] = None,
        out_freqs: Optional[np.ndarray] = None
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Search one mini-spectrum. Unset counts fall back to the spectrum
        length and the configured defaults.
        """
        if power_count is None:
            power_count = len(spectrum)
        if harmonic_order is None:
            harmonic_order = self.config.harmonics.harmonic_order
        if candidate_count is None:
            candidate_count = self.config.candidates.candidate_count

        return search_minifft(
            spectrum, power_count, norm, harmonic_order, candidate_count,
            out_powers=out_powers, out_freqs=out_freqs,
            cache=self.cache, config=self.config
        )
