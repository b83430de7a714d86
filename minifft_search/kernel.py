"""
Interpolation Kernel Module - Spectral Interbinning

Builds the frequency-domain interpolation kernel, spreads and normalizes a
mini-spectrum into the padded buffer, and correlates the two to produce a
spectrum sampled at twice the original resolution.

DESIGN CONSTRAINTS:
- No I/O operations
- Explicit state management: the kernel lives in a KernelCache object owned
  by the caller, never in module globals
- Only numpy and scipy dependencies

PROCESSING PIPELINE:
1. pad_fft_length picks the buffer length and kernel half-width
2. KernelCache.get builds (or reuses) the transformed kernel
3. spread_and_normalize embeds the spectrum and unpacks the Nyquist value
4. interpolate_spectrum correlates the buffer with the kernel
"""

import logging
from typing import Optional, Tuple

import numpy as np
from scipy import fft as scipy_fft

from minifft_search.lengths import pad_fft_length
from minifft_search.response import (
    gen_r_response,
    place_complex_kernel,
    spread_no_pad,
    complex_corr_conv,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULT PARAMETERS
# =============================================================================

DEFAULT_NUMBETWEEN: int = 2
DEFAULT_ROFFSET: float = 0.0
DEFAULT_ACCURACY: str = 'low'

# Kernel width in units of the pad half-width
KERNEL_WIDTH_FACTOR: int = 4


# =============================================================================
# STATEFUL KERNEL CACHE
# =============================================================================

class KernelCache:
    """
    Single-slot cache of the frequency-domain interpolation kernel.

    The slot is keyed by the mini-spectrum length (its resolution). Asking for
    a different length discards the cached kernel and builds a new one, so
    callers that alternate between lengths pay a full rebuild every time.

    CONTRACT:
    - At most one kernel is held at a time
    - kernel is None until the first get()
    - Not safe for concurrent use; give each thread its own cache
    """

    def __init__(
        self,
        numbetween: int = DEFAULT_NUMBETWEEN,
        roffset: float = DEFAULT_ROFFSET,
        accuracy: str = DEFAULT_ACCURACY
    ) -> None:
        self.numbetween = numbetween
        self.roffset = roffset
        self.accuracy = accuracy
        self.resolution: Optional[int] = None
        self.kernel: Optional[np.ndarray] = None
        self.build_count: int = 0

    def get(self, numminifft: int) -> np.ndarray:
        """Return the transformed kernel for `numminifft`, rebuilding on mismatch."""
        if self.kernel is None or self.resolution != numminifft:
            self.kernel = build_kernel(
                numminifft, self.numbetween, self.roffset, self.accuracy
            )
            self.resolution = numminifft
            self.build_count += 1
            logger.debug(
                f"Built interpolation kernel: numminifft={numminifft}, "
                f"fftlen={len(self.kernel)}, builds={self.build_count}"
            )
        return self.kernel

    def reset(self) -> None:
        """Drop the cached kernel."""
        self.resolution = None
        self.kernel = None


# =============================================================================
# KERNEL CONSTRUCTION
# =============================================================================

def build_kernel(
    numminifft: int,
    numbetween: int = DEFAULT_NUMBETWEEN,
    roffset: float = DEFAULT_ROFFSET,
    accuracy: str = DEFAULT_ACCURACY
) -> np.ndarray:
    """
    Build the forward-transformed interpolation kernel for a mini-spectrum length.

    CONTRACT:
    - Input: numminifft (power of two, >= 8 so the pad width is non-zero)
    - Output: (fftlen,) complex64 array, fftlen from pad_fft_length
    - Deterministic: same input -> same output

    Parameters:
        numminifft: Number of complex points in the mini-spectrum
        numbetween: Oversampling factor
        roffset: Fractional bin offset of the response
        accuracy: 'low' or 'high', caps the kernel half-width

    Returns:
        Frequency-domain kernel
    """
    fftlen, kern_half_width = pad_fft_length(numminifft, numbetween, accuracy)
    if kern_half_width < 1:
        raise ValueError(
            f"numminifft={numminifft} gives a zero pad width; at least 8 points are required"
        )

    numkern = KERNEL_WIDTH_FACTOR * kern_half_width
    response = gen_r_response(roffset, numbetween, numkern)
    kernel = place_complex_kernel(response, fftlen)

    return scipy_fft.fft(kernel).astype(np.complex64)


# =============================================================================
# SPREADING AND NORMALIZATION
# =============================================================================

def spread_and_normalize(
    minifft: np.ndarray,
    fftlen: int,
    norm: float,
    numbetween: int = DEFAULT_NUMBETWEEN
) -> Tuple[np.ndarray, float]:
    """
    Oversample a half-complex spectrum into a padded buffer and normalize it.

    Bin 0 is forced to (1, 0) so DC and red noise never show up as
    candidates. The Nyquist value packed into bin 0's imaginary part is
    scaled and stored as a real value in slot numbetween * N.

    CONTRACT:
    - Input: minifft (N,) complex, fftlen > numbetween * N, norm > 0
    - Output: (spread, nyquist)
    - spread: (fftlen,) complex64, spread[numbetween * k] = sqrt(norm) * minifft[k] for 0 < k < N
    - nyquist: minifft[0].imag * sqrt(norm)

    Parameters:
        minifft: Mini-spectrum in half-complex packing
        fftlen: Padded buffer length
        norm: Power normalization factor
        numbetween: Oversampling factor

    Returns:
        Tuple of (spread buffer, nyquist amplitude)
    """
    numminifft = len(minifft)
    nyquist_slot = numbetween * numminifft
    if fftlen <= nyquist_slot:
        raise ValueError(
            f"fftlen ({fftlen}) must exceed {nyquist_slot} to hold the Nyquist slot"
        )

    spread = spread_no_pad(minifft, fftlen, numbetween)
    sqrtnorm = np.float32(np.sqrt(norm))

    nyquist = float(spread[0].imag * sqrtnorm)
    spread[0] = 1.0 + 0.0j
    spread[numbetween:nyquist_slot:numbetween] *= sqrtnorm
    spread[nyquist_slot] = nyquist

    return spread, nyquist


# =============================================================================
# CORRELATION
# =============================================================================

def interpolate_spectrum(spread: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Correlate the spread spectrum with the kernel, in place.

    Even output bins reproduce the (normalized) input bins; odd bins hold the
    interbinned values halfway between them.
    """
    return complex_corr_conv(spread, kernel, correlate=True, inplace=True)
