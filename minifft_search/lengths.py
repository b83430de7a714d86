"""
Lengths Module - Padded FFT Length Selection

Chooses an easily factorable transform length for the interpolated
mini-spectrum together with the number of padding bins kept on each side.

DESIGN CONSTRAINTS:
- Deterministic: same inputs -> same outputs
- No config imports (explicit parameters)
- Input spectrum lengths are powers of two

LENGTH FORMULA:
- pad = min(numminifft // 8, r_resp_halfwidth(accuracy))
- candidate = (numminifft + pad) * numbetween
- Snap candidate up to the next entry of GOOD_FFT_LENGTHS
- Beyond the table: ((candidate + 1000) // 1000) * 1000
"""

from typing import Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

# Number of bins on each side of a frequency used for low accuracy interpolation
NUMFINTBINS: int = 16

# Extra bins needed by high accuracy work (local power averaging and its offset)
NUMLOCPOWAVG: int = 20
DELTAAVGBINS: int = 5

# Ascending table of highly factorable FFT lengths
GOOD_FFT_LENGTHS: Tuple[int, ...] = (
    144, 288, 540, 1080, 2100, 4200, 8232, 16464,
    32805, 65610, 131220, 262440, 525000, 1050000,
)


# =============================================================================
# CORE FUNCTIONS
# =============================================================================

def r_resp_halfwidth(accuracy: str = 'low') -> int:
    """
    Number of bins on each side of the center of the interpolation response.

    Parameters:
        accuracy: 'low' or 'high'

    Returns:
        Half-width of the response in Fourier bins
    """
    if accuracy == 'high':
        return NUMFINTBINS * 3 + NUMLOCPOWAVG // 2 + DELTAAVGBINS
    if accuracy == 'low':
        return NUMFINTBINS
    raise ValueError(f"accuracy must be 'low' or 'high', got {accuracy!r}")


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def snap_fft_length(newlen: int) -> int:
    """
    Snap a requested length up to the next easily factorable FFT length.

    CONTRACT:
    - Output >= newlen
    - Non-decreasing in newlen
    """
    if newlen <= 0:
        raise ValueError(f"FFT length must be positive, got {newlen}")
    for good in GOOD_FFT_LENGTHS:
        if newlen <= good:
            return good
    return ((newlen + 1000) // 1000) * 1000


def pad_fft_length(
    numminifft: int,
    numbetween: int = 2,
    accuracy: str = 'low'
) -> Tuple[int, int]:
    """
    Choose a good FFT length and padding length for interpolation.

    CONTRACT:
    - Input: numminifft (power of two), numbetween (positive int)
    - Output: (fftlen, padlen)
    - fftlen >= (numminifft + padlen) * numbetween
    - fftlen is non-decreasing in numminifft
    - padlen = min(numminifft // 8, r_resp_halfwidth(accuracy))

    Parameters:
        numminifft: Number of complex points in the mini-spectrum
        numbetween: Oversampling factor
        accuracy: Response half-width class capping the pad, 'low' or 'high'

    Returns:
        Tuple of (fftlen, padlen)
    """
    if numminifft <= 0 or numbetween <= 0:
        raise ValueError(
            f"numminifft and numbetween must be positive, got {numminifft} and {numbetween}"
        )

    padlen = min(numminifft // 8, r_resp_halfwidth(accuracy))
    newlen = (numminifft + padlen) * numbetween

    return snap_fft_length(newlen), padlen
