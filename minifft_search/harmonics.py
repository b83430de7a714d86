"""
Harmonics Module - Power Spectra and Incoherent Harmonic Summation

Turns the interpolated spectrum into powers and, for harmonic orders above
one, folds the powers of integer multiples of each frequency back onto it.

INDEX CONVENTIONS (numbetween = 2, N = mini-spectrum length):
- Index ii of any power array corresponds to frequency ii / numbetween bins
- Index 0 holds a placeholder so DC never becomes a candidate
- Without summing, the array has numbetween * N + 1 points and ends at Nyquist
- With summing, powers are mirrored about Nyquist into 2 * numbetween * N
  points so higher harmonics can alias back across the Nyquist edge
"""

import numpy as np

DEFAULT_NUMBETWEEN: int = 2
DEFAULT_DC_PLACEHOLDER: float = 1.0


def complex_power(values: np.ndarray) -> np.ndarray:
    """Squared magnitude as float32."""
    return (values.real * values.real + values.imag * values.imag).astype(np.float32)


def power_spectrum(
    interpolated: np.ndarray,
    numminifft: int,
    nyquist: float,
    dc_placeholder: float = DEFAULT_DC_PLACEHOLDER,
    numbetween: int = DEFAULT_NUMBETWEEN
) -> np.ndarray:
    """
    Powers of the interpolated spectrum with no harmonic summing.

    CONTRACT:
    - Output: (numbetween * N + 1,) float32
    - out[0] = dc_placeholder
    - out[numbetween * N] = nyquist ** 2
    - out[ii] = |interpolated[ii]| ** 2 otherwise
    """
    nmini2 = numbetween * numminifft
    powers = np.empty(nmini2 + 1, dtype=np.float32)
    powers[0] = dc_placeholder
    powers[1:nmini2] = complex_power(interpolated[1:nmini2])
    powers[nmini2] = nyquist * nyquist
    return powers


def mirrored_power_spectrum(
    interpolated: np.ndarray,
    numminifft: int,
    nyquist: float,
    dc_placeholder: float = DEFAULT_DC_PLACEHOLDER,
    numbetween: int = DEFAULT_NUMBETWEEN
) -> np.ndarray:
    """
    Powers wrapped around the Nyquist frequency to cover aliased frequencies.

    CONTRACT:
    - Output: (2 * numbetween * N,) float32, zero where not written
    - full[0] = dc_placeholder
    - full[ii] == full[len - 1 - ii] == |interpolated[ii]| ** 2 for 0 < ii < numbetween * N
    - The mirror of the last interpolated bin lands on slot numbetween * N and
      replaces the Nyquist power written there first
    """
    nmini2 = numbetween * numminifft
    nmini4 = 2 * nmini2
    fullpows = np.zeros(nmini4, dtype=np.float32)
    fullpows[0] = dc_placeholder
    fullpows[nmini2] = nyquist * nyquist

    powers = complex_power(interpolated[1:nmini2])
    fullpows[1:nmini2] = powers
    fullpows[nmini4 - nmini2:nmini4 - 1] = powers[::-1]
    return fullpows


def sum_harmonics(
    fullpows: np.ndarray,
    harmonic_order: int,
    numbetween: int = DEFAULT_NUMBETWEEN
) -> np.ndarray:
    """
    Incoherently sum harmonics 1..harmonic_order of a mirrored power array.

    For harmonic h, each fullpows[jj] (1 <= jj < len // h) is added to the h
    consecutive slots starting at jj * h - h // numbetween. The h // numbetween
    shift centers the block of h slots on jj * h in the oversampled grid.
    Contributions of one harmonic never collide, so harmonics are accumulated
    in ascending order one vectorized pass at a time.

    CONTRACT:
    - Input: fullpows (M,) float array, harmonic_order >= 1
    - Output: (M,) float32, out[0] = fullpows[0]
    - Deterministic and bit-identical to the sequential h, jj, kk loop

    Parameters:
        fullpows: Mirrored power spectrum
        harmonic_order: Number of harmonics to sum
        numbetween: Oversampling factor of the power grid

    Returns:
        Summed power array
    """
    if harmonic_order < 1:
        raise ValueError(f"harmonic_order must be >= 1, got {harmonic_order}")

    fullpows = np.asarray(fullpows, dtype=np.float32)
    numpows = len(fullpows)
    sumpows = np.zeros(numpows, dtype=np.float32)
    sumpows[0] = fullpows[0]

    for harm in range(1, harmonic_order + 1):
        offset = harm // numbetween
        numjj = numpows // harm
        if numjj <= 1:
            continue
        base = np.arange(1, numjj) * harm - offset
        contrib = fullpows[1:numjj]
        for kk in range(harm):
            sumpows[base + kk] += contrib

    return sumpows


def harmonic_sum(
    interpolated: np.ndarray,
    numminifft: int,
    nyquist: float,
    harmonic_order: int,
    dc_placeholder: float = DEFAULT_DC_PLACEHOLDER,
    numbetween: int = DEFAULT_NUMBETWEEN
) -> np.ndarray:
    """
    Power array to search for candidates.

    harmonic_order == 1 returns the plain power spectrum; higher orders
    return the harmonic sums of the mirrored spectrum.
    """
    if harmonic_order == 1:
        return power_spectrum(interpolated, numminifft, nyquist, dc_placeholder, numbetween)

    fullpows = mirrored_power_spectrum(
        interpolated, numminifft, nyquist, dc_placeholder, numbetween
    )
    return sum_harmonics(fullpows, harmonic_order, numbetween)
