"""
Response Module - Interpolation Primitives

Frequency-domain building blocks used by the interpolation kernel:
- gen_r_response: complex response of a signal at a fractional bin offset
- place_complex_kernel: wrap a response into a buffer for circular correlation
- spread_no_pad: oversample a spectrum by inserting zeros between bins
- complex_corr_conv: FFT-based correlation/convolution against a kernel

All arrays are complex64 to match the single precision of upstream spectra.
"""

import numpy as np
from scipy import fft as scipy_fft


# Taylor coefficients for the response center when the offset is near zero
_SMALL_OFFSET_R2: float = 6.579736267392905746
_SMALL_OFFSET_I3: float = 10.335425560099940058


def gen_r_response(roffset: float, numbetween: int, numkern: int) -> np.ndarray:
    """
    Generate the complex response of a sinusoid offset by `roffset` bins.

    Sample k sits at r = pi * (numkern / (2 * numbetween) + roffset) - k * pi / numbetween
    and holds exp(i*r) * sin(r) / r, so the center of the kernel is the
    zero-offset bin.

    CONTRACT:
    - Input: 0 <= roffset < 1, 1 <= numbetween < 20000,
      numkern >= numbetween and numkern divisible by 2 * numbetween
    - Output: (numkern,) complex64 array
    - Deterministic: same input -> same output

    Parameters:
        roffset: Fractional Fourier bin offset of the signal
        numbetween: Number of points per Fourier bin
        numkern: Number of response points to generate

    Returns:
        Complex response array
    """
    if not (0.0 <= roffset < 1.0):
        raise ValueError(f"roffset must be in [0, 1), got {roffset}")
    if not (1 <= numbetween < 20000):
        raise ValueError(f"numbetween must be in [1, 20000), got {numbetween}")
    if numkern < numbetween:
        raise ValueError(f"numkern ({numkern}) must be >= numbetween ({numbetween})")
    if numkern % (2 * numbetween) != 0:
        raise ValueError(
            f"numkern ({numkern}) must be a multiple of 2 * numbetween ({2 * numbetween})"
        )

    # r / pi for each sample; np.sinc handles r == 0
    r_over_pi = numkern / (2.0 * numbetween) + roffset - np.arange(numkern) / numbetween
    r = np.pi * r_over_pi
    response = (np.exp(1j * r) * np.sinc(r_over_pi)).astype(np.complex64)

    if roffset < 1e-3:
        r2 = roffset * roffset
        response[numkern // 2] = complex(
            1.0 - _SMALL_OFFSET_R2 * r2,
            roffset * (np.pi - _SMALL_OFFSET_I3 * r2)
        )

    return response


def place_complex_kernel(kernel: np.ndarray, numresult: int) -> np.ndarray:
    """
    Wrap a centered kernel into a zero buffer for circular correlation.

    The upper half of the kernel goes to the start of the buffer and the lower
    half to its end. Values are scaled by 1/numresult so that an unnormalized
    forward/inverse FFT pair gives unit gain.

    Parameters:
        kernel: (numkernel,) complex kernel, centered at numkernel // 2
        numresult: Length of the output buffer

    Returns:
        (numresult,) complex64 array
    """
    kernel = np.asarray(kernel, dtype=np.complex64)
    halfwidth = len(kernel) // 2
    if 2 * halfwidth > numresult:
        raise ValueError(
            f"Kernel of {len(kernel)} points does not fit in a buffer of {numresult}"
        )

    normal = np.float32(1.0 / numresult)
    result = np.zeros(numresult, dtype=np.complex64)
    result[:halfwidth] = kernel[halfwidth:2 * halfwidth] * normal
    result[numresult - halfwidth:] = kernel[:halfwidth] * normal
    return result


def spread_no_pad(data: np.ndarray, numresult: int, numbetween: int) -> np.ndarray:
    """
    Spread complex data into a zero buffer, numbetween - 1 zeros between points.

    Points that do not fit in `numresult` are dropped.
    """
    if numbetween < 1:
        raise ValueError(f"numbetween must be positive, got {numbetween}")

    data = np.asarray(data)
    result = np.zeros(numresult, dtype=np.complex64)
    numtoplace = min(len(data), numresult // numbetween)
    result[:numtoplace * numbetween:numbetween] = data[:numtoplace]
    return result


def complex_corr_conv(
    data: np.ndarray,
    kernel_fft: np.ndarray,
    correlate: bool = True,
    inplace: bool = False
) -> np.ndarray:
    """
    Correlate (or convolve) complex data with a pre-transformed kernel.

    CONTRACT:
    - Input: data (n,) complex, kernel_fft (n,) complex, already forward transformed
    - Output: unnormalized inverse FFT of FFT(data) * conj(kernel_fft)
      (or FFT(data) * kernel_fft when correlate is False)
    - inplace=True overwrites and returns `data`

    Parameters:
        data: Time/frequency series to filter
        kernel_fft: Forward FFT of the placed kernel
        correlate: Correlation if True, convolution otherwise
        inplace: Write the result into `data`

    Returns:
        Filtered array
    """
    if len(data) != len(kernel_fft):
        raise ValueError(
            f"data and kernel lengths differ: {len(data)} vs {len(kernel_fft)}"
        )

    spectrum = scipy_fft.fft(data)
    if correlate:
        spectrum *= np.conj(kernel_fft)
    else:
        spectrum *= kernel_fft

    # Unscaled inverse; the 1/n factor lives in the placed kernel
    filtered = scipy_fft.ifft(spectrum, norm='forward')

    if inplace:
        data[:] = filtered
        return data
    return filtered.astype(np.complex64)
