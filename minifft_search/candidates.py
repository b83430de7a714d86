"""
Candidates Module - Fixed-Size Top-K Selection

Keeps the K highest powers seen so far, sorted in descending order, each
paired with the frequency it was found at.
"""

from typing import Optional, Tuple

import numpy as np

DEFAULT_NUMBETWEEN: int = 2


class CandidateList:
    """
    Two parallel fixed-length arrays of powers (descending) and frequencies.

    New values enter at the tail and percolate towards the head while they
    are strictly larger than their left neighbor, so equal powers keep the
    order they were found in.

    CONTRACT:
    - powers[i] >= powers[i + 1] for all i
    - freqs[i] is the frequency inserted together with powers[i]
    - minpow is always powers[-1]
    """

    def __init__(
        self,
        numcands: int,
        powers: Optional[np.ndarray] = None,
        freqs: Optional[np.ndarray] = None
    ) -> None:
        if numcands < 1:
            raise ValueError(f"numcands must be >= 1, got {numcands}")
        self.numcands = numcands
        self.powers = _candidate_array(powers, numcands, 'powers')
        self.freqs = _candidate_array(freqs, numcands, 'freqs')
        self.powers[:] = 0.0
        self.freqs[:] = 0.0
        self.minpow: float = 0.0

    def offer(self, power: float, freq: float) -> bool:
        """Insert the pair if `power` beats the current minimum. Returns True if inserted."""
        if power > self.minpow:
            self.powers[-1] = power
            self.freqs[-1] = freq
            self.minpow = self.percolate()
            return True
        return False

    def percolate(self) -> float:
        """
        Move the tail entry up the list until the powers are sorted again.

        Returns:
            New lowest power
        """
        powers, freqs = self.powers, self.freqs
        for ii in range(self.numcands - 2, -1, -1):
            if powers[ii] < powers[ii + 1]:
                powers[ii], powers[ii + 1] = powers[ii + 1], powers[ii]
                freqs[ii], freqs[ii + 1] = freqs[ii + 1], freqs[ii]
            else:
                break
        return float(powers[-1])

    def as_tuple(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.powers, self.freqs


def _candidate_array(out: Optional[np.ndarray], numcands: int, name: str) -> np.ndarray:
    if out is None:
        return np.zeros(numcands, dtype=np.float32)
    if out.shape != (numcands,):
        raise ValueError(f"{name} must have shape ({numcands},), got {out.shape}")
    if not np.issubdtype(out.dtype, np.floating):
        raise ValueError(f"{name} must have a floating dtype, got {out.dtype}")
    return out


def select_candidates(
    sumpows: np.ndarray,
    numcands: int,
    numbetween: int = DEFAULT_NUMBETWEEN,
    out_powers: Optional[np.ndarray] = None,
    out_freqs: Optional[np.ndarray] = None
) -> CandidateList:
    """
    Scan a power array (skipping index 0) and keep the `numcands` highest values.

    CONTRACT:
    - Index 0 is never selected
    - Frequency of index ii is ii / numbetween
    - Slots never filled keep power 0 and frequency 0
    - numcands == 1 gives the first argmax of sumpows[1:]

    Parameters:
        sumpows: Power array to search
        numcands: Number of candidates to keep
        numbetween: Oversampling factor of the power grid
        out_powers: Optional caller-allocated (numcands,) array for the powers
        out_freqs: Optional caller-allocated (numcands,) array for the frequencies

    Returns:
        Filled CandidateList
    """
    cands = CandidateList(numcands, out_powers, out_freqs)
    scale = 1.0 / numbetween

    for ii, power in enumerate(np.asarray(sumpows).tolist()[1:], start=1):
        cands.offer(power, scale * ii)

    return cands
