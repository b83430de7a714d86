"""
Search Parameters Module - All Tunable Constants

These parameters control the mini-FFT search and must be kept in sync with
any consumer that relies on the exact index mapping of the results.

USAGE:
    from minifft_search.search_params import SearchConfig, DEFAULT_CONFIG

    # Use default config
    config = DEFAULT_CONFIG

    # Create custom config
    custom = SearchConfig(
        harmonics=HarmonicParams(harmonic_order=4),
        candidates=CandidateParams(candidate_count=20)
    )
"""

from dataclasses import dataclass, field
from typing import Dict


ACCURACY_LEVELS = ('low', 'high')


@dataclass(frozen=True)
class InterpParams:
    """
    Spectral interpolation (interbinning) parameters.

    Attributes:
        numbetween: Oversampling factor of the interpolated spectrum (default 2).
            The harmonic index arithmetic assumes 2.
        accuracy: Response half-width class, 'low' or 'high' (default 'low')
        roffset: Fractional bin offset of the response kernel (default 0.0)
    """
    numbetween: int = 2
    accuracy: str = 'low'
    roffset: float = 0.0


@dataclass(frozen=True)
class HarmonicParams:
    """
    Harmonic summation parameters.

    Attributes:
        harmonic_order: Number of harmonics to sum (default 1 = no summing)
        max_harmonic_order: Upper bound accepted by validation (default 32)
        dc_placeholder: Power written at index 0 so DC is never a candidate
    """
    harmonic_order: int = 1
    max_harmonic_order: int = 32
    dc_placeholder: float = 1.0


@dataclass(frozen=True)
class CandidateParams:
    """
    Top-K candidate selection parameters.

    Attributes:
        candidate_count: Length of the returned power/frequency lists (default 10)
    """
    candidate_count: int = 10


@dataclass
class SearchConfig:
    """
    Complete search configuration aggregating all parameter groups.

    Example usage:
        config = SearchConfig()  # All defaults
        config = SearchConfig(harmonics=HarmonicParams(harmonic_order=2))
    """
    interp: InterpParams = field(default_factory=InterpParams)
    harmonics: HarmonicParams = field(default_factory=HarmonicParams)
    candidates: CandidateParams = field(default_factory=CandidateParams)

    def to_dict(self) -> Dict:
        """
        Export all parameters as a flat dictionary.

        Returns:
            Dictionary with all parameter values
        """
        return {
            'numbetween': self.interp.numbetween,
            'accuracy': self.interp.accuracy,
            'roffset': self.interp.roffset,
            'harmonic_order': self.harmonics.harmonic_order,
            'max_harmonic_order': self.harmonics.max_harmonic_order,
            'dc_placeholder': self.harmonics.dc_placeholder,
            'candidate_count': self.candidates.candidate_count,
        }


# Default configuration instance
DEFAULT_CONFIG = SearchConfig()


def validate_config(config: SearchConfig) -> bool:
    """
    Validate configuration parameters for consistency.

    Parameters:
        config: SearchConfig instance to validate

    Returns:
        True if config is valid

    Raises:
        ValueError: If configuration is invalid
    """
    if config.interp.numbetween != 2:
        raise ValueError(
            f"numbetween must be 2 (harmonic offsets are derived from it), "
            f"got {config.interp.numbetween}"
        )
    if config.interp.accuracy not in ACCURACY_LEVELS:
        raise ValueError(
            f"accuracy must be one of {ACCURACY_LEVELS}, got {config.interp.accuracy!r}"
        )
    if not (0.0 <= config.interp.roffset < 1.0):
        raise ValueError("roffset must be in [0, 1)")

    if config.harmonics.max_harmonic_order < 1:
        raise ValueError("max_harmonic_order must be positive")
    if not (1 <= config.harmonics.harmonic_order <= config.harmonics.max_harmonic_order):
        raise ValueError(
            f"harmonic_order must be in [1, {config.harmonics.max_harmonic_order}], "
            f"got {config.harmonics.harmonic_order}"
        )

    if config.candidates.candidate_count < 1:
        raise ValueError("candidate_count must be positive")

    return True


# Validate default config on import
validate_config(DEFAULT_CONFIG)
