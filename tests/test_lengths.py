"""
Lengths Module Tests

Tests for padded FFT length selection and response half-widths.
"""

import pytest

from minifft_search import lengths


class TestResponseHalfwidth:
    """Tests for r_resp_halfwidth."""

    def test_low_accuracy(self):
        assert lengths.r_resp_halfwidth('low') == 16

    def test_high_accuracy(self):
        # 3 * 16 + 20 / 2 + 5
        assert lengths.r_resp_halfwidth('high') == 63

    def test_unknown_accuracy(self):
        with pytest.raises(ValueError):
            lengths.r_resp_halfwidth('medium')


class TestSnapFftLength:
    """Tests for snap_fft_length."""

    def test_small_lengths_snap_to_table_minimum(self):
        assert lengths.snap_fft_length(1) == 144
        assert lengths.snap_fft_length(18) == 144
        assert lengths.snap_fft_length(144) == 144

    def test_table_boundaries(self):
        """A length just past a table entry goes to the next entry."""
        table = lengths.GOOD_FFT_LENGTHS
        for smaller, larger in zip(table[:-1], table[1:]):
            assert lengths.snap_fft_length(smaller) == smaller
            assert lengths.snap_fft_length(smaller + 1) == larger

    def test_beyond_table(self):
        assert lengths.snap_fft_length(1050001) == 1051000
        assert lengths.snap_fft_length(2097184) == 2098000
        # Exact multiples still move to the next thousand
        assert lengths.snap_fft_length(2000000) == 2001000

    def test_non_positive(self):
        with pytest.raises(ValueError):
            lengths.snap_fft_length(0)


class TestPadFftLength:
    """Tests for pad_fft_length."""

    def test_known_values(self):
        test_cases = [
            (8, 144, 1),
            (64, 144, 8),
            (128, 288, 16),
            (256, 1080, 16),
            (1024, 2100, 16),
            (524288, 1050000, 16),
            (1048576, 2098000, 16),
        ]
        for numminifft, expected_len, expected_pad in test_cases:
            fftlen, padlen = lengths.pad_fft_length(numminifft, 2)
            assert (fftlen, padlen) == (expected_len, expected_pad), numminifft

    def test_pad_is_capped_by_halfwidth(self):
        _, padlen = lengths.pad_fft_length(4096, 2)
        assert padlen == lengths.r_resp_halfwidth('low')

    def test_small_spectrum_has_zero_pad(self):
        _, padlen = lengths.pad_fft_length(4, 2)
        assert padlen == 0

    def test_monotonic_and_large_enough(self):
        """Padded length never decreases and always holds the padded spectrum."""
        previous = 0
        for exponent in range(3, 22):
            numminifft = 2 ** exponent
            fftlen, padlen = lengths.pad_fft_length(numminifft, 2)
            assert fftlen >= (numminifft + padlen) * 2
            assert fftlen >= previous
            previous = fftlen

    def test_high_accuracy_pad(self):
        """High accuracy raises the pad cap from 16 to 63 bins."""
        assert lengths.pad_fft_length(1024, 2, 'high') == (4200, 63)
        assert lengths.pad_fft_length(256, 2, 'high') == (1080, 32)
        assert lengths.pad_fft_length(64, 2, 'high') == lengths.pad_fft_length(64, 2, 'low')

    def test_invalid_input(self):
        with pytest.raises(ValueError):
            lengths.pad_fft_length(0, 2)
        with pytest.raises(ValueError):
            lengths.pad_fft_length(8, 0)


class TestPowerOfTwo:

    def test_values(self):
        assert lengths.is_power_of_two(1)
        assert lengths.is_power_of_two(1024)
        assert not lengths.is_power_of_two(0)
        assert not lengths.is_power_of_two(12)
        assert not lengths.is_power_of_two(-8)
