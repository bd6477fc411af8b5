"""The five rewriting stages, applied in order by a rule set."""

from .step1_normalize import normalize
from .step2_numerals import NumeralPatterns, rewrite_numerals
from .step3_fractions import FractionPatterns, rewrite_fractions
from .step4_magnitudes import MagnitudePatterns, rewrite_magnitudes
from .andition import AdditionPatterns, merge
from .step5_finalize import finalize

__all__ = [
    "normalize",
    "NumeralPatterns",
    "rewrite_numerals",
    "FractionPatterns",
    "rewrite_fractions",
    "MagnitudePatterns",
    "rewrite_magnitudes",
    "AdditionPatterns",
    "merge",
    "finalize",
]
