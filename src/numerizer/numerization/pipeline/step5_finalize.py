#!/usr/bin/env python3
"""
Step 5 of the numerization pipeline: Finalization.

Strips the markers of every remaining numeric token, leaving bare integers,
fractions and decimals in the text.
"""
from __future__ import annotations

import re

from ..patterns import replace


def finalize(text: str, marker: str = "<num>") -> str:
    """Remove every token marker from the text."""
    return replace(re.escape(marker), text, "")
