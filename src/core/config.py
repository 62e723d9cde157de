"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExplConfig:
    """Size limits for terms, explanations and !expl result lists.

    Term and explanation limits are measured in UTF-16 code units.
    """

    max_term_units: int = 50
    max_explanation_units: int = 200
    max_results: int = 50
