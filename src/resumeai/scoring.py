# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Profile completeness scoring.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from resumeai.models import Profile


@dataclass(frozen=True)
class ScoreHint:
    """The single next step that would raise the score."""
    text: str
    amount: int


@dataclass(frozen=True)
class ScoreReport:
    score: int
    hint: Optional[ScoreHint] = None


# Checked in this order; the first unmet rule supplies the hint.
RULES: List[Tuple[str, int, Callable[[Profile], bool]]] = [
    ("Add personal details", 15, lambda p: bool(p.full_name and p.email)),
    ("Add employment history", 25, lambda p: len(p.experience) > 0),
    ("Add education", 15, lambda p: len(p.education) > 0),
    ("Add skills", 10, lambda p: len(p.skills) > 5),
    ("Add profile summary", 15, lambda p: len(p.summary) > 20),
    ("Add extra sections", 20, lambda p: len(p.languages) > 0 or len(p.projects) > 0),
]


def score_profile(profile: Profile) -> ScoreReport:
    """
    Returns the 0-100 completeness score and at most one improvement hint.
    """
    score = 0
    hint = None
    for text, amount, is_met in RULES:
        if is_met(profile):
            score += amount
        elif hint is None:
            hint = ScoreHint(text, amount)
    return ScoreReport(score=min(100, score), hint=hint)
