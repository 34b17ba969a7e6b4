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
Session state: the profile being edited, the latest generated content, and
the status of every generation call.

Generation results are applied last-issued-wins. Each operation key keeps a
sequence number; a completion that is not the most recently issued call for
its key is discarded, whatever order the calls finish in.
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional

from resumeai.errors import InvalidRequestError
from resumeai.llm_client import LLMClient
from resumeai.models import GeneratedResume, MatchResult, Profile, sample_profile
from resumeai.scoring import ScoreReport, score_profile

logger = logging.getLogger(__name__)

COVER_LETTER_FALLBACK = "Could not generate cover letter."


class OperationKind(str, Enum):
    SUMMARY = "summary"
    EXPERIENCE_BULLETS = "experience_bullets"
    SKILLS = "skills"
    OPTIMIZE_RESUME = "optimize_resume"
    ANALYZE_MATCH = "analyze_match"
    COVER_LETTER = "cover_letter"


class OperationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationKey:
    """Status/sequencing key. Per-entry operations also carry the entry id."""
    kind: OperationKind
    entry_id: Optional[str] = None


@dataclass
class OperationState:
    status: OperationStatus = OperationStatus.IDLE
    error: Optional[str] = None


class Session:
    """
    Application state for one user session.

    Profile edits are synchronous. Generation methods are coroutines that may
    run concurrently; each one writes only its own target.
    """
    def __init__(self, client: Optional[LLMClient] = None, profile: Optional[Profile] = None):
        self.client = client or LLMClient()
        self.profile = profile or Profile()
        self.generated_resume: Optional[GeneratedResume] = None
        self.match_result: Optional[MatchResult] = None
        self.cover_letter: Optional[str] = None
        self._states: Dict[OperationKey, OperationState] = {}
        self._issued: Dict[OperationKey, int] = {}

    # --- Profile ---

    @property
    def score(self) -> ScoreReport:
        return score_profile(self.profile)

    def load_sample(self) -> None:
        self.profile = sample_profile()

    def update_profile(self, **changes) -> None:
        self.profile.update(**changes)

    def add_entry(self, section: str, **values):
        return self.profile.add_entry(section, **values)

    def update_entry(self, section: str, entry_id: str, **values):
        return self.profile.update_entry(section, entry_id, **values)

    def remove_entry(self, section: str, entry_id: str) -> bool:
        return self.profile.remove_entry(section, entry_id)

    # --- Status ---

    def status(self, kind: OperationKind, entry_id: Optional[str] = None) -> OperationStatus:
        state = self._states.get(OperationKey(kind, entry_id))
        return state.status if state else OperationStatus.IDLE

    def error(self, kind: OperationKind, entry_id: Optional[str] = None) -> Optional[str]:
        state = self._states.get(OperationKey(kind, entry_id))
        return state.error if state else None

    def in_flight(self) -> List[OperationKey]:
        return [key for key, state in self._states.items() if state.status == OperationStatus.PENDING]

    async def _run(self, key: OperationKey, call: Callable[[], Awaitable], apply: Callable) -> object:
        """
        Issues `call` under `key` and applies its result if it is still the
        latest call for that key. Failures leave state untouched and re-raise.
        """
        sequence = self._issued.get(key, 0) + 1
        self._issued[key] = sequence
        state = self._states.setdefault(key, OperationState())
        state.status = OperationStatus.PENDING
        state.error = None

        try:
            result = await call()
        except Exception as e:
            if self._issued[key] == sequence:
                state.status = OperationStatus.FAILED
                state.error = str(e)
            logger.error(f"{key.kind.value} failed: {e}")
            raise

        if self._issued[key] != sequence:
            logger.info(f"Discarding superseded {key.kind.value} result (#{sequence}, latest #{self._issued[key]})")
            return result

        apply(result)
        state.status = OperationStatus.SUCCEEDED
        return result

    def _default_role(self, fallback: str) -> str:
        if self.profile.experience and self.profile.experience[0].role.strip():
            return self.profile.experience[0].role
        return fallback

    # --- Generation ---

    async def generate_summary(self) -> str:
        """Writes profile.summary from the most recent role and the skills."""
        role = self._default_role("Professional")

        def apply(summary: str):
            if summary:
                self.profile.summary = summary
            else:
                logger.warning("Summary generation returned no text; keeping the current summary.")

        return await self._run(
            OperationKey(OperationKind.SUMMARY),
            lambda: self.client.summarize(role, self.profile.skills),
            apply,
        )

    async def draft_experience_bullets(self, entry_id: str) -> List[str]:
        """Replaces one experience entry's description with drafted bullets."""
        entry = self.profile.get_entry("experience", entry_id)
        if entry is None:
            raise InvalidRequestError(f"No experience entry with id {entry_id}")
        if not entry.role.strip() or not entry.company.strip():
            raise InvalidRequestError("Please enter Role and Company first.")

        def apply(bullets: List[str]):
            if self.profile.get_entry("experience", entry_id) is None:
                logger.info(f"Experience entry {entry_id} was removed; dropping drafted bullets.")
                return
            text = "\n".join(f"• {b}" for b in bullets)
            self.profile.update_entry("experience", entry_id, description=text)

        return await self._run(
            OperationKey(OperationKind.EXPERIENCE_BULLETS, entry_id),
            lambda: self.client.draft_experience_bullets(entry.role, entry.company),
            apply,
        )

    async def suggest_skills(self) -> List[str]:
        role = self._default_role("General")

        def apply(skills: List[str]):
            if skills:
                self.profile.skills = ", ".join(skills)
            else:
                logger.warning("Skill suggestion returned no skills; keeping the current skills.")

        return await self._run(
            OperationKey(OperationKind.SKILLS),
            lambda: self.client.suggest_skills(role),
            apply,
        )

    async def optimize_resume(self) -> GeneratedResume:
        snapshot = copy.deepcopy(self.profile)

        def apply(resume: GeneratedResume):
            self.generated_resume = resume

        return await self._run(
            OperationKey(OperationKind.OPTIMIZE_RESUME),
            lambda: self.client.optimize_resume(snapshot),
            apply,
        )

    async def analyze_match(self, job_description: str) -> MatchResult:
        """Compares the current generated resume against a job description."""
        if self.generated_resume is None:
            raise InvalidRequestError("Generate a resume before analyzing a job match.")
        if not job_description or not job_description.strip():
            raise InvalidRequestError("Paste a job description first.")
        resume_text = self.generated_resume.to_text()

        def apply(result: MatchResult):
            self.match_result = result

        return await self._run(
            OperationKey(OperationKind.ANALYZE_MATCH),
            lambda: self.client.analyze_match(resume_text, job_description),
            apply,
        )

    async def draft_cover_letter(self, job_description: str) -> str:
        if not job_description or not job_description.strip():
            raise InvalidRequestError("Paste a job description first.")
        snapshot = copy.deepcopy(self.profile)

        def apply(letter: str):
            self.cover_letter = letter

        return await self._run(
            OperationKey(OperationKind.COVER_LETTER),
            lambda: self.client.draft_cover_letter(snapshot, job_description),
            apply,
        )

    def cover_letter_text(self) -> str:
        """The latest cover letter, or a fallback line if it came back empty."""
        return self.cover_letter or COVER_LETTER_FALLBACK
