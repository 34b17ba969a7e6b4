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
Response shapes declared to the model, and the validation that turns raw
model text into typed results.

Nothing leaves this module unless it matched its shape: a response that
fails validation raises SchemaViolationError instead of returning a partial
object.
"""

import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from resumeai.errors import SchemaViolationError
from resumeai.models import EnhancedEntry, GeneratedResume, MatchResult, Profile

logger = logging.getLogger(__name__)

StringList = list[str]


class EnhancedEntryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="The same ID as the input entry")
    bullets: List[str]


class GeneratedResumePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    professional_summary: str = Field(alias="professionalSummary")
    enhanced_experience: List[EnhancedEntryPayload] = Field(alias="enhancedExperience")
    enhanced_projects: List[EnhancedEntryPayload] = Field(alias="enhancedProjects")
    skills_list: List[str] = Field(alias="skillsList")


class MatchPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # strict: booleans and numeric strings are not scores
    score: float = Field(strict=True, allow_inf_nan=False)
    missing_keywords: List[str] = Field(alias="missingKeywords")
    suggestions: List[str]


_string_list = TypeAdapter(StringList)


def clean_json(text: str) -> str:
    """
    Strips a markdown code fence wrapped around model output. Backticks inside
    JSON string values are left alone.
    """
    text = text.strip()
    if not text.startswith("```"):
        return text
    body = text[3:]
    if body.startswith("json"):
        body = body[4:]
    if body.rstrip().endswith("```"):
        body = body.rstrip()[:-3]
    return body.strip()


def parse_string_list(text: str, operation: str = "") -> List[str]:
    """Validates a JSON array of strings; blank items are dropped."""
    try:
        items = _string_list.validate_json(clean_json(text or ""))
    except ValidationError as e:
        raise SchemaViolationError(f"Expected a JSON array of strings: {e}", operation) from e
    return [item.strip() for item in items if item.strip()]


def _correlate(entries: List[EnhancedEntryPayload], expected_ids: List[str], label: str) -> List[EnhancedEntry]:
    """
    Checks that the response carries exactly one bullet list per input entry,
    and returns them in input order.
    """
    by_id = {}
    for entry in entries:
        if entry.id not in expected_ids:
            raise SchemaViolationError(f"Unknown {label} id in response: {entry.id!r}", "optimize_resume")
        if entry.id in by_id:
            raise SchemaViolationError(f"Duplicate {label} id in response: {entry.id!r}", "optimize_resume")
        by_id[entry.id] = entry

    missing = [entry_id for entry_id in expected_ids if entry_id not in by_id]
    if missing:
        raise SchemaViolationError(f"Response is missing {label} ids: {', '.join(missing)}", "optimize_resume")

    return [EnhancedEntry(id=entry_id, bullets=list(by_id[entry_id].bullets)) for entry_id in expected_ids]


def parse_generated_resume(text: str, profile: Profile) -> GeneratedResume:
    """
    Validates an optimized resume against the profile it was generated from.
    An empty response is a failure: callers expect a resume or nothing.
    """
    cleaned = clean_json(text or "")
    if not cleaned:
        raise SchemaViolationError("Empty response for resume optimization", "optimize_resume")
    try:
        payload = GeneratedResumePayload.model_validate_json(cleaned)
    except ValidationError as e:
        raise SchemaViolationError(f"Resume response did not match schema: {e}", "optimize_resume") from e

    return GeneratedResume(
        professional_summary=payload.professional_summary,
        enhanced_experience=_correlate(
            payload.enhanced_experience, [e.id for e in profile.experience], "experience"),
        enhanced_projects=_correlate(
            payload.enhanced_projects, [p.id for p in profile.projects], "project"),
        skills_list=[s.strip() for s in payload.skills_list if s.strip()],
    )


def parse_match_result(text: str) -> MatchResult:
    """Validates a match analysis; the score is clamped into 0..100."""
    try:
        payload = MatchPayload.model_validate_json(clean_json(text or ""))
    except ValidationError as e:
        raise SchemaViolationError(f"Match response did not match schema: {e}", "analyze_match") from e

    score = int(round(min(100.0, max(0.0, payload.score))))
    if not 0 <= payload.score <= 100:
        logger.warning(f"Match score {payload.score} adjusted to {score}")

    return MatchResult(
        score=score,
        missing_keywords=payload.missing_keywords,
        suggestions=payload.suggestions,
    )
