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
Client for the generative model behind every ResumeAI generation.
Supports Google AI Studio (Gemini), Vertex AI and OpenAI.
"""

import json
import logging
from datetime import date
from typing import List, Optional

import openai
from google import genai
from google.genai import types
from pydantic import TypeAdapter

from resumeai.config import Settings, configure_ssl_env, load_settings
from resumeai.errors import GenerationError, InvalidRequestError, TransportError
from resumeai.models import GeneratedResume, MatchResult, Profile
from resumeai.schemas import (
    GeneratedResumePayload,
    MatchPayload,
    StringList,
    parse_generated_resume,
    parse_match_result,
    parse_string_list,
)

# Logger is configured in main.py
logger = logging.getLogger(__name__)

# Per-side input limit for job match analysis
MATCH_INPUT_LIMIT = 5000


def _require(value: str, name: str) -> str:
    if not value or not value.strip():
        raise InvalidRequestError(f"{name} is required")
    return value.strip()


class LLMClient:
    """
    Async gateway to the model provider.

    Every operation either returns a validated, typed result or raises a
    GenerationError. There is no retry and no canned fallback.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self._client = None
        if self.settings.provider != "vertex" and not self.settings.api_key:
            logger.warning("No API key found. Generation calls will fail until one is configured.")

    def _get_client(self):
        if self._client is None:
            if self.settings.provider == "openai":
                self._client = openai.AsyncOpenAI(api_key=self.settings.api_key)
            elif self.settings.provider == "vertex":
                # Project and location come from the environment / gcloud config
                self._client = genai.Client(vertexai=True)
            else:
                self._client = genai.Client(api_key=self.settings.api_key)
        return self._client

    async def _call_llm(self, prompt: str, schema=None, operation: str = "") -> str:
        """
        Sends one prompt and returns the raw response text.

        `schema` is the response shape (a pydantic model or list[str]). Gemini
        receives it as a response schema; OpenAI gets its JSON schema in the
        prompt. Either way the caller still validates the text.
        """
        configure_ssl_env()

        if self.settings.provider != "vertex" and not self.settings.api_key:
            raise TransportError(f"No API key configured for provider '{self.settings.provider}'", operation)

        logger.debug(f"[{operation}] model={self.settings.model} prompt_chars={len(prompt)}")
        try:
            client = self._get_client()
            if self.settings.provider == "openai":
                if schema is not None:
                    shape = json.dumps(TypeAdapter(schema).json_schema(by_alias=True))
                    prompt = f"{prompt}\n\nReturn ONLY valid JSON matching this JSON schema:\n{shape}"
                response = await client.chat.completions.create(
                    model=self.settings.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=0.7,
                )
                text = response.choices[0].message.content
            else:
                config = None
                if schema is not None:
                    config = types.GenerateContentConfig(
                        response_mime_type="application/json",
                        response_schema=schema,
                    )
                response = await client.aio.models.generate_content(
                    model=self.settings.model,
                    contents=prompt,
                    config=config,
                )
                text = response.text
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"[{operation}] LLM call failed: {e}")
            raise TransportError(f"LLM call failed: {e}", operation) from e

        logger.debug(f"[{operation}] response_chars={len(text or '')}")
        return text or ""

    async def summarize(self, job_title: str, experience: str) -> str:
        """
        Writes a 2-3 sentence professional summary.
        An empty response is returned as "".
        """
        job_title = _require(job_title, "Job title")
        prompt = f"""Write a professional, 2-3 sentence resume summary for a {job_title}.
        Key experience/traits: {experience or 'not specified'}.
        Keep it punchy and energetic. Do not include a header."""
        logger.info(f"Writing summary for: {job_title}")
        return (await self._call_llm(prompt, operation="summarize")).strip()

    async def draft_experience_bullets(self, role: str, company: str) -> List[str]:
        """Drafts 4 achievement bullets for a role. Both inputs are required."""
        role = _require(role, "Role")
        company = _require(company, "Company")
        prompt = f"""Generate 4 impactful, metric-driven resume bullet points for a {role} position at {company}.
        Focus on achievements. Return strictly a JSON array of strings."""
        logger.info(f"Drafting bullets for {role} at {company}")
        text = await self._call_llm(prompt, schema=StringList, operation="draft_experience_bullets")
        return parse_string_list(text, "draft_experience_bullets")

    async def suggest_skills(self, role: str) -> List[str]:
        role = _require(role, "Role")
        prompt = f"List 10 relevant technical and soft skills for a {role}. Return strictly a JSON array of strings."
        logger.info(f"Suggesting skills for: {role}")
        text = await self._call_llm(prompt, schema=StringList, operation="suggest_skills")
        return parse_string_list(text, "suggest_skills")

    async def optimize_resume(self, profile: Profile) -> GeneratedResume:
        """
        Rewrites the whole profile into resume content.

        The response must echo every experience and project id exactly once.
        """
        prompt = f"""
        You are an expert Resume Writer and ATS specialist.
        Analyze the provided user profile and generate professional, action-oriented content.

        1. Rewrite the summary to be punchy and professional.
        2. For each experience entry, convert the description into 3-4 strong, quantifiable bullet points using action verbs.
        3. For each project entry, convert the description into 2-3 impactful bullet points highlighting tech stack and outcome.
        4. Extract and categorize key hard and soft skills into a clean list.

        Use exactly the same "id" values as the input entries: one enhancedExperience item per
        experience entry and one enhancedProjects item per project entry.

        Input Data:
        {json.dumps(profile.to_dict())}
        """
        logger.info(
            f"Optimizing resume ({len(profile.experience)} experience, {len(profile.projects)} projects)...")
        text = await self._call_llm(prompt, schema=GeneratedResumePayload, operation="optimize_resume")
        return parse_generated_resume(text, profile)

    async def analyze_match(self, resume_text: str, job_description: str) -> MatchResult:
        """Scores a resume against a job description; each side is cut to 5000 chars."""
        resume_text = _require(resume_text, "Resume text")
        job_description = _require(job_description, "Job description")
        prompt = f"""
        You are an ATS (Applicant Tracking System) Simulator.
        Compare the following Resume text against the Job Description.

        Resume:
        {resume_text[:MATCH_INPUT_LIMIT]}

        Job Description:
        {job_description[:MATCH_INPUT_LIMIT]}

        Return a match score (0-100), a list of important missing keywords from the JD that are not in the resume, and 3 specific suggestions to improve the resume for this role.
        """
        logger.info("Analyzing job match...")
        text = await self._call_llm(prompt, schema=MatchPayload, operation="analyze_match")
        return parse_match_result(text)

    async def draft_cover_letter(self, profile: Profile, job_description: str, today: Optional[date] = None) -> str:
        """
        Writes a plain-text cover letter.

        The prompt asks for the candidate's identity block and today's date at
        the top; the returned structure is not checked.
        """
        job_description = _require(job_description, "Job description")
        today = today or date.today()

        header = [f"Full Name: {profile.full_name}", f"Email: {profile.email}", f"Phone: {profile.phone}"]
        for label, value in (("LinkedIn", profile.linkedin), ("Website", profile.website), ("Location", profile.location)):
            if value:
                header.append(f"{label}: {value}")
        header_block = "\n".join(header)
        date_line = today.strftime("%B %d, %Y")

        prompt = f"""
        Write a professional, engaging cover letter for this candidate applying to the job described below.

        Structure the cover letter as follows:
        1. Header: the candidate's details below, one per line, at the very top.
        2. Date: {date_line}
        3. Salutation: Professional greeting.
        4. Body: Write a confident but polite letter explaining why the candidate's specific experience and skills make them a good fit.

        Header details:
        {header_block}

        Candidate Profile:
        {json.dumps(profile.to_dict())}

        Job Description:
        {job_description}

        Format the output as plain text with line breaks.
        """
        logger.info("Drafting cover letter...")
        return (await self._call_llm(prompt, operation="draft_cover_letter")).strip()
