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
Data models for the ResumeAI application.

The Profile is what the user types in. GeneratedResume and MatchResult are
derived from model output and are always replaced wholesale.
"""

import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional


@dataclass
class Experience:
    """A single employment history entry."""
    id: str
    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


@dataclass
class Education:
    id: str
    institution: str = ""
    degree: str = ""
    year: str = ""


@dataclass
class Project:
    id: str
    name: str = ""
    description: str = ""
    link: str = ""


@dataclass
class Certification:
    id: str
    name: str = ""
    issuer: str = ""
    year: str = ""


@dataclass
class Language:
    id: str
    language: str = ""
    proficiency: str = ""


# Entry type per list-valued Profile section
SECTIONS = {
    "experience": Experience,
    "education": Education,
    "projects": Project,
    "certifications": Certification,
    "languages": Language,
}

# Python attribute -> wire key, where they differ
_WIRE_KEYS = {
    "full_name": "fullName",
    "start_date": "startDate",
    "end_date": "endDate",
}
_ATTR_KEYS = {v: k for k, v in _WIRE_KEYS.items()}


def new_entry_id(existing=()) -> str:
    """Returns a short identifier not present in `existing`."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:8]
        if candidate not in taken:
            return candidate


def split_skills(skills: str) -> List[str]:
    """
    Splits the comma-separated skills string into a clean list.

    Items are stripped, blanks dropped, and case-insensitive duplicates
    removed keeping the first spelling.
    """
    seen = set()
    result = []
    for item in (skills or "").split(","):
        item = item.strip()
        if not item or item.lower() in seen:
            continue
        seen.add(item.lower())
        result.append(item)
    return result


@dataclass
class Profile:
    """
    The user's career record.
    Skills are kept as a single comma-separated string; use skill_list() for a list.
    """
    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    website: str = ""
    location: str = ""
    summary: str = ""
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    skills: str = ""

    def skill_list(self) -> List[str]:
        return split_skills(self.skills)

    def update(self, **changes) -> None:
        """Sets scalar profile fields (name, email, summary, skills, ...); None clears a field."""
        for name, value in changes.items():
            if name in SECTIONS:
                raise ValueError(f"'{name}' is a list section; use add_entry/update_entry/remove_entry")
            if name not in _SCALAR_FIELDS:
                raise ValueError(f"Unknown profile field: {name}")
            setattr(self, name, "" if value is None else str(value))

    def _section(self, section: str) -> list:
        if section not in SECTIONS:
            raise ValueError(f"Unknown profile section: {section}")
        return getattr(self, section)

    def add_entry(self, section: str, **values):
        """Appends a new entry with a freshly generated id and returns it."""
        entries = self._section(section)
        entry = SECTIONS[section](id=new_entry_id(e.id for e in entries), **values)
        entries.append(entry)
        return entry

    def get_entry(self, section: str, entry_id: str):
        for entry in self._section(section):
            if entry.id == entry_id:
                return entry
        return None

    def update_entry(self, section: str, entry_id: str, **values):
        entry = self.get_entry(section, entry_id)
        if entry is None:
            raise KeyError(f"No {section} entry with id {entry_id}")
        if "id" in values:
            raise ValueError("Entry ids are immutable")
        updated = replace(entry, **values)
        entries = self._section(section)
        entries[entries.index(entry)] = updated
        return updated

    def remove_entry(self, section: str, entry_id: str) -> bool:
        entries = self._section(section)
        before = len(entries)
        entries[:] = [e for e in entries if e.id != entry_id]
        return len(entries) != before

    def contact_details(self) -> List[str]:
        """Non-empty identity fields in display order (excluding the name)."""
        values = [self.email, self.phone, self.linkedin, self.website, self.location]
        return [v for v in values if v]

    def to_dict(self) -> Dict:
        """Wire form with camelCase keys, as sent to the model and saved by the CLI."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in SECTIONS:
                value = [_entry_to_dict(entry) for entry in value]
            data[_WIRE_KEYS.get(f.name, f.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Profile":
        profile = cls()
        for key, value in (data or {}).items():
            name = _ATTR_KEYS.get(key, key)
            if name in SECTIONS:
                entry_cls = SECTIONS[name]
                entries = []
                for raw in value or []:
                    entry = _entry_from_dict(entry_cls, raw)
                    if not entry.id or any(e.id == entry.id for e in entries):
                        entry.id = new_entry_id(e.id for e in entries)
                    entries.append(entry)
                setattr(profile, name, entries)
            elif name in _SCALAR_FIELDS:
                setattr(profile, name, "" if value is None else str(value))
        return profile


_SCALAR_FIELDS = {f.name for f in fields(Profile)} - set(SECTIONS)


def _entry_to_dict(entry) -> Dict:
    return {_WIRE_KEYS.get(f.name, f.name): getattr(entry, f.name) for f in fields(entry)}


def _entry_from_dict(entry_cls, raw: Dict):
    known = {f.name for f in fields(entry_cls)}
    values = {}
    for key, value in (raw or {}).items():
        name = _ATTR_KEYS.get(key, key)
        if name in known:
            values[name] = "" if value is None else str(value)
    values.setdefault("id", "")
    return entry_cls(**values)


@dataclass
class EnhancedEntry:
    """Rewritten bullets for one experience or project entry, keyed by its id."""
    id: str
    bullets: List[str] = field(default_factory=list)


@dataclass
class GeneratedResume:
    """
    Model-written resume content.
    Replaces any previous value wholesale; never merged.
    """
    professional_summary: str
    enhanced_experience: List[EnhancedEntry] = field(default_factory=list)
    enhanced_projects: List[EnhancedEntry] = field(default_factory=list)
    skills_list: List[str] = field(default_factory=list)

    def experience_bullets(self, entry_id: str) -> Optional[List[str]]:
        for item in self.enhanced_experience:
            if item.id == entry_id:
                return item.bullets
        return None

    def project_bullets(self, entry_id: str) -> Optional[List[str]]:
        for item in self.enhanced_projects:
            if item.id == entry_id:
                return item.bullets
        return None

    def to_text(self) -> str:
        """Plain-text rendering used as the resume side of a job match."""
        bullets = " ".join(" ".join(item.bullets) for item in self.enhanced_experience)
        return "\n".join([
            f"Summary: {self.professional_summary}",
            f"Experience: {bullets}",
            f"Skills: {', '.join(self.skills_list)}",
        ])


@dataclass
class MatchResult:
    """ATS-style comparison of a resume against a job description."""
    score: int
    missing_keywords: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


def sample_profile() -> Profile:
    """A filled-in example profile for the 'create from example' flow."""
    return Profile(
        full_name="Alex Morgan",
        email="alex.morgan@example.com",
        phone="+1 (555) 123-4567",
        linkedin="linkedin.com/in/alexmorgan",
        website="alexmorgan.dev",
        location="San Francisco, CA",
        summary=(
            "Results-driven Marketing Manager with over 7 years of experience in digital "
            "strategy and brand growth. Proven track record of increasing ROI by 40% "
            "through targeted campaigns."
        ),
        experience=[
            Experience(
                id="1",
                company="TechFlow Solutions",
                role="Senior Marketing Manager",
                start_date="2021",
                end_date="Present",
                description=(
                    "Led a team of 10 marketers. Increased annual revenue by 25% through "
                    "SEO optimization. Launched 3 major product lines."
                ),
            )
        ],
        education=[
            Education(
                id="1",
                institution="University of California, Berkeley",
                degree="B.S. Business Administration",
                year="2017",
            )
        ],
        skills="Digital Marketing, SEO, Google Analytics, Team Leadership",
    )
