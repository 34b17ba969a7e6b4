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
Handles export of the resume and cover letter to MS Word (DOCX).
"""

import logging
from typing import List, Optional

from docx import Document
from docx.shared import Pt

from resumeai.models import GeneratedResume, Profile

logger = logging.getLogger(__name__)


def _description_lines(description: str) -> List[str]:
    """Splits a free-text description into bullet lines, dropping any '•' prefix."""
    lines = []
    for line in (description or "").splitlines():
        line = line.strip().lstrip("•-* ").strip()
        if line:
            lines.append(line)
    return lines


def _date_range(start: str, end: str) -> str:
    return " – ".join(part for part in (start, end) if part)


class ResumeGenerator:
    """
    Builds a DOCX resume from the profile, preferring generated content
    (summary, bullets, skills) wherever it is available.
    """
    def __init__(self, font_name: str = 'Calibri', font_size: int = 11):
        self.styles = {
            'title': 'Title',
            'h1': 'Heading 1',
            'body': 'Normal',
            'bullet': 'List Bullet',
        }
        self.font_name = font_name
        self.font_size = font_size
        self.document = self._new_document()

    def _new_document(self):
        document = Document()
        try:
            font = document.styles['Normal'].font
            font.name = self.font_name
            font.size = Pt(self.font_size)
        except KeyError:
            logger.debug("Template has no 'Normal' style; keeping defaults")
        return document

    def _heading(self, text: str):
        p = self.document.add_paragraph(text, style=self.styles['h1'])
        p.paragraph_format.keep_with_next = True
        return p

    def _bullets(self, lines: List[str]):
        for line in lines:
            p = self.document.add_paragraph(line, style=self.styles['bullet'])
            p.paragraph_format.widow_control = True

    def _add_header(self, profile: Profile):
        p = self.document.add_paragraph(profile.full_name or "Your Name")
        p.style = self.styles['title']
        contact = profile.contact_details()
        if contact:
            self.document.add_paragraph(" | ".join(contact))
        self.document.add_paragraph()

    def generate(self, profile: Profile, resume: Optional[GeneratedResume], output_filename: str):
        """
        Main entry point to generate the document.

        Args:
            profile: The user's profile.
            resume: The latest generated content, or None to render the raw profile.
            output_filename: The path to save the generated DOCX.
        """
        self._add_header(profile)

        summary = resume.professional_summary if resume and resume.professional_summary else profile.summary
        if summary:
            self._heading('PROFILE')
            self.document.add_paragraph(summary)

        skills = resume.skills_list if resume and resume.skills_list else profile.skill_list()
        if skills:
            self._heading('SKILLS')
            self.document.add_paragraph(", ".join(skills))

        if profile.experience:
            self._heading('EMPLOYMENT HISTORY')
            for job in profile.experience:
                p = self.document.add_paragraph()
                p.add_run(f"{job.role}, {job.company}" if job.company else job.role).bold = True
                dates = _date_range(job.start_date, job.end_date)
                if dates:
                    p.add_run(f" | {dates}").italic = True
                p.paragraph_format.keep_with_next = True

                bullets = resume.experience_bullets(job.id) if resume else None
                self._bullets(bullets if bullets else _description_lines(job.description))

        if profile.projects:
            self._heading('PROJECTS')
            for project in profile.projects:
                p = self.document.add_paragraph()
                p.add_run(project.name).bold = True
                if project.link:
                    p.add_run(f" | {project.link}")
                p.paragraph_format.keep_with_next = True

                bullets = resume.project_bullets(project.id) if resume else None
                self._bullets(bullets if bullets else _description_lines(project.description))

        if profile.education:
            self._heading('EDUCATION')
            for edu in profile.education:
                p = self.document.add_paragraph()
                p.add_run(edu.degree).bold = True
                details = ", ".join(part for part in (edu.institution, edu.year) if part)
                if details:
                    p.add_run(f" – {details}")
                p.paragraph_format.widow_control = True

        if profile.certifications:
            self._heading('CERTIFICATIONS')
            self._bullets([
                " – ".join(part for part in (cert.name, cert.issuer, cert.year) if part)
                for cert in profile.certifications
            ])

        if profile.languages:
            self._heading('LANGUAGES')
            self._bullets([
                f"{lang.language} ({lang.proficiency})" if lang.proficiency else lang.language
                for lang in profile.languages
            ])

        self.document.save(output_filename)
        logger.info(f"Resume generated successfully: {output_filename}")

    def generate_cover_letter(self, letter_text: str, output_filename: str):
        """
        Writes the cover letter to a separate DOCX.
        The letter already carries its own header and date, so each text line
        becomes a paragraph as-is.
        """
        cl_doc = self._new_document()
        for paragraph in letter_text.split('\n'):
            if paragraph.strip():
                cl_doc.add_paragraph(paragraph.strip())

        cl_doc.save(output_filename)
        logger.info(f"Cover Letter generated successfully: {output_filename}")
