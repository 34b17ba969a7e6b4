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

import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from docx import Document

from resumeai.generator import ResumeGenerator
from resumeai.models import EnhancedEntry, GeneratedResume, Profile, sample_profile


class TestResumeGenerator(unittest.TestCase):

    @patch('resumeai.generator.Document')
    def test_generate_sections(self, mock_document_class):
        mock_doc = MagicMock()
        mock_document_class.return_value = mock_doc

        profile = sample_profile()
        profile.add_entry("languages", language="Spanish", proficiency="Fluent")
        generator = ResumeGenerator()
        generator.generate(profile, None, "output.docx")

        calls = [args[0] for args, _ in mock_doc.add_paragraph.call_args_list if args]
        for heading in ("PROFILE", "SKILLS", "EMPLOYMENT HISTORY", "EDUCATION", "LANGUAGES"):
            self.assertIn(heading, calls)
        self.assertNotIn("PROJECTS", calls)
        self.assertIn("Spanish (Fluent)", calls)
        mock_doc.save.assert_called_with("output.docx")

    @patch('resumeai.generator.Document')
    def test_generated_content_wins(self, mock_document_class):
        mock_doc = MagicMock()
        mock_document_class.return_value = mock_doc

        profile = sample_profile()
        resume = GeneratedResume(
            professional_summary="Generated summary",
            enhanced_experience=[EnhancedEntry("1", ["Generated bullet"])],
            skills_list=["Generated Skill"],
        )
        ResumeGenerator().generate(profile, resume, "out.docx")

        calls = [args[0] for args, _ in mock_doc.add_paragraph.call_args_list if args]
        self.assertIn("Generated summary", calls)
        self.assertIn("Generated bullet", calls)
        self.assertIn("Generated Skill", calls)
        self.assertNotIn(profile.summary, calls)

    @patch('resumeai.generator.Document')
    def test_description_lines_used_without_resume(self, mock_document_class):
        mock_doc = MagicMock()
        mock_document_class.return_value = mock_doc

        profile = Profile(full_name="Jane")
        profile.add_entry("experience", company="Acme", role="Dev", description="• Built X\n\n• Fixed Y")
        ResumeGenerator().generate(profile, None, "out.docx")

        calls = [args[0] for args, _ in mock_doc.add_paragraph.call_args_list if args]
        self.assertIn("Built X", calls)
        self.assertIn("Fixed Y", calls)

    def test_formatting_applied(self):
        """keep_with_next and widow_control are set on headings and bullets."""
        generator = ResumeGenerator()
        mock_p = MagicMock()
        mock_format = MagicMock()
        mock_p.paragraph_format = mock_format
        generator.document.add_paragraph = MagicMock(return_value=mock_p)
        generator.document.save = MagicMock()

        generator.generate(sample_profile(), None, "out.docx")

        self.assertTrue(mock_format.keep_with_next)
        self.assertTrue(mock_format.widow_control)


class TestDocxOutput(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_writes_real_docx(self):
        path = os.path.join(self.test_dir, "resume.docx")
        ResumeGenerator().generate(sample_profile(), None, path)

        text = "\n".join(p.text for p in Document(path).paragraphs)
        self.assertIn("Alex Morgan", text)
        self.assertIn("alex.morgan@example.com | +1 (555) 123-4567", text)
        self.assertIn("Senior Marketing Manager, TechFlow Solutions | 2021 – Present", text)

    def test_cover_letter(self):
        path = os.path.join(self.test_dir, "letter.docx")
        ResumeGenerator().generate_cover_letter("Alex Morgan\n\nDear Hiring Manager,\nThanks.", path)

        paragraphs = [p.text for p in Document(path).paragraphs]
        self.assertEqual(paragraphs, ["Alex Morgan", "Dear Hiring Manager,", "Thanks."])


if __name__ == '__main__':
    unittest.main()
