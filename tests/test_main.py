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

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import AsyncMock, patch

from resumeai import main
from resumeai.errors import TransportError
from resumeai.models import Profile


@patch('resumeai.main.setup_logging')
class TestCLI(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.profile_path = os.path.join(self.test_dir, "profile.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _load(self) -> Profile:
        with open(self.profile_path, encoding="utf-8") as f:
            return Profile.from_dict(json.load(f))

    def test_sample_then_score(self, _logging):
        self.assertEqual(main.run(["--profile", self.profile_path, "sample"]), 0)
        self.assertEqual(self._load().full_name, "Alex Morgan")

        with patch.object(main, 'print_score') as mock_print:
            self.assertEqual(main.run(["--profile", self.profile_path, "score"]), 0)
        session = mock_print.call_args.args[0]
        self.assertEqual(session.score.score, 80)
        self.assertEqual(session.score.hint.text, "Add extra sections")

    def test_missing_profile_exits_1(self, _logging):
        self.assertEqual(main.run(["--profile", self.profile_path, "score"]), 1)

    @patch('resumeai.main.LLMClient.suggest_skills', new_callable=AsyncMock)
    def test_skills_saved_to_profile(self, mock_skills, _logging):
        main.run(["--profile", self.profile_path, "sample"])
        mock_skills.return_value = ["Brand Strategy", "SEO"]

        self.assertEqual(main.run(["--profile", self.profile_path, "skills"]), 0)
        self.assertEqual(self._load().skills, "Brand Strategy, SEO")

    @patch('resumeai.main.LLMClient.summarize', new_callable=AsyncMock)
    def test_generation_failure_exits_1(self, mock_summarize, _logging):
        main.run(["--profile", self.profile_path, "sample"])
        before = self._load().summary
        mock_summarize.side_effect = TransportError("down", "summarize")

        self.assertEqual(main.run(["--profile", self.profile_path, "summary"]), 1)
        self.assertEqual(self._load().summary, before)

    @patch('resumeai.main.LLMClient.draft_cover_letter', new_callable=AsyncMock)
    def test_cover_letter_export(self, mock_letter, _logging):
        main.run(["--profile", self.profile_path, "sample"])
        jd_path = os.path.join(self.test_dir, "jd.txt")
        with open(jd_path, "w", encoding="utf-8") as f:
            f.write("Head of Growth")
        out_path = os.path.join(self.test_dir, "letter.docx")
        mock_letter.return_value = "Alex Morgan\nDear Hiring Manager,"

        code = main.run(["--profile", self.profile_path, "cover-letter", "--jd", jd_path, "--output", out_path])

        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(out_path))
        self.assertEqual(mock_letter.await_args.args[1], "Head of Growth")


if __name__ == '__main__':
    unittest.main()
