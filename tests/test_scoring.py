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

import unittest

from resumeai.models import Education, Experience, Language, Profile, Project
from resumeai.scoring import RULES, ScoreHint, score_profile


def complete_profile() -> Profile:
    return Profile(
        full_name="Jane Doe",
        email="jane@example.com",
        summary="Engineer with ten years of platform experience.",
        experience=[Experience(id="e1", company="Acme", role="Engineer")],
        education=[Education(id="d1", institution="MIT", degree="BSc")],
        languages=[Language(id="l1", language="French", proficiency="Fluent")],
        skills="Python, Go, SQL",
    )


class TestScoring(unittest.TestCase):
    def test_weights_sum_to_100(self):
        self.assertEqual(sum(amount for _, amount, _ in RULES), 100)

    def test_empty_profile(self):
        report = score_profile(Profile())
        self.assertEqual(report.score, 0)
        self.assertEqual(report.hint, ScoreHint("Add personal details", 15))

    def test_complete_profile(self):
        report = score_profile(complete_profile())
        self.assertEqual(report.score, 100)
        self.assertIsNone(report.hint)

    def test_alex_morgan_scenario(self):
        profile = Profile(
            full_name="Alex Morgan",
            email="alex@x.com",
            experience=[Experience(id="1", company="TechFlow", role="Marketing Manager")],
            skills="SEO",
        )
        report = score_profile(profile)
        self.assertEqual(report.score, 40)
        self.assertEqual(report.hint, ScoreHint("Add education", 15))

    def test_name_without_email_is_unmet(self):
        report = score_profile(Profile(full_name="Jane"))
        self.assertEqual(report.score, 0)
        self.assertEqual(report.hint.text, "Add personal details")

    def test_thresholds_are_strict(self):
        profile = complete_profile()
        profile.skills = "abcde"  # length 5, needs > 5
        self.assertEqual(score_profile(profile).hint, ScoreHint("Add skills", 10))

        profile = complete_profile()
        profile.summary = "x" * 20  # needs > 20
        report = score_profile(profile)
        self.assertEqual(report.score, 85)
        self.assertEqual(report.hint, ScoreHint("Add profile summary", 15))

    def test_projects_count_as_extras(self):
        profile = complete_profile()
        profile.languages = []
        self.assertEqual(score_profile(profile).score, 80)
        profile.projects = [Project(id="p1", name="Site")]
        self.assertEqual(score_profile(profile).score, 100)

    def test_only_earliest_gap_is_reported(self):
        profile = complete_profile()
        profile.education = []
        profile.skills = ""
        profile.languages = []
        report = score_profile(profile)
        self.assertEqual(report.hint, ScoreHint("Add education", 15))
        self.assertEqual(report.score, 15 + 25 + 15)

    def test_meeting_any_condition_never_lowers_score(self):
        fillers = [
            lambda p: p.update(full_name="Jane", email="jane@example.com"),
            lambda p: p.add_entry("experience", company="Acme", role="Engineer"),
            lambda p: p.add_entry("education", institution="MIT"),
            lambda p: p.update(skills="Python, SQL"),
            lambda p: p.update(summary="A long enough summary for the scorer."),
            lambda p: p.add_entry("projects", name="Side project"),
        ]
        # Every subset of met conditions, then each unmet one flipped on
        for mask in range(1 << len(fillers)):
            base = Profile()
            for i, fill in enumerate(fillers):
                if mask & (1 << i):
                    fill(base)
            before = score_profile(base).score
            for i, fill in enumerate(fillers):
                if not mask & (1 << i):
                    fill(base)
                    after = score_profile(base).score
                    self.assertGreaterEqual(after, before)
                    before = after


if __name__ == '__main__':
    unittest.main()
