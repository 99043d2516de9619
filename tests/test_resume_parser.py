from skillsage.services.resume_parser import find_skills, match_keywords, parse_resume

RESUME = """Ada Lovelace
ada@skillsage.io | (555) 123-4567

Software engineer with 6 years of Python, SQL and Docker experience.
Led a team building machine learning pipelines on AWS.
"""


class TestParseResume:
    def test_contact_details(self):
        parsed = parse_resume(RESUME)
        assert parsed.personal_info.name == "Ada Lovelace"
        assert parsed.personal_info.email == "ada@skillsage.io"
        assert parsed.personal_info.phone == "(555) 123-4567"

    def test_skills_in_keyword_order(self):
        assert parse_resume(RESUME).skills == ["Python", "SQL", "AWS", "Docker", "Machine Learning"]

    def test_summary_truncated(self):
        parsed = parse_resume("Ada Lovelace\n" + "x" * 900)
        assert len(parsed.summary) == 500

    def test_name_falls_back_to_first_line(self):
        parsed = parse_resume("ada lovelace, engineer\nno contact details")
        assert parsed.personal_info.name == "ada lovelace, engineer"
        assert parsed.personal_info.email == ""


class TestMatchKeywords:
    def test_found_and_missing(self):
        analysis = match_keywords(RESUME, "python, Kubernetes , ,AWS")
        assert analysis.found == ["python", "AWS"]
        assert analysis.missing == ["Kubernetes"]
        assert analysis.suggestions == ["Add 'Kubernetes' to your skills or experience section"]

    def test_no_keywords(self):
        analysis = match_keywords(RESUME, None)
        assert analysis.found == analysis.missing == []

    def test_find_skills_case_insensitive(self):
        assert find_skills("worked with KUBERNETES and git") == ["Kubernetes", "Git"]
