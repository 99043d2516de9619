import re
from typing import List, Optional

from skillsage.schemas.ai import KeywordAnalysis
from skillsage.schemas.resume import ParsedResume, PersonalInfo

SKILL_KEYWORDS = [
    "JavaScript", "TypeScript", "React", "Node.js", "Python", "Java", "C++", "C#",
    "SQL", "MongoDB", "PostgreSQL", "AWS", "Azure", "Docker", "Kubernetes",
    "Git", "HTML", "CSS", "Tailwind", "Vue", "Angular", "Express", "Django",
    "Machine Learning", "AI", "Data Science", "Leadership", "Communication",
]

SUMMARY_LENGTH = 500

NAME_RE = re.compile(r"^([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)", re.MULTILINE)
EMAIL_RE = re.compile(r"([a-zA-Z0-9._-]+@[a-zA-Z0-9._-]+\.[a-zA-Z0-9_-]+)")
PHONE_RE = re.compile(r"(\+?1?[-.\s]?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4})")


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def find_skills(content: str, keywords: List[str] = SKILL_KEYWORDS) -> List[str]:
    lowered = content.lower()
    return [skill for skill in keywords if skill.lower() in lowered]


def parse_resume(content: str) -> ParsedResume:
    """Pull contact details and known skills out of plain resume text."""
    lines = [line.strip() for line in content.splitlines() if line.strip()]
    name = _first(NAME_RE, content) or (lines[0] if lines else "Your Name")
    return ParsedResume(
        personal_info=PersonalInfo(
            name=name,
            email=_first(EMAIL_RE, content) or "",
            phone=(_first(PHONE_RE, content) or "").strip(),
        ),
        summary=content[:SUMMARY_LENGTH],
        skills=find_skills(content),
    )


def match_keywords(content: str, job_keywords: Optional[str]) -> KeywordAnalysis:
    """Split comma separated job keywords into those present in the resume and those missing."""
    if not job_keywords:
        return KeywordAnalysis()
    keywords = [k.strip() for k in job_keywords.split(",") if k.strip()]
    lowered = content.lower()
    found = [k for k in keywords if k.lower() in lowered]
    missing = [k for k in keywords if k.lower() not in lowered]
    return KeywordAnalysis(
        found=found,
        missing=missing,
        suggestions=[f"Add '{k}' to your skills or experience section" for k in missing],
    )
