import json
from typing import Any, Dict, List, Optional

JSON_ONLY = "\n\nIMPORTANT: You must respond with valid JSON only. No markdown, no code blocks, just pure JSON."

MENTOR_SYSTEM_PROMPT = (
    "You are SkillSage, an AI-powered career mentor. Provide helpful, encouraging, and actionable career advice. "
    "Keep responses conversational but professional. Focus on practical steps and resources."
)

TONE_DESCRIPTIONS = {
    "formal": "professional, formal, and business-like",
    "enthusiastic": "energetic, passionate, and eager",
    "creative": "unique, creative, and memorable while remaining professional",
}


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def career_advice_prompt(message: str, user_context: Optional[Dict[str, Any]] = None) -> str:
    if not user_context:
        return message
    return f"User context: {json.dumps(user_context, ensure_ascii=False, default=str)}\n\nUser question: {message}"


def interview_feedback_prompt(evaluation: str, interview_type: str, question: str, response: str) -> str:
    return f"""{evaluation}

Interview Type: {interview_type}
Question: {question}
Candidate Response: {response}

Provide feedback in JSON format with:
- score (1-100)
- feedback (detailed assessment)
- improvements (array of improvement suggestions)
- strengths (array of identified strengths)"""


def course_recommendation_prompt(skills: List[str], interests: List[str]) -> str:
    return (
        f"Based on these user skills: {', '.join(skills)} and interests: {', '.join(interests)}, "
        "recommend 3-5 specific courses that would help advance their career. "
        'Return as a JSON object with a "courses" array containing course title strings only.'
    )


def job_search_prompt(query: str, location: Optional[str]) -> str:
    where = f" in {location}" if location else ""
    return f"""Generate realistic job listings for the search query: "{query}"{where}.

Create 5-8 diverse job listings across different companies and experience levels, each with
title, company, location, type (Full-time, Part-time, Contract, Internship), salary range,
a brief description, 3-5 key requirements and a recent posted date.

Return a JSON object {{"jobs": [...]}} whose items contain: title, company, location, type,
salary, description, requirements (array), postedDate, applyUrl."""


def resume_analysis_prompt(content: str, job_keywords: Optional[str]) -> str:
    keyword_context = f"\nTarget job keywords: {job_keywords}\n" if job_keywords else ""
    return f"""Analyze the following resume and provide a comprehensive review.
{keyword_context}
The resume content is:
---
{content}
---

Return a single JSON object with exactly this structure:
{{
  "score": <0-100 overall quality>,
  "summary": "<2-3 sentence professional summary>",
  "strengths": ["<3-4 key strengths>"],
  "improvements": ["<3-4 actionable improvement tips>"],
  "atsOptimization": ["<3-4 Applicant Tracking System tips>"],
  "extractedData": {{
    "name": "<full name or N/A>", "email": "<email or N/A>", "phone": "<phone or N/A>",
    "experience": ["<job title at company>"], "education": ["<degree from institution>"],
    "skills": ["<technical and soft skills>"]
  }},
  "keywordAnalysis": {{"found": [], "missing": [], "suggestions": []}},
  "formattingScore": <0-100>, "contentScore": <0-100>, "atsScore": <0-100>, "overallScore": <0-100>
}}"""


def cover_letter_prompt(resume_data: Dict[str, Any], job_description: str, company_name: str, tone: str) -> str:
    return f"""Generate a professional cover letter based on the following:

RESUME DATA:
{_dump(resume_data)}

JOB DESCRIPTION:
{job_description}

COMPANY NAME: {company_name}
TONE: {TONE_DESCRIPTIONS.get(tone, TONE_DESCRIPTIONS["formal"])}

The letter should match the candidate's experience to the job requirements, highlight relevant
achievements with specific examples, show knowledge of the company and stay within 250-350 words.

Return JSON with:
- coverLetter: the full cover letter text
- highlights: array of 3-4 key points that make this candidate stand out
- tone: the tone used"""


def skill_gap_prompt(skills: List[str], job_description: str) -> str:
    return f"""Analyze the skill gap between a candidate and a job:

CANDIDATE SKILLS:
{", ".join(skills)}

JOB DESCRIPTION:
{job_description}

Return JSON with:
- matchedSkills: array of skills from the resume that match the job
- missingSkills: array of {{skill, importance ("critical"/"important"/"nice-to-have"), learningResources: [{{title, type, url, duration}}]}}
- overallMatch: percentage match (0-100)
- recommendations: array of 3-4 actionable recommendations"""


def translate_prompt(resume_data: Dict[str, Any], target_language: str) -> str:
    return f"""Translate the following resume content to {target_language}.

RESUME DATA:
{_dump(resume_data)}

Keep technical skills, company names, certifications, dates, numbers and proper nouns unchanged.
Translate section headers, descriptions and achievements so they read naturally in {target_language}.

Return a JSON object with the same structure as the input, with translated content,
plus a "qualityNote" field with any notes about the translation."""


def roast_prompt(resume_content: str, resume_data: Optional[Dict[str, Any]]) -> str:
    structured = f"\nSTRUCTURED DATA:\n{_dump(resume_data)}\n" if resume_data else ""
    return f"""You are a brutally honest resume reviewer. Give blunt, constructive feedback.

RESUME CONTENT:
{resume_content}
{structured}
Return JSON with:
- overallScore: 0-100
- scorecard: {{readability, impact, keywordDensity, formatting, atsCompatibility}}, each {{score, feedback}}
- bluntFeedback: array of 5-7 direct, honest feedback points
- criticalIssues: array of issues that MUST be fixed
- quickWins: array of easy improvements
- detailedReview: array of {{section, rating ("excellent"/"good"/"needs-improvement"/"poor"), feedback}}"""


def predict_questions_prompt(resume_data: Dict[str, Any], job_description: Optional[str]) -> str:
    job = f"\nJOB DESCRIPTION:\n{job_description}\n" if job_description else ""
    return f"""Based on this resume{" and job description" if job_description else ""}, predict likely interview questions.

RESUME:
{_dump(resume_data)}
{job}
Generate 8-10 questions a recruiter would ask about the listed projects, experience, skills,
career transitions and achievements.

Return JSON with:
- questions: array of {{question, category, difficulty, basedOn, tips, sampleAnswer}}
- focusAreas: array of topics the candidate should prepare for
- preparationTips: array of 4-5 preparation recommendations"""
