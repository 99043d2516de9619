"""Canned responses returned when the text provider is unavailable or replies with junk."""

import time
from typing import Any, Dict, List, Optional

from skillsage.schemas.ai import (
    CareerAdvice,
    CourseRecommendations,
    CoverLetter,
    InterviewFeedback,
    PredictedQuestions,
    ResumeAnalysis,
    ResumeRoast,
    SkillGapAnalysis,
    TranslatedResume,
)
from skillsage.schemas.job import JobListing

_TOPIC_ADVICE = [
    (
        ("resume", "cv"),
        CareerAdvice(
            message=(
                "Great question about resumes! Here are some key tips:\n\n"
                "1. **Keep it concise** - Aim for 1-2 pages max\n"
                "2. **Use action verbs** - Start bullet points with words like 'Led', 'Developed', 'Achieved'\n"
                "3. **Quantify achievements** - Use numbers where possible\n"
                "4. **Tailor for each job** - Customize your resume to match job descriptions\n"
                "5. **Proofread carefully** - Typos can cost you the interview\n\n"
                "Would you like more specific advice on any of these areas?"
            ),
            suggestions=["Resume formatting tips", "How to write a summary", "Common resume mistakes"],
        ),
    ),
    (
        ("interview",),
        CareerAdvice(
            message=(
                "Interview preparation is crucial! Here's my advice:\n\n"
                "1. **Research the company** - Know their mission, values, and recent news\n"
                "2. **Practice common questions** - Use the STAR method for behavioral questions\n"
                "3. **Prepare your own questions** - Shows genuine interest\n"
                "4. **Follow up** - Send a thank-you email within 24 hours\n\n"
                "What specific type of interview are you preparing for?"
            ),
            suggestions=["Technical interview tips", "Behavioral questions", "Salary negotiation"],
        ),
    ),
    (
        ("job", "career", "work"),
        CareerAdvice(
            message=(
                "Career planning is an exciting journey! Here are some steps to consider:\n\n"
                "1. **Self-assessment** - Identify your strengths, interests, and values\n"
                "2. **Set clear goals** - Define short-term and long-term objectives\n"
                "3. **Build your network** - Connect with professionals in your field\n"
                "4. **Upskill continuously** - Take courses to stay relevant\n\n"
                "What aspect of your career would you like to focus on?"
            ),
            suggestions=["Career transition advice", "Finding your passion", "Industry trends"],
        ),
    ),
    (
        ("skill", "learn"),
        CareerAdvice(
            message=(
                "Excellent focus on skill development! Here's how to approach it:\n\n"
                "1. **Identify gaps** - Compare your skills to job requirements in your target role\n"
                "2. **Prioritize** - Focus on high-impact skills first\n"
                "3. **Practice actively** - Build projects to apply what you learn\n"
                "4. **Get certified** - Credentials can boost your credibility\n\n"
                "What skills are you most interested in developing?"
            ),
            suggestions=["Technical skills to learn", "Soft skills importance", "Online learning platforms"],
        ),
    ),
    (
        ("hello", "hi", "hey"),
        CareerAdvice(
            message=(
                "Hello! I'm your AI Career Mentor. I can help you with:\n\n"
                "- Resume and CV advice\n"
                "- Interview preparation\n"
                "- Career planning and transitions\n"
                "- Skill development guidance\n\n"
                "What would you like to discuss today?"
            ),
            suggestions=["Resume review", "Interview tips", "Career advice"],
        ),
    ),
]

_GENERAL_ADVICE = CareerAdvice(
    message=(
        "Thank you for your question! I'm here to help with career guidance. Here are some general tips:\n\n"
        "1. **Stay curious** - Continuous learning is key to career growth\n"
        "2. **Network actively** - Many opportunities come through connections\n"
        "3. **Document achievements** - Keep track of your accomplishments\n"
        "4. **Seek feedback** - Regular feedback helps you improve\n\n"
        "Could you provide more details about what specific career advice you're looking for?"
    ),
    suggestions=["Career planning", "Skill development", "Job search tips"],
)


def career_advice(message: str) -> CareerAdvice:
    lowered = message.lower()
    for keywords, advice in _TOPIC_ADVICE:
        if any(keyword in lowered for keyword in keywords):
            return advice.model_copy()
    return _GENERAL_ADVICE.model_copy()


def interview_feedback() -> InterviewFeedback:
    return InterviewFeedback(
        score=75,
        feedback="Could not analyze response at this time. Please try again later.",
        improvements=["Try providing more specific examples", "Structure your answer better"],
        strengths=["Good communication attempt"],
    )


def course_recommendations() -> CourseRecommendations:
    return CourseRecommendations(courses=[])


def jobs(query: str, location: Optional[str] = None) -> List[JobListing]:
    stamp = int(time.time() * 1000)
    templates = [
        ("Senior {q} Developer", "TechCorp Inc", "San Francisco, CA", "Full-time", "$90,000 - $130,000",
         "We are looking for an experienced {q} developer to join our innovative team.",
         ["5+ years experience", "Bachelor's degree", "Team collaboration"]),
        ("{q} Specialist", "Innovation Labs", "Remote", "Contract", "$70 - $100/hour",
         "Contract position for a skilled {q} specialist to work on exciting projects.",
         ["3+ years experience", "Strong communication", "Problem solving"]),
        ("Junior {q} Developer", "BigTech Solutions", "New York, NY", "Full-time", "$70,000 - $85,000",
         "Entry-level position with extensive training and mentorship.",
         ["0-2 years experience", "Recent graduate", "Eager to learn"]),
        ("{q} Consultant", "ConsultingPro", "Chicago, IL", "Contract", "$80 - $120/hour",
         "Work with multiple clients on diverse {q} projects.",
         ["7+ years experience", "Consulting experience", "Client management"]),
    ]
    listings = []
    for index, (title, company, default_location, job_type, salary, description, requirements) in enumerate(
        templates, start=1
    ):
        listings.append(
            JobListing(
                id=f"job_{stamp}_{index}",
                title=title.format(q=query),
                company=company,
                location=location or default_location,
                type=job_type,
                salary=salary,
                description=description.format(q=query),
                requirements=[query] + requirements,
                posted_date=f"{index} days ago",
                apply_url=f"https://www.linkedin.com/jobs/search/?keywords={query.replace(' ', '%20')}",
            )
        )
    return listings


def resume_analysis() -> ResumeAnalysis:
    return ResumeAnalysis(
        score=70,
        summary=(
            "Resume received, but a detailed AI analysis could not be completed at this time. "
            "Here are some general tips."
        ),
        strengths=["Professional format", "Complete contact information (if provided)"],
        improvements=[
            "Add more specific details and quantifiable achievements",
            "Include keywords relevant to the jobs you're applying for",
        ],
        ats_optimization=[
            "Ensure standard section headings (e.g., 'Work Experience', 'Education')",
            "Avoid using images, tables, or columns that can confuse ATS parsers",
        ],
        formatting_score=70,
        content_score=70,
        ats_score=70,
        overall_score=70,
    )


def cover_letter(tone: str) -> CoverLetter:
    return CoverLetter(
        cover_letter="Unable to generate cover letter at this time. Please try again later.",
        highlights=[],
        tone=tone,
    )


def skill_gap() -> SkillGapAnalysis:
    return SkillGapAnalysis(
        overall_match=0,
        recommendations=["Unable to analyze skill gap at this time. Please try again later."],
    )


def translation(resume_data: Dict[str, Any], target_language: str) -> TranslatedResume:
    return TranslatedResume(
        translated_content=resume_data,
        language=target_language,
        language_code="en",
        quality_note="Translation failed. Showing original content.",
    )


def roast() -> ResumeRoast:
    return ResumeRoast(
        overall_score=50,
        blunt_feedback=["Unable to analyze resume at this time."],
    )


def predicted_questions() -> PredictedQuestions:
    return PredictedQuestions(
        preparation_tips=["Unable to predict interview questions at this time. Please try again later."],
    )
