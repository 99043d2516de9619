from skillsage.prompts.base_prompt import BasePrompt
from skillsage.prompts.behavioral_prompt import BehavioralPrompt
from skillsage.prompts.case_study_prompt import CaseStudyPrompt
from skillsage.prompts.tech_prompt import TechnicalPrompt
from skillsage.schemas.interview import InterviewType


def get_prompt_by_type(interview_type: InterviewType) -> BasePrompt:
    if interview_type == InterviewType.TECHNICAL:
        return TechnicalPrompt()
    elif interview_type == InterviewType.BEHAVIORAL:
        return BehavioralPrompt()
    elif interview_type == InterviewType.CASE_STUDY:
        return CaseStudyPrompt()
    else:
        raise ValueError(f"Unsupported interview type: {interview_type}")
