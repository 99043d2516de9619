from skillsage.prompts.base_prompt import BasePrompt


class BehavioralPrompt(BasePrompt):
    def get_prompt_for_question_generation(self) -> str:
        return (
            "Generate one realistic behavioral interview question that can be answered with the STAR method. "
            "Return only the question without any additional formatting."
        )

    def get_prompt_for_answer_evaluation(self) -> str:
        return (
            "Evaluate the candidate's answer to a behavioral interview question. "
            "Check whether it describes the situation, task, action and result with concrete detail."
        )

    @property
    def fallback_question(self) -> str:
        return "Tell me about yourself and why you're interested in this position."
