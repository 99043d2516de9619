from skillsage.prompts.base_prompt import BasePrompt


class CaseStudyPrompt(BasePrompt):
    def get_prompt_for_question_generation(self) -> str:
        return (
            "Generate one realistic business case study interview question, "
            "such as market sizing, profitability or product launch. "
            "Return only the question without any additional formatting."
        )

    def get_prompt_for_answer_evaluation(self) -> str:
        return (
            "Evaluate the candidate's answer to a case study interview question. "
            "Judge structure, use of assumptions, quantitative reasoning and the final recommendation."
        )

    @property
    def fallback_question(self) -> str:
        return "A coffee chain's profits fell 20% last year while revenue stayed flat. How would you find the cause?"
