from skillsage.prompts.base_prompt import BasePrompt


class TechnicalPrompt(BasePrompt):
    def get_prompt_for_question_generation(self) -> str:
        return (
            "Generate one realistic technical interview question for a software or data role. "
            "It may cover algorithms, system design, debugging or language fundamentals. "
            "Return only the question without any additional formatting."
        )

    def get_prompt_for_answer_evaluation(self) -> str:
        return (
            "Evaluate the candidate's answer to a technical interview question. "
            "Judge correctness, depth, clarity of reasoning and awareness of trade-offs."
        )

    @property
    def fallback_question(self) -> str:
        return "Walk me through how you would design a URL shortening service. What trade-offs would you consider?"
