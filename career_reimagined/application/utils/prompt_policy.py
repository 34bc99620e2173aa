from __future__ import annotations

from dataclasses import dataclass

from career_reimagined.domain.entities.career_catalog import is_human_subject

CLASSIFY_PROMPT = (
    "Analyze this image. Identify the main subject.\n"
    "If it is a human, return exactly \"Human\".\n"
    "If it is an animal, return the specific species and breed/color if clear "
    "(e.g., \"Golden Retriever\", \"Siamese Cat\", \"Hamster\").\n"
    "Return ONLY the subject string."
)


@dataclass(frozen=True)
class PromptPolicy:
    name: str
    satirical: bool

    def image_prompt(self, career: str, subject: str) -> str:
        if not self.satirical:
            return (
                "Generate a photorealistic portrait of a person resembling the subject in the input image, "
                f"reimagined as a {career}.\n"
                f"The person should be wearing professional {career} attire and placed in a relevant environment.\n"
                "High quality, cinematic lighting, 8k resolution."
            )
        return (
            f"Create a photorealistic, adorable, and funny portrait of a {subject} dressed as a {career}.\n"
            f"The animal should be wearing the professional attire of a {career} (e.g. uniform, suit, gear).\n"
            "Match the fur color and markings of the original animal.\n"
            "The animal should look like they are seriously doing the job.\n"
            "High quality, cinematic lighting."
        )

    def plan_prompt(self, career: str, subject: str) -> str:
        header = (
            f"Create an 8-week career transition plan for a {subject} becoming a \"{career}\".\n"
            "\n"
            f"CONTEXT: The subject is a {subject}.\n"
        )
        if self.satirical:
            guidance = (
                f"IMPORTANT: Since the subject is an animal ({subject}), the entire plan MUST be satirical, "
                "funny, and tailored to that animal's behaviors.\n"
                "  - Skills should relate to the animal (e.g., for a Cat CEO: \"Knocking mugs off tables with authority\").\n"
                "  - \"Thought Leaders\" should be famous animals or funny animal puns.\n"
                "  - \"Target Companies\" should be animal-related puns (e.g., \"Purr-waterhouseCoopers\").\n"
                "  - The tone should be professional yet absurdly specific to the animal species.\n"
                "  - Set isFictional to true.\n"
            )
        else:
            guidance = (
                "If the career is REAL (e.g., Accountant, Chef): Provide actionable advice, real thought leaders, "
                "and real companies. Set isFictional to false.\n"
                "If the career is FICTIONAL (e.g., Wizard): Write in a professional but satirical tone. "
                "Set isFictional to true.\n"
            )
        return (
            header
            + "\n"
            + guidance
            + "\n"
            "Rules:\n"
            "  - weeks must contain EXACTLY 8 entries with weekNumber 1 through 8, in order.\n"
            "  - Every thought leader, course and company needs a title and a valid URL or search URL.\n"
            "\n"
            "Return the response in JSON format according to the schema."
        )


REALISTIC_POLICY = PromptPolicy(name="realistic", satirical=False)
SATIRICAL_POLICY = PromptPolicy(name="satirical", satirical=True)


def select_policy(is_human: bool) -> PromptPolicy:
    return REALISTIC_POLICY if is_human else SATIRICAL_POLICY


def policy_for_subject(subject_descriptor: str) -> PromptPolicy:
    return select_policy(is_human_subject(subject_descriptor))
