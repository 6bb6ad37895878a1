"""Text suggestions from an external chat-completion service.

The assistant only proposes text; applying a suggestion to the document is
the editing session's job.
"""

from enum import Enum

from openai import OpenAI, OpenAIError

from onepager.config import DEFAULT_MODEL
from onepager.resume.models import ResumeDocument
from onepager.shared import CollaboratorFailureError

SYSTEM_PROMPT = (
    "You are a resume writing assistant. Provide concise, professional output only."
)
EXTRA_SEPARATOR = "\n\nAdditional instructions:\n"


class AssistTarget(str, Enum):
    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    AWARDS = "awards"


INSTRUCTIONS = {
    AssistTarget.SUMMARY: (
        "Write a 2-3 sentence professional resume summary in a confident tone. "
        "Avoid buzzwords."
    ),
    AssistTarget.SKILLS: (
        "Suggest a concise, comma-separated skills list relevant to the role."
    ),
    AssistTarget.EXPERIENCE: (
        "Write 3-5 achievement-focused bullet points with measurable impact."
    ),
    AssistTarget.AWARDS: "Create 2-3 resume award entries in a clean format.",
}


def build_prompt(
    document: ResumeDocument,
    target: AssistTarget | str,
    index: int = 0,
    extra: str = "",
) -> str:
    """Compose identity, target role and section context into one prompt."""
    target = AssistTarget(target)
    context = []
    if document.name.strip():
        context.append(f"Candidate: {document.name.strip()}")
    if document.title.strip():
        context.append(f"Target role: {document.title.strip()}")

    if target is AssistTarget.EXPERIENCE:
        if 0 <= index < len(document.experiences):
            experience = document.experiences[index]
            context.append(
                f"Role: {experience.title}\n"
                f"Company: {experience.company}\n"
                f"Dates: {experience.dates}"
            )
        else:
            context.append("Role details not provided.")

    context.append(INSTRUCTIONS[target])
    prompt = "\n".join(context)

    if extra and extra.strip():
        prompt += f"{EXTRA_SEPARATOR}{extra.strip()}"
    return prompt


class Assistant:
    """Chat-completion client wrapper returning one suggested text block."""

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.4,
        client: OpenAI | None = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model or DEFAULT_MODEL
        self.temperature = temperature
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise CollaboratorFailureError("missing API key")
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise CollaboratorFailureError(str(e) or type(e).__name__) from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise CollaboratorFailureError("empty response")
        return content.strip()

    def suggest(
        self,
        document: ResumeDocument,
        target: AssistTarget | str,
        index: int = 0,
        extra: str = "",
    ) -> str:
        return self.generate(build_prompt(document, target, index, extra))
