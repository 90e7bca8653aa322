"""Per-model post-pass applied last in the markdown chain."""

import re
from collections.abc import Callable

from verdant.models.config import TargetModel


class ModelAdapter:
    """Final adjustments keyed by the target model.

    * claude: identity.
    * gpt: ``H2:Setup`` becomes ``SECTION_L2:Setup``.
    * copilot: ``prioritize_code`` hook. It is an identity transform today and
      callers may rely on that; moving code ahead of prose is the planned use.
    * anything else: identity.
    """

    section_pattern = re.compile(r"^H(\d):(.+)", re.MULTILINE)

    NOTES = {
        TargetModel.CLAUDE: "Structured data with technical notation",
        TargetModel.GPT: "Consistent formatting with explicit context",
        TargetModel.COPILOT: "Code-focused with file-type hints",
    }

    def __init__(self, target_model: TargetModel = TargetModel.CLAUDE):
        self.target_model = target_model

    @property
    def note(self) -> str | None:
        """Model note for the markdown output header, if the model has one."""
        return self.NOTES.get(self.target_model)

    def adapt(self, content: str) -> str:
        return self._handler()(content)

    def _handler(self) -> Callable[[str], str]:
        if self.target_model is TargetModel.GPT:
            return self.explicit_sections
        if self.target_model is TargetModel.COPILOT:
            return self.prioritize_code
        return self.identity

    @staticmethod
    def identity(content: str) -> str:
        return content

    @classmethod
    def explicit_sections(cls, content: str) -> str:
        return cls.section_pattern.sub(r"SECTION_L\1:\2", content)

    @staticmethod
    def prioritize_code(content: str) -> str:
        return content


__all__ = ["ModelAdapter"]
