from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field

from sanitizer.redaction.models import Match, PrivacyModeConfig, RedactionCategory


@dataclass(slots=True)
class RedactionContext:
    text: str
    config: PrivacyModeConfig
    custom_strings: tuple[str, ...] = ()
    matches: list[Match] = field(default_factory=list)
    accepted: list[Match] = field(default_factory=list)
    sanitized_text: str = ""
    counts: Counter[RedactionCategory] = field(default_factory=Counter)


class RedactionStep(ABC):
    @abstractmethod
    def run(self, context: RedactionContext) -> RedactionContext:
        raise NotImplementedError
