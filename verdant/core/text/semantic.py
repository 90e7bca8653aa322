"""Phrase-level reduction: fluff removal, abbreviations and symbolic notation.

Two chains live here. The markdown chain runs after structural compression
on the plain output path. The VRD chain runs on record bodies, after code
blocks and header lines were taken out.

Rules are applied strictly in table order. Case sensitivity is per rule and
must stay as written: later rules see the output of earlier ones.
"""

import re
from collections.abc import Callable

from verdant.models.config import CompressionConfig, CompressionLevel

from .normalize import TextNormalizer

Rule = tuple[re.Pattern, str]
NamedTransform = tuple[str, Callable[[str], str]]


def _rules(table: list[tuple[str, str]], flags: int = 0) -> list[Rule]:
    return [(re.compile(pattern, flags), replacement) for pattern, replacement in table]


def _word_rules(table: list[tuple[str, str]], flags: int = 0) -> list[Rule]:
    """Whole-word rules for literal phrases."""
    return _rules([(rf"\b{re.escape(word)}\b", short) for word, short in table], flags)


def _apply(rules: list[Rule], content: str) -> str:
    for pattern, replacement in rules:
        content = pattern.sub(replacement, content)
    return content


# Markdown chain

FLUFF_RULES = _rules(
    [
        (r"\b(please note that|it should be noted that|it is important to note that)\b", ""),
        (r"\b(as mentioned above|as mentioned earlier|as we can see)\b", ""),
        (r"\b(in order to|for the purpose of)\b", "to"),
        (r"\b(due to the fact that)\b", "because"),
        (r"\b(at this point in time)\b", "now"),
    ],
    re.IGNORECASE,
)

CONNECTOR_RULES = _rules(
    [(r"\b(however|therefore|furthermore|moreover|additionally),?\s*", "")],
    re.IGNORECASE,
)

INTENSIFIER_RULES = _rules(
    [
        (r"\bvery\s+", ""),
        (r"\breally\s+", ""),
        (r"\bquite\s+", ""),
        (r"\bbasically\s+", ""),
    ],
    re.IGNORECASE,
)

ARTICLE_RULES = _rules([(r"\b(a|an|the)\s+", "")])

# Shared with the markdown header DICT line
AI_ABBREVIATIONS = [
    ("function", "FN"),
    ("parameter", "PARAM"),
    ("documentation", "DOC"),
    ("example", "EX"),
    ("installation", "INST"),
    ("configuration", "CFG"),
    ("authentication", "AUTH"),
    ("database", "DB"),
]

AI_NOTATION_RULES = _word_rules(
    AI_ABBREVIATIONS + [("returns", "→"), ("therefore", "∴")]
)

# VRD chain

ARROW_FLOW_RULES = _rules(
    [
        # Process flows
        (r"user submits form", "user→form"),
        (r"server validates data", "server→validate"),
        (r"database stores result", "DB→store"),
        (r"system sends response", "system→response"),
        # Causal relationships
        (r"(\w+)\s+triggers\s+(\w+)", r"\1→\2"),
        (r"(\w+)\s+causes\s+(\w+)", r"\1→\2"),
        (r"(\w+)\s+leads to\s+(\w+)", r"\1→\2"),
        (r"(\w+)\s+results in\s+(\w+)", r"\1→\2"),
        # Temporal sequences
        (r"after\s+(\w+),?\s+(\w+)", r"\1→\2"),
        (r"once\s+(\w+),?\s+(\w+)", r"\1→\2"),
        (r"when\s+(\w+),?\s+(\w+)", r"\1→\2"),
        (r"then\s+(\w+)", r"→\1"),
        # Data flows
        (r"(\w+)\s+passes\s+(\w+)\s+to\s+(\w+)", r"\1→\2→\3"),
        (r"(\w+)\s+sends\s+(\w+)", r"\1→\2"),
        (r"(\w+)\s+receives\s+(\w+)", r"\2→\1"),
    ],
    re.IGNORECASE,
)

ARROW_CONNECTOR_RULES = _rules(
    [
        (" then ", "→"),
        (" and then ", "→"),
        (" which ", "→"),
        (" that ", "→"),
        (" leads to ", "→"),
        (" results in ", "→"),
        (" causes ", "→"),
        (" triggers ", "→"),
        (" followed by ", "→"),
    ]
)

VRD_ABBREVIATION_RULES = _word_rules(
    [
        ("application", "app"),
        ("configuration", "CFG"),
        ("authentication", "AUTH"),
        ("authorization", "AUTHZ"),
        ("database", "DB"),
        ("function", "FN"),
        ("parameter", "PARAM"),
        ("variable", "var"),
        ("interface", "interface"),
        ("implementation", "IMPL"),
        ("documentation", "DOC"),
        ("example", "EX"),
        ("installation", "INST"),
        ("development", "dev"),
        ("production", "prod"),
        ("environment", "env"),
        ("repository", "repo"),
    ]
)

VRD_LIST_RULES = _rules(
    [
        (r"^[*-][^\S\n]+(.+)$", r"•\1"),
        (r"^\d+\.[^\S\n]+(.+)$", r"№\1"),
    ],
    re.MULTILINE,
)

VERBOSE_PHRASES = [
    ("in order to", "to"),
    ("due to the fact that", "because"),
    ("it is important to note that", "NOTE:"),
    ("please note that", "NOTE:"),
    ("as mentioned above", "↑"),
    ("as shown below", "↓"),
    ("for example", "EX:"),
    ("such as", "e.g."),
    ("and so on", "etc"),
    ("at this point in time", "now"),
    ("in the event that", "if"),
    ("on the other hand", "vs"),
]

VRD_PHRASE_RULES = _rules(
    [(re.escape(phrase), short) for phrase, short in VERBOSE_PHRASES], re.IGNORECASE
)

FILLER_RULES = _rules(
    [
        (rf"\b{word}\s+", "")
        for word in (
            "really",
            "very",
            "quite",
            "just",
            "simply",
            "basically",
            "essentially",
            "actually",
            "literally",
        )
    ]
)

AGGRESSIVE_RULES = _word_rules(
    VERBOSE_PHRASES
    + [
        ("Generated:", "Gen:"),
        ("Created:", "Made:"),
        ("Implemented:", "Built:"),
        ("Achievement:", "Win:"),
        ("Accomplished:", "Done:"),
        ("Features", "F:"),
        ("Priority", "P"),
        ("Current", "Now"),
        ("Strategic", "Strategy"),
        ("Technical", "Tech"),
        ("Development", "Dev"),
        ("Implementation", "Impl"),
        ("Optimization", "Opt"),
        ("Specification", "Spec"),
        ("Documentation", "Doc"),
        ("Repository", "Repo"),
        ("Application", "App"),
        ("Configuration", "Config"),
        ("Environment", "Env"),
        ("Performance", "Perf"),
        ("Quality Assurance", "QA"),
        ("User Experience", "UX"),
        ("Breakthrough", "Win"),
        ("represents", "="),
        ("demonstrates", "shows"),
        ("successfully", "✓"),
        ("efficiently", "fast"),
        ("comprehensive", "full"),
        ("innovative", "new"),
        ("revolutionary", "new"),
        ("significant", "big"),
        ("important", "key"),
        ("potential", "could"),
        ("capability", "can"),
        ("functionality", "work"),
        ("opportunity", "chance"),
        ("improvement", "fix"),
        ("enhancement", "boost"),
    ],
    re.IGNORECASE,
)

MATH_RULES = _rules(
    [
        (r"\breturn\b", "→"),
        (r"\byield\b", "⟶"),
        (r"\btherefore\b", "∴"),
        (r"\bbecause\b", "∵"),
        (r"\bequals?\b", "="),
        (r"\bnot equal", "≠"),
        (r"\bgreater than or equal", "≥"),
        (r"\bless than or equal", "≤"),
        (r"\bapproximately", "≈"),
        (r"\binfinity", "∞"),
        (r"\bsum of", "Σ"),
        (r"\bfor all", "∀"),
        (r"\bthere exists", "∃"),
        (r"\bmapping to", "↦"),
        (r"\bimplies", "⟹"),
        (r"\bif and only if", "⟺"),
    ],
    re.IGNORECASE,
)


class SemanticReducer:
    """Tier-gated phrase reduction for one run configuration."""

    def __init__(self, config: CompressionConfig):
        self.config = config

    # Markdown chain

    def markdown_stages(self) -> list[NamedTransform]:
        """Named transforms active for the configured tier, in order."""
        level = self.config.level
        stages: list[NamedTransform] = []
        if level.at_least(CompressionLevel.MEDIUM):
            stages.append(("remove_fluff", self.remove_fluff))
        if level.at_least(CompressionLevel.HIGH):
            stages.append(("strip_connectors", self.strip_connectors))
            stages.append(("strip_intensifiers", self.strip_intensifiers))
        if self.config.extreme_enabled:
            stages.append(("ai_notation", self.apply_ai_notation))
        return stages

    def reduce(self, content: str) -> str:
        for _, transform in self.markdown_stages():
            content = transform(content)
        return content

    @staticmethod
    def remove_fluff(content: str) -> str:
        return _apply(FLUFF_RULES, content)

    @staticmethod
    def strip_connectors(content: str) -> str:
        return _apply(CONNECTOR_RULES, content)

    @staticmethod
    def strip_intensifiers(content: str) -> str:
        return _apply(INTENSIFIER_RULES, content)

    @staticmethod
    def apply_ai_notation(content: str) -> str:
        """Drop articles, abbreviate domain words, use arrow and logic glyphs."""
        content = _apply(ARTICLE_RULES, content)
        return _apply(AI_NOTATION_RULES, content)

    # VRD chain

    def vrd_stages(self) -> list[NamedTransform]:
        stages: list[NamedTransform] = [
            ("collapse_whitespace", TextNormalizer.collapse_whitespace),
            ("remove_empty_lines", TextNormalizer.remove_empty_lines),
            ("arrow_notation", self.apply_arrow_notation),
            ("vrd_abbreviations", self.apply_vrd_abbreviations),
            ("vrd_lists", self.compress_vrd_lists),
            ("verbose_phrases", self.compress_verbose_phrases),
        ]
        if self.config.level.at_least(CompressionLevel.HIGH) or self.config.ai_mode:
            stages.append(("extreme_vrd", self.apply_extreme_vrd))
            stages.append(("math_notation", self.apply_math_notation))
        return stages

    def reduce_vrd(self, content: str) -> str:
        for _, transform in self.vrd_stages():
            content = transform(content)
        return content

    @staticmethod
    def apply_arrow_notation(content: str) -> str:
        content = _apply(ARROW_FLOW_RULES, content)
        return _apply(ARROW_CONNECTOR_RULES, content)

    @staticmethod
    def apply_vrd_abbreviations(content: str) -> str:
        return _apply(VRD_ABBREVIATION_RULES, content)

    @staticmethod
    def compress_vrd_lists(content: str) -> str:
        return _apply(VRD_LIST_RULES, content)

    @staticmethod
    def compress_verbose_phrases(content: str) -> str:
        return _apply(VRD_PHRASE_RULES, content)

    @staticmethod
    def apply_extreme_vrd(content: str) -> str:
        content = _apply(ARTICLE_RULES, content)
        content = _apply(FILLER_RULES, content)
        # Emphasis markers carry no information once the text is structured
        content = content.replace("**", "").replace("*", "")
        return _apply(AGGRESSIVE_RULES, content)

    @staticmethod
    def apply_math_notation(content: str) -> str:
        return _apply(MATH_RULES, content)


__all__ = ["SemanticReducer", "AI_ABBREVIATIONS"]
