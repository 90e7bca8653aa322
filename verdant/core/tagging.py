"""Topical tag extraction from a fixed lexicon."""

from verdant.models.domain import MAX_TAGS

# (substring to look for in lower-cased text, canonical tag)
FRAMEWORKS = [
    ("react", "react"),
    ("vue", "vue"),
    ("angular", "angular"),
    ("express", "express"),
    ("fastapi", "fastapi"),
    ("django", "django"),
    ("flask", "flask"),
    ("spring", "spring"),
    ("rails", "rails"),
    ("nextjs", "nextjs"),
]

LANGUAGES = [
    ("javascript", "js"),
    ("typescript", "ts"),
    ("python", "python"),
    ("rust", "rust"),
    ("go", "go"),
    ("java", "java"),
    ("c++", "cpp"),
    ("c#", "csharp"),
    ("php", "php"),
    ("ruby", "ruby"),
]

TECHNOLOGIES = [
    ("docker", "docker"),
    ("kubernetes", "k8s"),
    ("aws", "aws"),
    ("azure", "azure"),
    ("gcp", "gcp"),
    ("redis", "redis"),
    ("postgresql", "postgres"),
    ("mysql", "mysql"),
    ("mongodb", "mongo"),
    ("elasticsearch", "elastic"),
]

CONCEPTS = [
    ("authentication", "auth"),
    ("authorization", "authz"),
    ("security", "security"),
    ("testing", "testing"),
    ("deployment", "deploy"),
    ("monitoring", "monitoring"),
    ("logging", "logging"),
    ("caching", "cache"),
    ("scaling", "scale"),
    ("performance", "perf"),
]

LEXICON = FRAMEWORKS + LANGUAGES + TECHNOLOGIES + CONCEPTS


class TagExtractor:
    """Derive up to five topical tags for a document.

    Matching is plain substring containment, so "go" also fires on "good"
    and "java" on "javascript". Downstream consumers depend on these exact
    tags; do not tighten the matching.
    """

    def __init__(self, lexicon: list[tuple[str, str]] | None = None, max_tags: int = MAX_TAGS):
        self.lexicon = lexicon if lexicon is not None else LEXICON
        self.max_tags = max_tags

    def extract(self, content: str) -> list[str]:
        """Sorted tags, truncated after sorting so the result is order independent."""
        content_lower = content.lower()
        tags = {tag for pattern, tag in self.lexicon if pattern in content_lower}
        return sorted(tags)[: self.max_tags]


__all__ = ["TagExtractor", "LEXICON"]
