"""Module with closed libraries of weighted phrase patterns."""

import re

# Based on Wikipedia guidelines: https://en.wikipedia.org/wiki/Wikipedia:Signs_of_AI_writing
AI_DISCOURSE_MARKERS: tuple[tuple[str, float], ...] = (
    (r"\b(furthermore|moreover|additionally|consequently)\b", 0.25),
    (r"\b(it is|it's) (important|crucial|essential|vital) to (note|remember)\b", 0.35),
    (r"\b(it should be noted|it is worth (noting|mentioning))\b", 0.35),
    (r"\b(in conclusion|to conclude|in summary|to summari[sz]e)\b", 0.25),
    (r"\b(utili[sz]e|facilitate|optimi[sz]e|streamline|leverag(e|ing))\b", 0.2),
    (r"\b(delve|delving) (into|deeper)\b", 0.4),
    (r"\b(in today's (world|society)|in this day and age|in the modern era)\b", 0.35),
    (r"\b(a testament to|plays a (crucial|pivotal|vital) role)\b", 0.35),
    (r"\b(tapestry|landscape|realm) of\b", 0.3),
    (r"\b(myriad|plethora|multitude) of\b", 0.3),
    (r"\bnot only\b.+\bbut( also)?\b", 0.25),
    (r"\bnot just about\b.+\bit's\b", 0.25),
    (r"—", 0.15),
)

# Citation and definition phrasing often copied without attribution.
PLAGIARISM_PHRASING: tuple[tuple[str, float], ...] = (
    (r"\b(according to research|studies show|research (indicates|suggests))\b", 0.25),
    (r"\b[A-Z][a-z]+ et al\.(?: \(\d{4}\)|$)", 0.25),
    (r"^[A-Z][a-z]+ is (defined as|a type of|characteri[sz]ed by)\b", 0.25),
    (r"\b(as stated by|as mentioned by|according to)\b", 0.25),
)

# Markers of academic register, used as a counterweight to AI-likeness.
ACADEMIC_REGISTER: tuple[tuple[str, float], ...] = (
    (r"\bin this (study|paper|article|thesis)\b", 0.3),
    (r"\bwe (propose|present|argue|hypothesi[sz]e|observe)\b", 0.25),
    (r"\b(hypothesis|methodology|empirical(ly)?|statistically)\b", 0.2),
    (r"\b(table|figure|section|appendix) \d+\b", 0.25),
    (r"\bfig\.(?: \d+\b|$)", 0.25),
    (r"\bp ?[<=>] ?0?\.\d+\b", 0.3),
    (r"\(\s*[A-Z][A-Za-z-]+(,| and| &)[^()]*\d{4}\s*\)", 0.3),
)


class PatternLibrary:
    """Closed list of regular expressions with a fixed weight per match."""

    def __init__(
        self,
        name: str,
        patterns: tuple[tuple[str, float], ...],
        *,
        case_sensitive: tuple[str, ...] = (),
    ) -> None:
        """
        Compile the patterns of the library.

        Args:
            name (str): Name of the library.
            patterns (tuple[tuple[str, float], ...]): Pairs of a regular expression
                and a weight added for every match.
            case_sensitive (tuple[str, ...], optional): Expressions that must not be
                matched case-insensitively. Defaults to none.
        """
        self.name = name
        self._patterns = [
            (
                re.compile(
                    pattern,
                    re.MULTILINE if pattern in case_sensitive else re.IGNORECASE,
                ),
                weight,
            )
            for pattern, weight in patterns
        ]

    def __len__(self) -> int:
        """Get the number of patterns in the library."""
        return len(self._patterns)

    def score(self, text: str) -> float:
        """
        Sum weights of all pattern matches in a text.

        Args:
            text (str): Text to be searched.

        Returns:
            float: Non-negative, unbounded accumulated score.
        """
        return sum(
            weight * sum(1 for _ in regex.finditer(text))
            for regex, weight in self._patterns
        )


def ai_library() -> PatternLibrary:
    """Get the library of discourse markers typical of generated prose."""
    return PatternLibrary("ai", AI_DISCOURSE_MARKERS)


def plagiarism_library() -> PatternLibrary:
    """Get the library of citation and definition phrasing."""
    return PatternLibrary(
        "plagiarism",
        PLAGIARISM_PHRASING,
        case_sensitive=(PLAGIARISM_PHRASING[1][0], PLAGIARISM_PHRASING[2][0]),
    )


def academic_library() -> PatternLibrary:
    """Get the library of academic register markers."""
    return PatternLibrary(
        "academic", ACADEMIC_REGISTER, case_sensitive=(ACADEMIC_REGISTER[6][0],)
    )
