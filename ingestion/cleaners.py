import re
import unicodedata


def normalize_text(s: str) -> str:
    s = unicodedata.normalize("NFKC", s)
    s = s.replace("\u00a0", " ")
    s = re.sub(r"[ \t]+", " ", s)
    s = re.sub(r"\s+\n", "\n", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()


def strip_markdown_emphasis(s: str) -> str:
    """Drop bold/italic asterisks and backticks that models add despite instructions."""
    return s.replace("**", "").replace("*", "").replace("`", "").strip()


def first_sentences(text: str | None, n: int = 2) -> str:
    if not text:
        return ""
    parts = re.split(r"(?<=[.!?])\s+", str(text).strip())
    return " ".join(parts[:n])
