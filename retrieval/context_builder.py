from __future__ import annotations

from typing import List, Optional, Sequence

from ingestion.document_models import ScoredFragment


def assemble_context(
    scored: Sequence[ScoredFragment], max_chars: Optional[int] = None
) -> str:
    """
    Render ranked fragments as "- text" lines, best first.

    Returns "" when nothing was retrieved. With `max_chars`, lines are added
    while they fit; the first overflowing line is cut to the remaining budget.
    """
    lines: List[str] = []
    remaining = max_chars
    for s in scored:
        line = f"- {s.text}"
        if remaining is not None:
            # account for the joining newline
            sep = 1 if lines else 0
            cost = len(line) + sep
            if cost > remaining:
                avail = remaining - sep
                if avail > len("- "):
                    lines.append(line[:avail])
                break
            remaining -= cost
        lines.append(line)
    return "\n".join(lines)
