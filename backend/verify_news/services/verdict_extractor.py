"""
Maps free-form analysis text onto a Verdict.

Only explicit declarations count ("VERDICT: False", "the verdict is false",
"**Verdict:** Partially True"). A bare "true" anywhere in the text is
ignored, so "partially true" can never be read as "True".
"""

import re
from typing import Optional

from verify_news.models.verification import Verdict


VERDICT_DECLARATION = re.compile(
    r"verdict\s*(?:\*\*|__)?\s*(?::|is|=|-)\s*(?:\*\*|__)?\s*[\"'\[(]?\s*"
    r"(partially\s+true|true|false|inconclusive)\b",
    re.IGNORECASE,
)

# First declared label in this order wins
PRIORITY = (
    ("true", Verdict.TRUE),
    ("false", Verdict.FALSE),
    ("partially true", Verdict.PARTIALLY_TRUE),
)


def extract_verdict(analysis_text: Optional[str]) -> Verdict:
    if not analysis_text:
        return Verdict.INCONCLUSIVE

    declared = {
        " ".join(match.group(1).lower().split())
        for match in VERDICT_DECLARATION.finditer(analysis_text)
    }

    for label, verdict in PRIORITY:
        if label in declared:
            return verdict
    return Verdict.INCONCLUSIVE
