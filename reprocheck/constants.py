from __future__ import annotations

SCHEMA_VERSION = "reprocheck.score.v1"

SEVERITY_WEIGHTS = {"blocker": 3, "major": 2, "minor": 1}

# Lower-cased substrings that mark a control entry as stating its replicates.
REPLICATE_KEYWORDS = ("replicate", "triplicate", "duplicate")
# Matched case-sensitively against the description only.
SAMPLE_SIZE_MARKER = "n="

PARTIAL_CREDIT = 50
FULL_CREDIT = 100

AMBIGUITY_PENALTY_STEP = -2
AMBIGUITY_PENALTY_FLOOR = -10

MIN_DETAILED_PARAMETERS = 2
MAX_TOP_ISSUES = 5

AMBIGUITY_ISSUE_SEVERITY = "major"
AMBIGUITY_ISSUE_TITLE = "Ambiguous Instruction"
AMBIGUITY_ISSUE_FIELD = "procedure"
