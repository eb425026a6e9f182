"""Prompt templates for VINTEL LLM interactions."""

# ---------------------------------------------------------------------------
# Vehicle intelligence report
# ---------------------------------------------------------------------------

REPORT_SYSTEM_PROMPT = (
    "Summarize vehicle intelligence for used-car marketplace operators. "
    "Be precise, fact-first. Never invent facts that are not in the data."
)

REPORT_USER_PROMPT = """\
Create a short report:
1) Markers (bullet list with OK/WARN),
2) Key facts (make/model/year/body/etc),
3) 3-8 sources (title + domain).

Data: {payload}
"""
