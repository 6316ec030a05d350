"""Prompt template for refining a status digest into a leadership summary."""

MAX_SUMMARY_WORDS = 200

STATUS_SUMMARY_TEMPLATE = """Create a concise project status summary (maximum {max_words} words) based on the following status notes, focusing on key updates and action items:

{digest}

Key Requirements:
1. Begin with the current project phase and status (without percentage)
2. Highlight the most critical updates from the last 2 weeks
3. Identify any overdue items or items marked as "In Progress - Behind"
4. Include upcoming key milestones or scheduled meetings
5. Note any blockers or dependencies that need leadership attention
6. Mention specific stakeholders only when relevant to leadership

Format Guidelines:
- Current Status: Start with overall project status and phase
- Key Progress: List 2-3 most important recent developments
- Challenges: Only include if there are active blockers/delays
- Next Steps: Only include confirmed upcoming actions with dates

Additional Rules:
- Keep the summary under {max_words} words
- Use professional, business-focused language
- Include specific dates only when they appear in the source
- Don't add speculative information or assumptions
- Focus on actionable insights for leadership
- If discussing delays, include current mitigation plans
- Highlight items marked as "Leadership Attention" or "Blocker/Challenge"

Format Structure:
**Current Status:** Brief status and phase description
**Key Progress:**
* 2-3 bullet points of recent key developments
**Challenges:** [Only if present]
* Current blockers or delays
**Next Steps:**
* Confirmed upcoming actions
**Leadership Attention:** [Only if needed]
* Critical items requiring leadership intervention
"""


def build_status_summary_prompt(digest: str) -> str:
    """
    Build the refinement prompt.

    Args:
        digest: Plain-text digest produced by the composer.

    Returns:
        Formatted prompt string
    """
    return STATUS_SUMMARY_TEMPLATE.format(digest=digest, max_words=MAX_SUMMARY_WORDS)
