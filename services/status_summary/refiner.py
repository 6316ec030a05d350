"""Optional Gemini pass that rewrites the digest into a leadership summary."""
from __future__ import annotations

import logging
from typing import Optional

from langchain_core.runnables import Runnable
from langchain_core.output_parsers import StrOutputParser

from services.status_summary.prompt import build_status_summary_prompt

logger = logging.getLogger(__name__)

output_parser = StrOutputParser()


def refine_summary(digest: str, llm: Optional[Runnable] = None) -> str:
    """
    Refine ``digest`` with the model, falling back to the digest itself.

    Args:
        digest: Composer output.
        llm: Chat model; None means no credential is configured and the
            digest is returned unchanged.

    Returns:
        The model's trimmed response, or ``digest`` when the model is
        unavailable, fails, or answers with empty text.
    """
    if llm is None:
        return digest

    chain = llm | output_parser
    try:
        refined = chain.invoke(build_status_summary_prompt(digest))
    except Exception as exc:
        logger.error("Error generating AI summary, using digest instead: %s", exc)
        return digest

    refined = (refined or "").strip()
    if not refined:
        logger.warning("AI summary was empty, using digest instead")
        return digest
    return refined
