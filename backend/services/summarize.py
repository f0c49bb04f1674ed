# services/summarize.py
"""
Summarization service
---------------------
Answers a user's question about the selected articles with an LLM.

The prompt keeps the QUESTION central: prior chat turns go first, then a
final user turn with the question, the selected keywords and a compact
excerpt of each relevant article.
"""

import logging
import re

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
MAX_CONTEXT_ITEMS = 25
MAX_TITLE_CHARS = 160
MAX_URL_CHARS = 300
MAX_EXCERPT_CHARS = 1400
TEMPERATURE = 0.3
MAX_OUTPUT_TOKENS = 1200

SYSTEM_INSTRUCTION = (
    "You are an expert research assistant. Answer the USER'S QUESTION directly and concisely first. "
    "Then give brief evidence-based details referencing the provided article context where relevant. "
    "If the answer is uncertain, say so and suggest what would clarify it. Use Markdown."
)


class SummarizeError(Exception):
    """Raised for requests the LLM should never see."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def _field(item, name, limit):
    value = item.get(name) if isinstance(item, dict) else getattr(item, name, "")
    return str(value or "")[:limit]


def format_context(items) -> str:
    """Render up to MAX_CONTEXT_ITEMS articles as numbered excerpts."""
    lines = []
    for idx, it in enumerate(list(items or [])[:MAX_CONTEXT_ITEMS], 1):
        title = _field(it, "title", MAX_TITLE_CHARS)
        url = _field(it, "url", MAX_URL_CHARS)
        text = re.sub(r"\s+", " ", _field(it, "text", 10 * MAX_EXCERPT_CHARS))[:MAX_EXCERPT_CHARS]
        suffix = f" ({url})" if url else ""
        lines.append(f"• {idx}. {title}{suffix}\n   Excerpt: {text}")

    if not lines:
        return ""
    return (
        f"\n\nContext from {len(lines)} selected articles:\n"
        + "\n".join(lines)
        + "\n\nUse this context to answer the question."
    )


def build_messages(items, keywords, prompt: str, history=None):
    """Chat-completions messages for one question."""
    messages = [{"role": "system", "content": SYSTEM_INSTRUCTION}]

    for m in history or []:
        if not isinstance(m, dict) or not m.get("content"):
            continue
        role = "assistant" if m.get("role") == "assistant" else "user"
        messages.append({"role": role, "content": str(m["content"])})

    terms = [k for k in (keywords or []) if isinstance(k, str) and k]
    keyword_line = f"\n\nSelected keywords: {', '.join(terms)}." if terms else ""

    final_user_msg = (
        f"QUESTION: {prompt.strip()}\n{keyword_line}{format_context(items)}\n\n"
        "Please answer the question above. Start with a direct answer in 1-3 sentences. "
        "Then add representative citations with links to the provided article context (if used)."
    )
    messages.append({"role": "user", "content": final_user_msg})
    return messages


def summarize(items, keywords, prompt, history=None, model=None, client=None, api_key=None):
    """
    Ask the LLM the user's question over the selected articles.

    Returns:
        str: the model's Markdown answer ("" if it returned nothing)
    """
    if not prompt or not isinstance(prompt, str) or not prompt.strip():
        raise SummarizeError("Missing prompt", status=400)

    if client is None:
        if not api_key:
            raise SummarizeError("Missing OPENAI_API_KEY", status=500)
        client = OpenAI(api_key=api_key)

    messages = build_messages(items, keywords, prompt, history)
    logger.info("summarize: %d context items, %d messages", min(len(items or []), MAX_CONTEXT_ITEMS), len(messages))

    try:
        response = client.chat.completions.create(
            model=model or DEFAULT_MODEL,
            messages=messages,
            temperature=TEMPERATURE,
            max_tokens=MAX_OUTPUT_TOKENS,
        )
    except OpenAIError as e:
        logger.warning(f"LLM call failed: {e}")
        raise SummarizeError(f"LLM request failed: {e}", status=502) from e

    return response.choices[0].message.content or ""
