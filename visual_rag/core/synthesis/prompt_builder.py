"""
Grounding prompt builder.

Assembles the single message sent to the synthesis chat: system prompt,
extracted context, the user's question, up to five document summaries and
answering guidelines. Pure function of its inputs.

Dependencies: None
System role: Prompt assembly for the response synthesizer
"""

from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.core.retrieval.schemas import RetrievalResult
from visual_rag.core.synthesis.default_prompts import DEFAULT_SYSTEM_PROMPT

MAX_PROMPT_DOCUMENTS = 5
CONTENT_EXCERPT_CHARS = 1500

ANSWER_GUIDELINES = """Using the image and the detected problems, give a concrete, practical answer.

When answering:
1. Put safety first
2. Give clear step-by-step instructions
3. Recommend consulting a professional when appropriate
4. State clearly when the situation is urgent
5. Explain what the visual indicators mean
"""


def _joined(values: list[str]) -> str:
    return ", ".join(values) if values else "none"


def _document_summary(index: int, result: RetrievalResult) -> str:
    document = result.document
    content = document.content
    if len(content) > CONTENT_EXCERPT_CHARS:
        content = content[:CONTENT_EXCERPT_CHARS] + "..."
    lines = [
        f"{index}. {document.title} (relevance: {result.relevance_score * 100:.1f}%)",
        f"Category: {document.category} | Severity: {document.severity_level}",
        f"Content: {content}",
    ]
    if document.icon_name:
        lines.append(f"Visual indicator: {document.icon_name} - {document.icon_description or ''}".rstrip(" -"))
    if document.visual_indicators:
        lines.append(f"Indicators: {', '.join(document.visual_indicators)}")
    if document.tags:
        lines.append(f"Tags: {', '.join(document.tags)}")
    return "\n".join(lines)


def build_grounding_prompt(
    context: ExtractedContext,
    documents: list[RetrievalResult],
    user_text: str | None = None,
    system_prompt: str | None = None,
) -> str:
    """
    Build the grounding prompt.

    Args:
        context: Extracted image context
        documents: Ranked retrieval results (only the first five are used)
        user_text: The user's question
        system_prompt: Caller or catalog prompt; the default when empty

    Returns:
        str: Prompt text
    """
    sections = [
        (system_prompt or "").strip() or DEFAULT_SYSTEM_PROMPT,
        "\n".join([
            "Image analysis:",
            f"- Device: {context.device_type}",
            f"- Category: {context.primary_category}",
            f"- Detected issues: {_joined(context.detected_issues)}",
            f"- Visual indicators: {_joined(context.visual_indicators)}",
            f"- Urgency: {context.urgency_level}",
            f"- Keywords: {_joined(context.keywords)}",
        ]),
    ]
    if user_text and user_text.strip():
        sections.append(f"User question: {user_text.strip()}")

    selected = documents[:MAX_PROMPT_DOCUMENTS]
    if selected:
        summaries = "\n\n".join(_document_summary(i, result) for i, result in enumerate(selected, start=1))
        sections.append(
            f"Relevant knowledge base documents ({len(selected)}):\n{summaries}\n\n"
            "Use the knowledge base documents above as your reference."
        )
    else:
        sections.append("No relevant knowledge base documents were found. Answer from general knowledge.")

    sections.append(ANSWER_GUIDELINES)
    return "\n\n".join(sections)
