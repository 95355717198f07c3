"""
Prompts for the resume chat endpoint.

The grounded answer sends two messages: the retrieved resume context as the
system message, then a user message wrapping the recruiter's question in
persona and style instructions. Every other outcome (filtered prompt, no
context) sends a single canned refusal.
"""
from typing import List

from models.schemas import ChatMessage

# Temperatures per branch
REFUSAL_TEMPERATURE = 0.7
GROUNDED_TEMPERATURE = 0.5

CONTEXT_SEPARATOR = "\n\n---\n\n"

CONTEXT_PREAMBLE = (
    "You are an AI agent representing me in an interview.\n"
    "Pay attention and remember the content below, which can help to answer the question or imperative after the content ends.\n"
    "Answer in first person, taking the perspective of the person who wrote the content.\n"
    "Resume:\n"
)

REFUSAL_PROMPT = "Say that you don't know or can't perform that task."

GROUNDED_PROMPT = (
    "You are talking to a curious recruiter with my resume. "
    "Referring STRICTLY only to the information provided within the content above, answer this query: {query}"
    "\nKeep your answer succint, impactful, clear, and within 100 words. Do not mention things that are not in the content."
    "\nImbue the response with a friendly, light-hearted and good-natured tone. Represent {candidate} in a positive light."
    "\nIf the query is unrelated, respond in a joking manner."
)


def refusal_messages() -> List[ChatMessage]:
    """Canned "I don't know" prompt. Carries neither context nor query."""
    return [ChatMessage(role="user", content=REFUSAL_PROMPT)]


def grounded_messages(context: str, query: str, candidate: str = "Jefferson") -> List[ChatMessage]:
    # str.format would choke on braces inside the query
    user_prompt = GROUNDED_PROMPT.replace("{candidate}", candidate).replace("{query}", query)
    return [
        ChatMessage(role="system", content=context),
        ChatMessage(role="user", content=user_prompt),
    ]


def build_prompt(
    filter_passed: bool,
    context: str,
    user_query: str,
    candidate: str = "Jefferson",
) -> List[ChatMessage]:
    """
    Pick the message sequence for a request.

    Args:
        filter_passed: Result of the content filter on the query
        context: Assembled context ("" when nothing relevant was found)
        user_query: The literal latest user message
        candidate: Name of the person being represented

    Returns:
        Messages to send to the completion provider
    """
    if not filter_passed or context == "":
        return refusal_messages()
    return grounded_messages(context, user_query, candidate)
