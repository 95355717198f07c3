from core.prompts import (
    REFUSAL_PROMPT,
    build_prompt,
    grounded_messages,
    refusal_messages,
)


def test_refusal_is_identical_for_both_branches():
    filtered = build_prompt(False, "some context", "bad words")
    no_context = build_prompt(True, "", "good question")

    assert filtered == no_context == refusal_messages()
    assert [(m.role, m.content) for m in filtered] == [("user", REFUSAL_PROMPT)]


def test_grounded_prompt_carries_context_and_literal_query():
    system, user = build_prompt(True, "RESUME", "Do you know {braces}?", candidate="Sam")

    assert (system.role, system.content) == ("system", "RESUME")
    assert user.role == "user"
    assert user.content.startswith("You are talking to a curious recruiter with my resume. ")
    assert "answer this query: Do you know {braces}?\n" in user.content
    assert "Represent Sam in a positive light." in user.content
    assert user.content.endswith("If the query is unrelated, respond in a joking manner.")


def test_grounded_default_candidate():
    _, user = grounded_messages("ctx", "q")
    assert "Represent Jefferson in a positive light." in user.content
