from services.content_filter import ContentFilter


def test_clean_prompt_passes():
    assert ContentFilter().is_clean("What is your experience with Python?")


def test_profanity_is_rejected():
    assert not ContentFilter().is_clean("What the fuck is this?")


def test_extra_words_are_rejected():
    content_filter = ContentFilter(extra_words=["salary"])
    assert not content_filter.is_clean("What salary do you expect?")
    assert content_filter.is_clean("What stack do you use?")
