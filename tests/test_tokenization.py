from pos_highlighter.tokenization import iter_words


def test_iter_words_returns_offsets():
    text = "Hello, world! It's sunny today."
    words = list(iter_words(text))

    assert [word for word, _, _ in words] == ["Hello", "world", "It's", "sunny", "today"]
    assert words[0][1:] == (0, 5)
    _, start, end = words[-1]
    assert text[start:end] == "today"
