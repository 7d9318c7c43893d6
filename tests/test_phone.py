from renumber.phone import PhoneMatcher, collapse_spelled_digits, decode_vanity


def test_single_match_offsets():
    matches = PhoneMatcher().find_matches("call 555-123-4567 now")
    assert len(matches) == 1
    m = matches[0]
    assert (m.start, m.end, m.matched_text) == (5, 17, "555-123-4567")


def test_replace_all():
    out = PhoneMatcher().replace_all("call 555-123-4567 now", "+1-999-0000")
    assert out == "call +1-999-0000 now"


def test_replacement_is_literal():
    out = PhoneMatcher().replace_all("x 555-123-4567", r"\1 \g<0>")
    assert out == r"x \1 \g<0>"


def test_matches_do_not_overlap():
    text = "Office (415) 555-0123, fax +44 20 7946 0958 and 212.555.0199"
    matches = PhoneMatcher().find_matches(text)
    assert len(matches) == 3
    for a, b in zip(matches, matches[1:]):
        assert a.end <= b.start
    for m in matches:
        assert text[m.start : m.end] == m.matched_text


def test_short_numbers_are_ignored():
    assert PhoneMatcher().find_matches("Room 42, floor 7, ext 1234") == []


def test_vanity_decoding():
    assert decode_vanity("1-800-FLOWERS") == "1-800-3569377"
    assert decode_vanity("Order at 1 888 GET-FOOD today") == "Order at 1 888 4383663 today"


def test_vanity_needs_toll_free_prefix():
    assert decode_vanity("1-900-FLOWERS") == "1-900-FLOWERS"


def test_spelled_digits_collapse():
    assert collapse_spelled_digits("call five five five now") == "call 555 now"
    assert collapse_spelled_digits("one or two") == "one or two"
