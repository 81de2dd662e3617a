import pytest

from sporkle.seen import describe_matches, is_smoke, witty_comeback


@pytest.mark.parametrize(
    "text",
    ["smoke", "SMOKE?", "-> fag", "ch0ng", "smokes", "cig!!", "spliff?", "schmokeh", "toke"],
)
def test_is_smoke_matches(text):
    assert is_smoke(text) is True


def test_witty_comeback_arse():
    assert witty_comeback("my arse") == (
        "Pull your pants down and hit me with the view, big boy."
    )


def test_witty_comeback_case_insensitive():
    assert witty_comeback("ME") == "You're right there, fool."


def test_witty_comeback_mother():
    assert witty_comeback("bob's mum") == (
        "Yeah, she gives me a discount cos I see her so regularly \\o/"
    )


def test_witty_comeback_genuine_query():
    assert witty_comeback("bob") is None


def test_describe_matches_empty():
    assert describe_matches([]) is None


def test_describe_matches_single():
    assert describe_matches(["bob was here"]) == "1 possible match: bob was here"


def test_describe_matches_few():
    assert describe_matches(["alice", "bob"]) == "2 possible matches: alice, bob."


def test_describe_matches_many_lists_nine():
    names = [f"nick{i}" for i in range(12)]
    reply = describe_matches(names)
    assert reply.startswith("12 possible matches, most recent 10 are: ")
    listed = reply.split(": ", 1)[1].rstrip(".").split(", ")
    assert listed == names[:9]


def test_describe_matches_ten_lists_all():
    names = [f"nick{i}" for i in range(10)]
    reply = describe_matches(names)
    assert reply.split(": ", 1)[1].rstrip(".").split(", ") == names