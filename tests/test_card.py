import pytest
from shoecount.common.card import Card, Rank


def test_card_initialization():
    card = Card(Rank.EIGHT, 8, -2)
    assert card.rank == Rank.EIGHT
    assert card.point_value == 8
    assert card.count_value == -2


def test_card_str():
    assert str(Card(Rank.EIGHT, 8, -2)) == "8"
    assert str(Card(Rank.TEN, 0, 0)) == "10"
    assert str(Card(Rank.KING, 0, 0)) == "K"


def test_cards_of_same_rank_are_equal():
    assert Card(Rank.ACE, 1, 1) == Card(Rank.ACE, 1, 1)
    assert hash(Card(Rank.ACE, 1, 1)) == hash(Card(Rank.ACE, 1, 1))


def test_card_is_immutable():
    card = Card(Rank.ACE, 1, 1)
    with pytest.raises(AttributeError):
        card.point_value = 5


def test_thirteen_distinct_ranks():
    assert len(list(Rank)) == 13
    assert [str(rank) for rank in Rank] == [
        "A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"
    ]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("A", Rank.ACE),
        ("a", Rank.ACE),
        ("1", Rank.ACE),
        ("10", Rank.TEN),
        ("0", Rank.TEN),
        ("t", Rank.TEN),
        (" k ", Rank.KING),
        ("q", Rank.QUEEN),
        ("9", Rank.NINE),
    ],
)
def test_rank_parse(text, expected):
    assert Rank.parse(text) is expected


def test_rank_parse_passes_ranks_through():
    assert Rank.parse(Rank.JACK) is Rank.JACK


@pytest.mark.parametrize("text", ["", "11", "Z", "joker", "1 0"])
def test_rank_parse_invalid(text):
    with pytest.raises(ValueError):
        Rank.parse(text)
