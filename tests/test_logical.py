import pytest

from arana import logical
from arana.logical import Atom, Composite, Op, eval_bool, eval_logical, new


def A():
    return new("A")


def B():
    return new("B")


def C():
    return new("C")


def D():
    return new("D")


def test_logical_and_or():
    cases = [
        (new("A").and_(new("B")).and_(new("C")), "( A && B && C )"),
        (new("A").and_(new("B").and_(new("C"))), "( A && C && B )"),
        (new("A").and_(new("A")), "A"),
        (new("A").or_(new("A")), "A"),
        (new("A").and_(new("A").or_(new("B"))), "( ( B && A ) || A )"),
        (new("A").and_(new("B")).or_(new("A")), "A"),
        (
            new("A").or_(new("B")).and_(new("C").or_(new("D"))),
            "( ( D && B ) || ( C && B ) || ( D && A ) || ( C && A ) )",
        ),
        (new("A").and_(new("B")).and_(new("C").and_(new("D"))), "( A && B && C && D )"),
        (new("A").or_(new("B")).and_(new("C").or_(new("A"))), "( A || ( C && B ) )"),
        (new("A").or_(new("B")).and_(new("A").or_(new("B"))), "( A || B )"),
        (new("A").and_(new("B")).and_(new("C").or_(new("A"))), "( A && B )"),
    ]
    for built, expected in cases:
        assert str(built) == expected


def test_not():
    assert str(A().and_(B()).not_()) == "( !B || !A )"


def test_not_of_or():
    assert str(A().or_(B()).not_()) == "( !B && !A )"


def test_atom_not_is_involution():
    a = A()
    assert str(a.not_()) == "!A"
    assert str(a.not_().not_()) == "A"
    assert str(a) == "A"


def test_eval():
    l = new("A", value=True).and_(new("B", value=False))
    assert eval_bool(l) is False


def test_eval_or():
    l = new("A", value=True).or_(new("B", value=False))
    assert eval_bool(l) is True


def test_eval_negated_atom():
    assert eval_bool(new("A", value=False).not_()) is True


def test_eval_with_sets():
    l = new("A", value={1, 2, 3}).and_(new("B", value={2, 3, 4}))
    result = eval_logical(l, lambda a, b: a & b, lambda a, b: a | b, lambda v: v)
    assert result == {2, 3}


def test_to_string_custom_words():
    l = A().and_(B()).or_(C().and_(D()))
    text = l.to_string("AND", "OR")
    assert "AND" in text and "OR" in text
    assert "&&" not in text


def test_sort_key_controls_order():
    without = new("x").and_(new("y"))
    with_keys = new("x", sort_key="b").and_(new("y", sort_key="a"))
    assert str(without) == "( y && x )"
    assert str(with_keys) == "( x && y )"


def test_op_names():
    and_word, or_word = str(Op.AND), str(Op.OR)
    assert new("A").and_(new("B")).to_string(and_word, or_word) == "( B AND A )"
    assert new("A").or_(new("B")).to_string(and_word, or_word) == "( B OR A )"


def test_empty_composite_renders_empty():
    assert Composite(Op.AND).to_string("&&", "||") == ""


def test_new_returns_atom_with_value():
    a = logical.new("k", value=5, sort_key="s")
    assert isinstance(a, Atom)
    assert (a.key, a.value, a.sort_key, a.negated) == ("k", 5, "s", False)


def test_and_with_unknown_type_raises():
    with pytest.raises(TypeError):
        A().and_(object())