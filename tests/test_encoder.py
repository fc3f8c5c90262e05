from __future__ import annotations

import pytest

from fzn2lp.core.errors import TranslationError
from fzn2lp.engines.facts.encoder import (
    EncodingMode, encode_type, encode_value, encode_variable_type, float_literal,
)
from fzn2lp.language.ast import (
    Annotation, ArrayType, BasicType, FloatSetType, Identifier, IntSetType,
    Literal, RangeLiteral, ScalarType, SetLiteral, SubsetOfSetType,
)
from fzn2lp.language.parser import parse_statement


def _value(text: str, mode: EncodingMode = EncodingMode.EXPRESSION):
    # the initializer of a throwaway declaration
    return list(encode_value(parse_statement(f"var int: v = {text};").value, mode))


@pytest.mark.parametrize("value, expected", [
    (1.0, '"1"'),
    (42.1, '"42.1"'),
    (23.0, '"23"'),
    (100.0, '"100"'),
    (-0.5, '"-0.5"'),
    (1e-07, '"0.0000001"'),
    (float("inf"), '"inf"'),
])
def test_float_literal_is_shortest_positional_decimal(value, expected):
    assert float_literal(value) == expected


def test_scalar_values():
    assert _value("42") == ["value,42"]
    assert _value("true") == ["value,true"]
    assert _value("4.25") == ['value,"4.25"']
    assert _value("x") == ['var,"x"']


def test_ranges_depend_on_mode():
    assert _value("37..48") == ["range,(value,37,value,48)"]
    assert _value("23..X") == ['range,(value,23,var,"X")']
    assert _value("0.5..1.5") == ['float_bound,(value,"0.5",value,"1.5")']
    assert _value("0.5..1.5", EncodingMode.DECLARATION) == ['bounds,(value,"0.5",value,"1.5")']


def test_sets_expand_per_element():
    assert _value("{X,34}") == ['set,(var,"X")', "set,(value,34)"]
    assert _value("{}") == ["empty_set"]


def test_arrays_tag_elements_with_zero_based_index():
    assert _value("[{42,17},17..34,{}]") == [
        "array,(0,set,(value,42))",
        "array,(0,set,(value,17))",
        "array,(1,range,(value,17,value,34))",
        "array,(2,empty_set)",
    ]
    assert _value("[]") == []


def test_strings_and_annotations_cannot_be_values():
    with pytest.raises(TranslationError):
        list(encode_value(Literal(value="abc", type="string")))
    with pytest.raises(TranslationError):
        list(encode_value(Annotation(name="output_var")))
    with pytest.raises(TranslationError):
        list(encode_value(RangeLiteral(lower=SetLiteral(), upper=Identifier(name="X"))))


def _type(text: str):
    return list(encode_type(parse_statement(f"{text}: v;").type))


def test_declared_types():
    assert _type("var int") == ["int"]
    assert _type("var bool") == ["bool"]
    assert _type("var 1..3") == ["range,(value,1,value,3)"]
    assert _type("var {1,2,3}") == ["set,(value,1)", "set,(value,2)", "set,(value,3)"]
    assert _type("var 0.5..1.5") == ['float,(bounds,value,"0.5",value,"1.5")']
    assert _type("var {0.5,2.0}") == ["float_in_set(0.5)", "float_in_set(2)"]
    assert _type("var set of int") == ["set_of_int"]
    assert _type("var set of 17..42") == ["set_of_int,(range,value,17,value,42)"]
    assert _type("var set of {17,23}") == ["set_of_int,(set,value,17)", "set_of_int,(set,value,23)"]


def test_array_types_wrap_every_element_fragment():
    assert _type("array [1..2] of var int") == ["array(2,int)"]
    assert _type("array [1..2] of var {4,5}") == ["array(2,set,(value,4))", "array(2,set,(value,5))"]
    unsized = ArrayType(size=None, element=ScalarType(base=BasicType.INT))
    assert list(encode_type(unsized)) == ["array(int,int)"]


def test_empty_enumerations():
    assert list(encode_type(IntSetType(values=[]))) == ["empty_set"]
    assert list(encode_type(FloatSetType(values=[]))) == ["empty_set"]
    assert list(encode_type(SubsetOfSetType(values=[]))) == ["set_of_int,empty_set"]


def test_variable_arrays_of_unbounded_int_sets_are_tagged_set():
    decl = parse_statement("array [1..2] of var set of int: s;")
    assert list(encode_variable_type(decl.type)) == ["array(2,set)"]
    # bounded subsets and predicate parameters keep the full element type
    assert list(encode_variable_type(parse_statement("array [1..2] of var set of 1..3: s;").type)) == [
        "array(2,set_of_int,(range,value,1,value,3))"
    ]
    assert list(encode_type(decl.type)) == ["array(2,set_of_int)"]


def test_encoding_the_same_node_twice_is_identical():
    stmt = parse_statement("constraint bla([{42,17},17..34,{X,Y}],{X,34},0.5..1.5);")
    first = [list(encode_value(arg)) for arg in stmt.arguments]
    second = [list(encode_value(arg)) for arg in stmt.arguments]
    assert first == second

    decl = parse_statement("array [1..3] of var set of 17..42: h :: output_array([1..3]) = [{42,17},23..X,{}];")
    assert list(encode_variable_type(decl.type)) == list(encode_variable_type(decl.type))
    assert list(encode_value(decl.value)) == list(encode_value(decl.value))
