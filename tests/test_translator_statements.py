from __future__ import annotations

from fzn2lp.language.ast import (
    ArrayLiteral, ArrayType, Literal, ParameterDecl, RangeLiteral, SetOfIntType,
)
from fzn2lp.language.parser import parse_statement
from fzn2lp.language.translator import FactTranslator
from tests.conftest import translate_text


def test_variables():
    assert translate_text("var int : a :: output_var = 1;") == [
        'variable_type("a",int).',
        'variable_value("a",value,1).',
        'output_var("a").',
    ]
    assert translate_text("var 1..3 : a;") == ['variable_type("a",range,(value,1,value,3)).']
    assert translate_text("var {1,2,3} : a;") == [
        'variable_type("a",set,(value,1)).',
        'variable_type("a",set,(value,2)).',
        'variable_type("a",set,(value,3)).',
    ]
    assert translate_text("var float : b = 1.0;") == [
        'variable_type("b",float).',
        'variable_value("b",value,"1").',
    ]
    assert translate_text("var 0.5..1.5: b = 1.0;") == [
        'variable_type("b",float,(bounds,value,"0.5",value,"1.5")).',
        'variable_value("b",value,"1").',
    ]
    assert translate_text("var bool : c = true;") == [
        'variable_type("c",bool).',
        'variable_value("c",value,true).',
    ]


def test_array_variables():
    assert translate_text("array [1..2] of var int : d = [42,23];") == [
        'variable_type("d",array(2,int)).',
        'variable_value("d",array,(0,value,42)).',
        'variable_value("d",array,(1,value,23)).',
    ]
    assert translate_text("array [1..2] of var float : e :: output_array([1..2, 1..2]) = [42.1,23.1];") == [
        'variable_type("e",array(2,float)).',
        'variable_value("e",array,(0,value,"42.1")).',
        'variable_value("e",array,(1,value,"23.1")).',
        'output_array("e",0,(1,2)).',
        'output_array("e",1,(1,2)).',
    ]
    assert translate_text("array [1..3] of var set of 17..42: h = [{42,17},23..X,{}];") == [
        'variable_type("h",array(3,set_of_int,(range,value,17,value,42))).',
        'variable_value("h",array,(0,set,(value,42))).',
        'variable_value("h",array,(0,set,(value,17))).',
        'variable_value("h",array,(1,range,(value,23,var,"X"))).',
        'variable_value("h",array,(2,empty_set)).',
    ]


def test_set_variables():
    assert translate_text("var set of 17..42: f = {17,23};") == [
        'variable_type("f",set_of_int,(range,value,17,value,42)).',
        'variable_value("f",set,(value,17)).',
        'variable_value("f",set,(value,23)).',
    ]
    assert translate_text("var set of {17,23,100}: f = {17,23};") == [
        'variable_type("f",set_of_int,(set,value,17)).',
        'variable_type("f",set_of_int,(set,value,23)).',
        'variable_type("f",set_of_int,(set,value,100)).',
        'variable_value("f",set,(value,17)).',
        'variable_value("f",set,(value,23)).',
    ]


def test_parameters_emit_values_only():
    assert translate_text("int : a = 1;") == ['parameter_value("a",value,1).']
    assert translate_text("float : b = 1.1;") == ['parameter_value("b",value,"1.1").']
    assert translate_text("bool : c = true;") == ['parameter_value("c",value,true).']
    assert translate_text("array [1..2] of int : d = [42,23];") == [
        'parameter_value("d",array,(0,value,42)).',
        'parameter_value("d",array,(1,value,23)).',
    ]
    assert translate_text("array [1..2] of float : e = [42.1,23.0];") == [
        'parameter_value("e",array,(0,value,"42.1")).',
        'parameter_value("e",array,(1,value,"23")).',
    ]
    assert translate_text("set of int: f = 23..42;") == ['parameter_value("f",range,(value,23,value,42)).']
    assert translate_text("array [1..3] of set of int : h = [{42,17},1..5,{}];") == [
        'parameter_value("h",array,(0,set,(value,42))).',
        'parameter_value("h",array,(0,set,(value,17))).',
        'parameter_value("h",array,(1,range,(value,1,value,5))).',
        'parameter_value("h",array,(2,empty_set)).',
    ]


def test_float_range_parameter_uses_bounds_tag(translator):
    stmt = ParameterDecl(
        name="g",
        type=ArrayType(size=1, element=SetOfIntType()),
        value=ArrayLiteral(elements=[RangeLiteral(
            lower=Literal(value=0.5, type="float"),
            upper=Literal(value=2.5, type="float"),
        )]),
    )
    assert translator.translate(stmt) == ['parameter_value("g",array,(0,bounds,(value,"0.5",value,"2.5"))).']


def test_constraint_with_mixed_arguments():
    facts = translate_text("constraint bla(42,42.1,true,a,[42,17,X],{X,34},37..48,[{42,17},17..34,{X,Y}]);")
    assert facts == [
        'constraint(c1,"bla").',
        "constraint_value(c1,0,value,42).",
        'constraint_value(c1,1,value,"42.1").',
        "constraint_value(c1,2,value,true).",
        'constraint_value(c1,3,var,"a").',
        "constraint_value(c1,4,array,(0,value,42)).",
        "constraint_value(c1,4,array,(1,value,17)).",
        'constraint_value(c1,4,array,(2,var,"X")).',
        'constraint_value(c1,5,set,(var,"X")).',
        "constraint_value(c1,5,set,(value,34)).",
        "constraint_value(c1,6,range,(value,37,value,48)).",
        "constraint_value(c1,7,array,(0,set,(value,42))).",
        "constraint_value(c1,7,array,(0,set,(value,17))).",
        "constraint_value(c1,7,array,(1,range,(value,17,value,34))).",
        'constraint_value(c1,7,array,(2,set,(var,"X"))).',
        'constraint_value(c1,7,array,(2,set,(var,"Y"))).',
    ]
    positions = {int(f.split(",")[1]) for f in facts[1:]}
    assert positions == set(range(8))


def test_constraint_float_range_argument():
    assert translate_text("constraint float_in(x,0.5..1.5);") == [
        'constraint(c1,"float_in").',
        'constraint_value(c1,0,var,"x").',
        'constraint_value(c1,1,float_bound,(value,"0.5",value,"1.5")).',
    ]


def test_constraint_annotations_are_ignored():
    assert translate_text("constraint int_le(x,y) :: domain;") == [
        'constraint(c1,"int_le").',
        'constraint_value(c1,0,var,"x").',
        'constraint_value(c1,1,var,"y").',
    ]


def test_predicates():
    assert translate_text("predicate p(array [int] of var int: x, var 1..5: y, float: z);") == [
        'predicate("p").',
        'predicate_parameter("p",0,"x",array(int,int)).',
        'predicate_parameter("p",1,"y",range,(value,1,value,5)).',
        'predicate_parameter("p",2,"z",float).',
    ]
    assert translate_text("predicate q(var {1,3}: s);") == [
        'predicate("q").',
        'predicate_parameter("q",0,"s",set,(value,1)).',
        'predicate_parameter("q",0,"s",set,(value,3)).',
    ]


def test_solve_goals():
    assert translate_text("solve satisfy;") == ["solve(satisfy)."]
    assert translate_text("solve minimize cost;") == ['solve(minimize,var,"cost").']
    assert translate_text("solve :: int_search([x], input_order, indomain_min, complete) maximize x;") == [
        'solve(maximize,var,"x").'
    ]


def test_comments_are_echoed(translator):
    assert translate_text("% hello world\n", translator) == ["% hello world"]
    assert translator.state.phase == 0


def test_comments_can_be_suppressed():
    quiet = FactTranslator(echo_comments=False)
    assert translate_text("% hello\nsolve satisfy;\n", quiet) == ["solve(satisfy)."]


def test_array_of_unbounded_set_variables():
    assert translate_text("array [1..2] of var set of int: s = [{1},{}];") == [
        'variable_type("s",array(2,set)).',
        'variable_value("s",array,(0,set,(value,1))).',
        'variable_value("s",array,(1,empty_set)).',
    ]
    assert translate_text("predicate p(array [int] of var set of int: s);") == [
        'predicate("p").',
        'predicate_parameter("p",0,"s",array(int,set_of_int)).',
    ]


def test_float_set_predicate_parameter():
    assert translate_text("predicate p(var {0.5,1.5}: f);") == [
        'predicate("p").',
        'predicate_parameter("p",0,"f",float_in_set(0.5)).',
        'predicate_parameter("p",0,"f",float_in_set(1.5)).',
    ]


def test_same_statement_translates_identically():
    statements = [
        parse_statement("array [1..3] of var set of 17..42: h :: output_array([1..3]) = [{42,17},23..X,{}];"),
        parse_statement("constraint bla([{42,17},17..34,{X,Y}],{X,34},37..48);"),
    ]
    for stmt in statements:
        first = FactTranslator().translate(stmt)
        second = FactTranslator().translate(stmt)
        assert first == second
        assert first


def test_comment_trailing_whitespace_is_dropped():
    assert translate_text("%  keep inner   \t \r\n") == ["%  keep inner"]
