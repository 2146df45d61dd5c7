"""Tests for argument collection and substitution."""

import pytest
from pydantic import ValidationError
from ddocmac.lib.lexer import Lexer
from ddocmac.lib.macros.arguments import arguments_collect, arguments_replace
from ddocmac.lib.macros.errors import EmbeddedCodeError
from ddocmac.models.dataModel import ArgumentVector


def vector(*positional: str, whole: str, rest: str | None) -> ArgumentVector:
    """Build an argument vector from positional values."""
    slots = [whole, *positional] + [None] * (9 - len(positional)) + [rest]
    return ArgumentVector(slots=tuple(slots), count=len(positional))


def test_two_arguments():
    args = arguments_collect("Hello, world")
    assert args.count == 2
    assert args[0] == "Hello, world"
    assert args[1] == "Hello"
    assert args[2] == "world"
    assert all(args[i] is None for i in range(3, 10))
    assert args.rest == "world"


def test_eight_arguments():
    text = "goodbye,cruel,world,I,will,happily,return,home"
    args = arguments_collect(text)
    assert args.count == 8
    assert args[0] == text
    assert [args[i] for i in range(1, 9)] == text.split(",")
    assert args[9] is None
    assert args.rest == "cruel,world,I,will,happily,return,home"


def test_nested_commas_do_not_split():
    args = arguments_collect("this,(is,(just,two),args)")
    assert args.count == 2
    assert args[0] == "this,(is,(just,two),args)"
    assert args[1] == "this"
    assert args[2] == "(is,(just,two),args)"
    assert all(args[i] is None for i in range(3, 10))
    assert args.rest == "(is,(just,two),args)"


def test_empty_body_has_no_arguments():
    args = arguments_collect("")
    assert args.count == 0
    assert all(args[i] is None for i in range(11))


def test_ninth_argument_absorbs_the_rest():
    text = (
        "I,am,happy,to,join,with,you,today,in,what,will,go,down,in,history,as,"
        "the,greatest,demonstration,for,freedom,in,the,history,of,our,nation."
    )
    args = arguments_collect(text)
    assert args.count == 9
    assert args[0] == text
    words = text.split(",", 8)
    for index, word in enumerate(words, start=1):
        assert args[index] == word
    assert args[9].startswith("in,what,will,go")
    assert args.rest == text[2:]


def test_no_comma_gives_empty_rest():
    args = arguments_collect("solo argument")
    assert args.count == 1
    assert args[1] == "solo argument"
    assert args.rest == ""


def test_trailing_comma_gives_empty_argument():
    args = arguments_collect("a,")
    assert args[1] == "a"
    assert args[2] == ""
    assert args.rest == ""


def test_blanks_after_comma_are_stripped():
    args = arguments_collect("a ,\n   b")
    assert args[1] == "a "
    assert args[2] == "b"
    assert args.rest == "b"


def test_collect_does_not_advance_lexer():
    lexer = Lexer("x, y")
    args = arguments_collect(lexer)
    assert args[2] == "y"
    assert lexer.offset == 0


def test_collect_from_positioned_lexer():
    lexer = Lexer("NAME a, b")
    lexer.pop_front()
    lexer.pop_front()
    args = arguments_collect(lexer)
    assert args[0] == "a, b"
    assert args[1] == "a"


def test_collect_rejects_embedded_code():
    with pytest.raises(EmbeddedCodeError):
        arguments_collect(Lexer("x\n---\ncode\n---\n"))


def test_collect_text_dashes_are_plain_text():
    args = arguments_collect("---, x\n---\n")
    assert args[1] == "---"
    assert args[2] == "x\n---\n"


def test_replace_template_dashes_are_plain_text():
    args = vector("x", whole="x", rest="")
    assert arguments_replace("---\n$1\n---", args).text == "---\nx\n---"


def test_vector_needs_eleven_slots():
    with pytest.raises(ValidationError):
        ArgumentVector(slots=("a", "b"))


def test_replace_whole_argument_in_nested_macros():
    args = vector("Some kind of test", " I guess", whole="Some kind of test, I guess", rest=" I guess")
    result = arguments_replace("$(MY $(SUPER $(MACRO $0)))", args)
    assert result.success
    assert result.text == "$(MY $(SUPER $(MACRO Some kind of test, I guess)))"


def test_replace_positional_and_rest():
    args = vector("Some", "kind", "of", "test", whole="Some,kind,of,test", rest="kind,of,test")
    result = arguments_replace("$(SOME $(MACRO $1 $+))", args)
    assert result.success
    assert result.text == "$(SOME $(MACRO Some kind,of,test))"


def test_replace_fails_on_missing_argument():
    args = vector("Some", "kind", whole="Some,kind", rest="kind")
    result = arguments_replace("$(SOME $(MACRO $1 $2 $3))", args)
    assert not result.success
    assert result.text == ""
    assert "$3" in result.error


def test_replace_single_digit_reference():
    args = vector("x", whole="x", rest="")
    assert arguments_replace("$12", args).text == "x2"
    assert arguments_replace("$1_test", args).text == "x_test"


def test_replace_literal_dollars():
    args = vector("x", whole="x", rest="")
    assert arguments_replace("costs $ 5", args).text == "costs $ 5"
    assert arguments_replace("trailing $", args).text == "trailing $"
    assert arguments_replace("$$1", args).text == "$x"


def test_replace_rest_never_fails():
    assert arguments_replace("<i>$+</i>", ArgumentVector()).text == "<i></i>"


def test_replace_empty_argument_is_not_missing():
    args = vector("", whole="", rest="")
    result = arguments_replace("[$1]", args)
    assert result.success
    assert result.text == "[]"


def test_replace_unterminated_paren_is_not_closed():
    args = vector("me", whole="me", rest="")
    assert arguments_replace("($0", args).text == "(me"
    assert arguments_replace("($0)", args).text == "(me)"
