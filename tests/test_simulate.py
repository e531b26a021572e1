import pytest

from regnfa.builder import build_nfa, compile_regex
from regnfa.errors import InvalidInput
from regnfa.regex import Chain
from regnfa.simulate import Step, accepts, check_input_alphabet, simulate


def test_concatenation_accepts_exact_word():
    result = simulate(compile_regex("ab"), "ab")
    assert result.accepted
    assert [str(s) for s in result.steps] == ["d(q1, a) -> q2", "d(q2, b) -> q3"]
    assert result.final_state == 3


def test_short_word_is_rejected():
    result = simulate(compile_regex("ab"), "a")
    assert not result.accepted
    assert len(result.steps) == 1


def test_symbol_outside_alphabet():
    with pytest.raises(InvalidInput) as exc:
        simulate(compile_regex("ab"), "ac")
    assert exc.value.symbol == "c"


def test_stuck_run_is_rejected():
    nfa, _ = build_nfa([Chain("ab")], alphabet="abc")
    result = simulate(nfa, "ac")
    assert result.stuck
    assert result.consumed == 1
    assert result.final_state == 2
    assert not result.accepted


def test_stuck_in_accept_state_is_still_rejected():
    nfa, _ = build_nfa([Chain("a")], alphabet="ab")
    result = simulate(nfa, "ab")
    assert result.final_state == 2
    assert nfa.is_accept(2)
    assert not result.accepted


def test_star_accepts_empty_word():
    result = simulate(compile_regex("(a)*"), "")
    assert result.accepted
    assert result.steps == []
    assert result.final_state == 1


def test_star_repeats_through_start_state():
    result = simulate(compile_regex("(a)*"), "aaa")
    assert result.accepted
    assert result.consumed == 3
    assert Step(2, "a", 1, free=True) in result.steps


def test_star_group_of_two_symbols():
    nfa = compile_regex("(ab)*")
    assert accepts(nfa, "abab")
    assert not accepts(nfa, "aba")
    assert not accepts(nfa, "ba")


def test_embedded_star_group_matches_zero_or_more():
    nfa = compile_regex("a(b)*")
    assert accepts(nfa, "a")
    assert accepts(nfa, "abbb")
    assert not accepts(nfa, "")

    nfa = compile_regex("(ab|c)*d")
    assert accepts(nfa, "d")
    assert accepts(nfa, "abd")
    assert accepts(nfa, "cabd")
    assert not accepts(nfa, "ab")


def test_free_return_is_found_among_outgoing_edges():
    nfa = compile_regex("(a)*")
    assert nfa.outgoing(2) == [nfa.free_return(2)]
    assert nfa.free_return(1) is None


def test_alternation():
    nfa = compile_regex("a|b")
    assert accepts(nfa, "a")
    assert accepts(nfa, "b")
    assert not accepts(nfa, "ab")
    assert not accepts(nfa, "")


def test_star_group_reentry_leaks_into_other_branches():
    # star groups restart from the shared start state
    assert accepts(compile_regex("a|(b)*"), "ba")


def test_first_matching_transition_wins():
    nfa, _ = build_nfa([Chain("ab"), Chain("ac")])
    result = simulate(nfa, "ac")
    assert result.steps == [Step(1, "a", 2)]
    assert not result.accepted


def test_free_step_text():
    assert str(Step(2, "a", 1, free=True)) == "d(q2, e) -> q1"


def test_check_input_alphabet_passes_for_valid_word():
    assert check_input_alphabet(compile_regex("a|b"), "abba") is None
