from .errors import WordleError, InvalidWord, InvalidPattern, UnknownAnswer, InternalInconsistency
from .words import WORD_LENGTH, is_valid_word, validate_word, validate_guess
from .scoring import (
    LetterRule,
    Pattern,
    ALL_CORRECT,
    feedback,
    parse_pattern,
    pattern_to_int,
    int_to_pattern,
    pattern_to_string,
    pattern_to_digits,
    all_patterns,
    is_solved,
)
from .constraints import CandidatePool, load_pool, letter_bounds, reduce, reduce_brute_force, filter_candidates

__all__ = [
    "WordleError", "InvalidWord", "InvalidPattern", "UnknownAnswer", "InternalInconsistency",
    "WORD_LENGTH", "is_valid_word", "validate_word", "validate_guess",
    "LetterRule", "Pattern", "ALL_CORRECT", "feedback", "parse_pattern", "pattern_to_int",
    "int_to_pattern", "pattern_to_string", "pattern_to_digits", "all_patterns", "is_solved",
    "CandidatePool", "load_pool", "letter_bounds", "reduce", "reduce_brute_force", "filter_candidates",
]
