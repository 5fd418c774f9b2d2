"""
wordle_turns: expected-turn analysis for five-letter Wordle.

- engine:   feedback, pattern parsing, candidate pool reduction
- scorer:   parallel expected-reduction guess scoring
- harness:  playout simulator and exact branch-and-bound search
- datasets: word-list loading and validation
"""

__version__ = "1.0.0"
