"""
Property-based tests for the word decoder and the disassembly aggregate.

Hypothesis strategies live in ``strategies``; the example counts are tuned
through ``R4300I_PROP_EXAMPLES`` / ``R4300I_PROP_NIGHTLY_EXAMPLES``.
"""
