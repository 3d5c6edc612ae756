import pytest

from modules.suggestions.fingerprint import fingerprint, fingerprint_key, rolling_hash


class TestRollingHash:
    def test_known_values(self):
        assert rolling_hash("") == 0
        assert rolling_hash("a") == 97
        assert rolling_hash("hello") == 99162322

    def test_wraps_to_signed_32_bits_then_takes_absolute_value(self):
        # This string wraps to exactly -2**31
        assert rolling_hash("polygenelubricants") == 2**31


class TestFingerprintKey:
    def test_sorted_unique_tokens_without_separator(self):
        assert fingerprint_key("printer broken", "fix printer") == "brokenfixprinter"

    def test_strips_punctuation_and_case(self):
        assert fingerprint_key("Printer Broken!!", "Fix Printer") == "brokenfixprinter"

    def test_keeps_only_first_ten_tokens(self):
        words = [f"w{i:02d}" for i in range(15)]
        key = fingerprint_key(" ".join(words), "zzz")
        assert key == "".join(words[:10])


class TestFingerprint:
    def test_renders_lowercase_hex(self):
        assert fingerprint("Hello", "") == "5e918d2"

    def test_printer_texts_match(self):
        assert fingerprint("printer broken", "fix printer") == fingerprint(
            "Printer Broken!!", "Fix Printer"
        )

    def test_word_order_and_duplicates_do_not_matter(self):
        assert fingerprint("b a c", "a a a") == fingerprint("c b", "a")

    def test_words_beyond_the_tenth_are_ignored(self):
        base = " ".join(f"w{i:02d}" for i in range(10))
        assert fingerprint(base, "zzz") == fingerprint(base, "zzzz")

    def test_empty_input(self):
        assert fingerprint("", "") == "0"

    @pytest.mark.parametrize("problem,solution", [
        ("printer broken", "fix printer"),
        ("The door is stuck", "Oil the hinges"),
    ])
    def test_is_deterministic(self, problem, solution):
        assert fingerprint(problem, solution) == fingerprint(problem, solution)

    def test_different_texts_usually_differ(self):
        assert fingerprint("printer broken", "fix printer") != fingerprint("door stuck", "oil hinges")
