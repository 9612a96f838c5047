# textmark/normalizer/text_normalizer.py
# Responsibility: Comparable (case-folded, accent-stripped) form of a string, with a map back to original offsets.

import unicodedata
from dataclasses import dataclass
from typing import List, Tuple

from unidecode import unidecode


@dataclass(frozen=True)
class CodepointSpan:
    """
    A (start, length) range over the codepoints of an original string.
    """
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class NormalizedString:
    """
    Normalized text plus, for every normalized character, the index of the
    original character it came from.

    position_map is non-decreasing and has one entry per character of text.
    Several normalized characters may share one original index (e.g. 'ß' -> 'ss').
    """
    original: str
    text: str
    position_map: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.text)

    def to_original(self, start: int, length: int) -> CodepointSpan:
        """
        Maps a normalized range back to the original string.

        The resulting span covers whole original characters and swallows any
        combining marks trailing the last matched base character, so markup
        inserted around it never separates a letter from its accent.
        """
        if length <= 0 or start >= len(self.position_map):
            return CodepointSpan(start=self._original_index(start), length=0)

        orig_start = self.position_map[start]
        orig_end = self.position_map[start + length - 1] + 1
        while orig_end < len(self.original) and unicodedata.category(self.original[orig_end]) == "Mn":
            orig_end += 1

        return CodepointSpan(start=orig_start, length=orig_end - orig_start)

    def _original_index(self, start: int) -> int:
        if start < len(self.position_map):
            return self.position_map[start]
        return len(self.original)


class TextNormalizer:
    """
    Builds comparison forms of strings.

    Steps, per original codepoint:
    1. NFKD decomposition: splits accents from base letters, unifies full-width/ligature forms.
    2. Mark stripping: drops combining marks (category 'Mn').
    3. Latin transliteration: remaining non-ASCII Latin letters go to ASCII ('ø' -> 'o', 'æ' -> 'ae').
    4. Case folding.
    Steps 1-4 repeat until the output stops changing.

    Whitespace runs collapse into a single space.
    """

    MAX_FOLD_PASSES = 8

    @staticmethod
    def build(text: str) -> NormalizedString:
        """
        Normalizes text and records the original index of every output character.

        Args:
            text (str): Original text.

        Returns:
            NormalizedString: Normalized text with its position map.
        """
        if not text:
            return NormalizedString(original="", text="", position_map=())

        chars: List[str] = []
        positions: List[int] = []
        prev_space = False

        for index, ch in enumerate(text):
            # Spacing accents ('¨', '´') fold to whitespace too
            for folded in TextNormalizer.fold_char(ch):
                if folded.isspace():
                    if prev_space:
                        continue
                    folded = " "
                    prev_space = True
                else:
                    prev_space = False

                chars.append(folded)
                positions.append(index)

        return NormalizedString(original=text, text="".join(chars), position_map=tuple(positions))

    @staticmethod
    def fold_char(ch: str) -> str:
        """
        Comparison form of a single codepoint. Empty for a bare combining mark.

        Repeated until stable: casefold can reintroduce marks ('İ' -> 'i̇') or
        turn a letter Unidecode leaves alone into one it maps ('Ɑ' -> 'ɑ' -> 'a').
        """
        folded = ch
        for _ in range(TextNormalizer.MAX_FOLD_PASSES):
            step = TextNormalizer._strip_marks(folded)
            step = "".join(TextNormalizer._transliterate(c) for c in step)
            step = TextNormalizer._strip_marks(step.casefold())
            if step == folded:
                break
            folded = step
        return folded

    @staticmethod
    def _strip_marks(text: str) -> str:
        decomposed = unicodedata.normalize("NFKD", text)
        return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")

    @staticmethod
    def _transliterate(ch: str) -> str:
        if ch.isascii() or not ch.isalpha():
            return ch
        if "LATIN" not in unicodedata.name(ch, ""):
            return ch

        ascii_form = unidecode(ch)
        if ascii_form and ascii_form.isalnum():
            return ascii_form
        return ch


def normalize(text: str) -> str:
    """
    Normalizes text for case- and accent-insensitive comparison.

    normalize(normalize(s)) == normalize(s) for every s.

    Args:
        text (str): Raw text.

    Returns:
        str: The comparison form.
    """
    if not text:
        return ""
    return TextNormalizer.build(text).text


def normalize_query(query: str) -> str:
    """
    Normalizes a search term: same as normalize(), trimmed.

    Args:
        query (str): The raw needle.

    Returns:
        str: The normalized needle, "" for blank input.
    """
    if not query:
        return ""
    return normalize(query).strip()
