from morsekey.timing import TimingProfile
import re

WORD_SEPARATOR_PATTERN = re.compile(r' *\/[ \/]*')

class Symbol:
    """ The two Morse symbols; their values are the characters used in Morse code strings. """
    DOT = '.'
    DASH = '-'

def classify(duration_ms: float, profile: TimingProfile) -> str:
    """ Classifies a signal of the given duration into a dot or a dash. Signals shorter than the dot threshold of the
        given timing profile are dots; everything else, including signals exactly as long as the threshold, are dashes.
        """
    return Symbol.DOT if duration_ms < profile.dot_threshold_ms else Symbol.DASH

# Latin letters and digits in breadth-first order of the binary Morse tree (left child: dot, right child: dash); `#`
# marks nodes that have no letter or digit assigned
LATIN_MORSE_TREE_LINEARIZED = 'etianmsurwdkgohvf#l#pjbxcyzq##54#3###2#######16#######7###8#90'

def build_symbol_mapping_from_linearized_tree(in_symbols: list[str] | str,
                                              out_symbols: list[str] | str) -> dict[str, str]:
    """ Builds and returns a symbol mapping from the given `in_symbols` to the given `out_symbols`. `in_symbols` lists
        the nodes of a full `m`-ary tree layer by layer (excluding the root), where `m` is the number of `out_symbols`.
        The code of a node is the path from the root, i.e. its position within its layer written in base `m` with as
        many digits as the layer is deep. """
    assert len(out_symbols) >= 2, "out_symbols must contain at least 2 symbols"
    base = len(out_symbols)
    result = {}
    layer = 1
    layer_start = 0
    for index, letter in enumerate(in_symbols):
        if index - layer_start >= base ** layer:
            layer_start += base ** layer
            layer += 1
        if letter in {'', '#'}:
            continue
        position = index - layer_start
        code = ''
        for _ in range(layer):
            code = out_symbols[position % base] + code
            position //= base
        result[letter.upper()] = code
    return result

LATIN_TO_MORSE = build_symbol_mapping_from_linearized_tree(LATIN_MORSE_TREE_LINEARIZED, [Symbol.DOT, Symbol.DASH])
MORSE_TO_LATIN = { v: k for k, v in LATIN_TO_MORSE.items() }

def lookup(sequence: str) -> str | None:
    """ Returns the character for the given symbol sequence or `None` if there is none. """
    return MORSE_TO_LATIN.get(sequence)

def text_to_morse(text: str, word_separator: str = ' / ') -> str:
    """ Encodes the given text into a Morse code string. Characters are separated by single spaces, words by
        `word_separator`. Characters without a Morse code are skipped. """
    words = []
    for word in text.upper().split():
        codes = [LATIN_TO_MORSE[char] for char in word if char in LATIN_TO_MORSE]
        if codes:
            words.append(' '.join(codes))
    return word_separator.join(words)

def morse_to_text(code: str) -> str:
    """ Decodes the given Morse code string; characters are separated by spaces, words by slashes. Sequences without a
        character are skipped, just as the decoder does when it commits them. """
    text = ''
    words = WORD_SEPARATOR_PATTERN.split(code.strip())
    for index, word in enumerate(words):
        if index > 0:
            text += ' '
        for sequence in word.split():
            text += MORSE_TO_LATIN.get(sequence, '')
    return text
