from morsekey.timing import TimingProfile
import morsekey.morse as morse
import string
import unittest

class MorseTests(unittest.TestCase):
    def test_classify(self):
        profile = TimingProfile(20)
        self.assertEqual(morse.Symbol.DOT, morse.classify(0, profile))
        self.assertEqual(morse.Symbol.DOT, morse.classify(50, profile))
        self.assertEqual(morse.Symbol.DOT, morse.classify(119.9, profile))

        # Test that the threshold itself is classified as a dash
        self.assertEqual(morse.Symbol.DASH, morse.classify(120, profile))
        self.assertEqual(morse.Symbol.DASH, morse.classify(200, profile))
        self.assertEqual(morse.Symbol.DASH, morse.classify(5000, profile))

        for wpm in [5, 13, 20, 40]:
            with self.subTest(wpm = wpm):
                profile = TimingProfile(wpm)
                self.assertEqual(morse.Symbol.DASH, morse.classify(profile.dot_threshold_ms, profile))
                self.assertEqual(morse.Symbol.DOT, morse.classify(profile.unit_ms, profile))
                self.assertEqual(morse.Symbol.DASH, morse.classify(profile.unit_ms * 3, profile))

    def test_code_table(self):
        # Test that the table covers exactly Latin letters and digits
        self.assertEqual(36, len(morse.LATIN_TO_MORSE))
        self.assertEqual(set(string.ascii_uppercase + string.digits), set(morse.LATIN_TO_MORSE.keys()))
        self.assertEqual(36, len(morse.MORSE_TO_LATIN))

        self.assertEqual('.-', morse.LATIN_TO_MORSE['A'])
        self.assertEqual('-...', morse.LATIN_TO_MORSE['B'])
        self.assertEqual('--..', morse.LATIN_TO_MORSE['Z'])
        self.assertEqual('.....', morse.LATIN_TO_MORSE['5'])
        self.assertEqual('-----', morse.LATIN_TO_MORSE['0'])
        self.assertEqual('----.', morse.LATIN_TO_MORSE['9'])
        self.assertEqual('.----', morse.LATIN_TO_MORSE['1'])

        # Test that the mapping is invertible
        for char, code in morse.LATIN_TO_MORSE.items():
            self.assertEqual(char, morse.MORSE_TO_LATIN[code])

    def test_lookup(self):
        self.assertEqual('E', morse.lookup('.'))
        self.assertEqual('S', morse.lookup('...'))
        self.assertEqual(None, morse.lookup('..--..'))
        self.assertEqual(None, morse.lookup(''))

    def test_build_symbol_mapping_from_linearized_tree(self):
        expected = { 'A': '00', 'B': '01', 'C': '10', 'D': '11', 'E': '0', 'F': '1' }
        actual = morse.build_symbol_mapping_from_linearized_tree('efabcd', ['0', '1'])
        self.assertEqual(expected, actual)

        # Test that unassigned nodes are skipped
        expected = { 'X': '1', 'Y': '01' }
        actual = morse.build_symbol_mapping_from_linearized_tree('#x#y##', ['0', '1'])
        self.assertEqual(expected, actual)

        expected = { 'A': 'a', 'B': 'b', 'C': 'c', 'D': 'aa', 'E': 'cc' }
        actual = morse.build_symbol_mapping_from_linearized_tree('abcd#######e', ['a', 'b', 'c'])
        self.assertEqual(expected, actual)

    def test_text_to_morse(self):
        self.assertEqual("... --- ...", morse.text_to_morse("SOS"))
        self.assertEqual("-.-. --.- / -.. -..-", morse.text_to_morse("cq dx"))
        self.assertEqual("-.-. --.- -.. -..-", morse.text_to_morse("CQ DX", word_separator = ' '))

        # Test that characters without Morse code are skipped
        self.assertEqual("... --- ...", morse.text_to_morse("S!O?S"))
        self.assertEqual("", morse.text_to_morse("?!"))

    def test_morse_to_text(self):
        self.assertEqual("SOS TITANIC", morse.morse_to_text("... --- ... / - .. - .- -. .. -.-."))
        self.assertEqual("SOS", morse.morse_to_text(" ...  --- ... "))
        self.assertEqual("AB", morse.morse_to_text(".- ..--.. -..."))
        self.assertEqual("", morse.morse_to_text(""))
