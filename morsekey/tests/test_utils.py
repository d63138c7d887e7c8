from morsekey.utils import TextCase
import morsekey.utils as utils
import unittest

class UtilsTests(unittest.TestCase):
    def test_hexcolor_to_rgb(self):
        expected = (255, 192, 128)
        actual = utils.hexcolor_to_rgb('#ffc080')
        self.assertEqual(expected, actual)
        actual = utils.hexcolor_to_rgb('ffc080')
        self.assertEqual(expected, actual)

        expected = (255, 204, 153)
        actual = utils.hexcolor_to_rgb('#fc9')
        self.assertEqual(expected, actual)

    def test_hexcolor_to_ansi_escape_24bit(self):
        expected = '\x1b[38;2;255;192;128m'
        actual = utils.hexcolor_to_ansi_escape_24bit('#ffc080', foreground = True)
        self.assertEqual(expected, actual)

        expected = '\x1b[48;2;0;0;0m'
        actual = utils.hexcolor_to_ansi_escape_24bit('000', foreground = False)
        self.assertEqual(expected, actual)

    def test_color_to_ansi_escape(self):
        self.assertEqual('\x1b[32m', utils.color_to_ansi_escape(utils.Color.GREEN))
        self.assertEqual('\x1b[47m', utils.color_to_ansi_escape('7', foreground = False))
        self.assertEqual('\x1b[38;5;123m', utils.color_to_ansi_escape(123))
        self.assertEqual('\x1b[38;2;1;2;3m', utils.color_to_ansi_escape((1, 2, 3)))
        self.assertEqual('\x1b[38;2;255;0;64m', utils.color_to_ansi_escape('300, 0, 64'))
        self.assertEqual('\x1b[38;2;255;204;153m', utils.color_to_ansi_escape('#fc9'))
        self.assertEqual('\x1b[1m', utils.color_to_ansi_escape('\x1b[1m'))

        # Test that None is returned for anything that is not a color
        self.assertEqual(None, utils.color_to_ansi_escape(8))
        self.assertEqual(None, utils.color_to_ansi_escape(256))
        self.assertEqual(None, utils.color_to_ansi_escape('a,b,c'))
        self.assertEqual(None, utils.color_to_ansi_escape('#ff5f5'))

    def test_clamp(self):
        self.assertEqual(1, utils.clamp(0, 1, 60))
        self.assertEqual(60, utils.clamp(61, 1, 60))
        self.assertEqual(20.5, utils.clamp(20.5, 1, 60))

    def test_apply_text_case(self):
        text = 'hELLO WORLD. sos. 73'
        self.assertEqual('HELLO WORLD. SOS. 73', utils.apply_text_case(text, TextCase.UPPER))
        self.assertEqual('hello world. sos. 73', utils.apply_text_case(text, TextCase.LOWER))
        self.assertEqual('Hello world. Sos. 73', utils.apply_text_case(text, TextCase.SENTENCE))
        self.assertEqual(text, utils.apply_text_case(text, TextCase.NONE))

    def test_preprocess_input_code(self):
        self.assertEqual('.- -...', utils.preprocess_input_code(' .-  / -... '))
        self.assertEqual('... --- ...', utils.preprocess_input_code('...   ---  ...'))
        self.assertEqual('', utils.preprocess_input_code(' / '))

    def test_preprocess_input_text(self):
        self.assertEqual('STRASSE 1', utils.preprocess_input_text('Straße 1'))

    def test_dual_split(self):
        self.assertEqual(['wav', 'out.wav'], utils.dual_split('wav:out.wav', ':'))
        self.assertEqual(['wav', 'a:b'], utils.dual_split('wav:a:b', ':'))
        self.assertEqual(['text', None], utils.dual_split('text', ':'))
