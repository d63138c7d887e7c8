from morsekey.events import DecodeUpdate, ProgressStage, ProgressUpdate
from morsekey.printers import ProgressPrinter, TextPrinter
from morsekey.utils import Color, TextCase
from typing import get_type_hints, TextIO
import io
import unittest

class TextPrinterTests(unittest.TestCase):
    def test_output_device_annotation(self):
        self.assertIs(TextIO, get_type_hints(TextPrinter.__init__)['output_device'])
        self.assertIs(TextIO, get_type_hints(ProgressPrinter.__init__)['output_device'])

    def test_receive(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output)
        printer.receive(DecodeUpdate('', '.', 'E'))
        self.assertEqual('', output.getvalue())
        printer.receive(DecodeUpdate('e', '', ''))
        self.assertEqual('E', output.getvalue())
        printer.receive(DecodeUpdate('e ', '', ''))
        self.assertEqual('E ', output.getvalue())

        # Test that a cleared text starts a new line
        printer.receive(DecodeUpdate('', '', ''))
        self.assertEqual('E \n', output.getvalue())
        printer.receive(DecodeUpdate('T', '', ''))
        self.assertEqual('E \nT', output.getvalue())

    def test_ignores_other_data(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output)
        printer.receive(ProgressUpdate(50, ProgressStage.CHAR_LOCK))
        printer.receive('E')
        self.assertEqual('', output.getvalue())

    def test_sentence_case(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output, text_case = TextCase.SENTENCE)
        for text in ['H', 'HI', 'HI.', 'HI. ', 'HI. O', 'HI. OK']:
            printer.receive(DecodeUpdate(text, '', ''))
        self.assertEqual('Hi. Ok', output.getvalue())

    def test_set_text_case(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output)
        self.assertEqual(TextCase.UPPER, printer.text_case())
        printer.set_text_case(TextCase.LOWER)
        self.assertEqual(TextCase.LOWER, printer.text_case())
        printer.receive(DecodeUpdate('SOS', '', ''))
        self.assertEqual('sos', output.getvalue())

    def test_show_pending(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output, show_pending = True)
        printer.receive(DecodeUpdate('E', '.-', 'A'))
        self.assertEqual('\r\x1b[2KE .- (A)', output.getvalue())

        output.truncate(0)
        output.seek(0)
        printer.receive(DecodeUpdate('E', '......', ''))
        self.assertEqual('\r\x1b[2KE ......', output.getvalue())

    def test_color(self):
        output = io.StringIO()
        printer = TextPrinter(output_device = output)
        printer.set_color(Color.RED)
        printer.receive(DecodeUpdate('E', '', ''))
        self.assertEqual('\x1b[31mE\x1b[0m', output.getvalue())

class ProgressPrinterTests(unittest.TestCase):
    def test_bar(self):
        printer = ProgressPrinter(output_device = io.StringIO(), width = 10)
        self.assertEqual('[#####     ] char-lock 50%', printer.bar(ProgressUpdate(50, ProgressStage.CHAR_LOCK)))
        self.assertEqual('[==        ] word-gap 20%', printer.bar(ProgressUpdate(20, ProgressStage.WORD_GAP)))
        self.assertEqual('[==========] done 100%', printer.bar(ProgressUpdate(100, ProgressStage.DONE)))
        self.assertEqual('[          ] reset 0%', printer.bar(ProgressUpdate(0, ProgressStage.RESET)))

    def test_receive_stage_changes(self):
        output = io.StringIO()
        printer = ProgressPrinter(output_device = output, width = 10)
        for update in [ProgressUpdate(10, ProgressStage.CHAR_LOCK), ProgressUpdate(50, ProgressStage.CHAR_LOCK),
                       ProgressUpdate(10, ProgressStage.WORD_GAP), ProgressUpdate(100, ProgressStage.DONE)]:
            printer.receive(update)
        self.assertEqual(['[#         ] char-lock 10%', '[=         ] word-gap 10%', '[==========] done 100%'],
                         output.getvalue().splitlines())

    def test_receive_redraw(self):
        output = io.StringIO()
        printer = ProgressPrinter(output_device = output, width = 10, redraw = True)
        printer.receive(ProgressUpdate(10, ProgressStage.CHAR_LOCK))
        printer.receive(ProgressUpdate(50, ProgressStage.CHAR_LOCK))
        self.assertEqual('\r\x1b[2K[#         ] char-lock 10%\r\x1b[2K[#####     ] char-lock 50%', output.getvalue())
