from typing import TextIO
from morsekey.events import DecodeUpdate, ProgressStage, ProgressUpdate
from morsekey.streams import StreamReceiver
from morsekey.utils import apply_text_case, color_to_ansi_escape, TextCase
import sys

class TextPrinter(StreamReceiver):
    """ A simple printer class that implements a stream receiver and prints decoded text to the specified output device,
        standard output by default. Only the text committed since the last update is written; when the decoded text gets
        cleared a new line is started. With `show_pending` the line is redrawn on every update and also shows the
        pending sequence and its preview. """
    def __init__(self, output_device: TextIO = sys.stdout, text_case: TextCase = TextCase.UPPER,
                 show_pending: bool = False, flush_after_receive: bool = True):
        super().__init__()
        self._output_device = output_device
        self._text_case = text_case
        self._show_pending = show_pending
        self._flush_after_receive = flush_after_receive
        self._printed_text = ''
        self._color_escape = ''

    def set_color(self, color: int | str):
        escape = color_to_ansi_escape(color, foreground = True)
        self._color_escape = escape if escape is not None else ''

    def text_case(self):
        return self._text_case

    def set_text_case(self, text_case: TextCase):
        self._text_case = text_case

    def receive(self, data: DecodeUpdate):
        if self._output_device is None or not isinstance(data, DecodeUpdate):
            return

        text = data.decoded_text
        if self._show_pending:
            line = apply_text_case(text, self._text_case)
            if data.pending_sequence:
                line += f' {data.pending_sequence}'
                if data.preview:
                    line += f' ({data.preview})'
            self._output_device.write(f'\r\x1b[2K{self._color_escape}{line}')
            if self._color_escape:
                self._output_device.write('\x1b[0m')
        elif text.startswith(self._printed_text):
            added = apply_text_case(text, self._text_case)[len(self._printed_text):]
            if added:
                self._output_device.write(f'{self._color_escape}{added}')
                if self._color_escape:
                    self._output_device.write('\x1b[0m')
        else:
            # The decoded text was cleared
            self._output_device.write('\n')
            self._output_device.write(apply_text_case(text, self._text_case))

        self._printed_text = text
        if self._flush_after_receive:
            self._output_device.flush()

class ProgressPrinter(StreamReceiver):
    """ Prints the commit countdown as a bar. With `redraw` the bar is redrawn on every tick, otherwise a line is only
        written whenever the countdown enters another stage. """
    STAGE_SYMBOLS = { ProgressStage.CHAR_LOCK: '#', ProgressStage.WORD_GAP: '=', ProgressStage.DONE: '=' }

    def __init__(self, output_device: TextIO = sys.stdout, width: int = 20, redraw: bool = False):
        super().__init__()
        self._output_device = output_device
        self._width = max(width, 1)
        self._redraw = redraw
        self._last_stage = None

    def bar(self, update: ProgressUpdate) -> str:
        filled = round(update.progress / 100 * self._width)
        symbol = ProgressPrinter.STAGE_SYMBOLS.get(update.stage, ' ')
        return f'[{symbol * filled}{" " * (self._width - filled)}] {update.stage} {update.progress:.0f}%'

    def receive(self, data: ProgressUpdate):
        if self._output_device is None or not isinstance(data, ProgressUpdate):
            return
        if self._redraw:
            self._output_device.write(f'\r\x1b[2K{self.bar(data)}')
        elif data.stage != self._last_stage:
            self._output_device.write(f'{self.bar(data)}\n')
        self._last_stage = data.stage
        self._output_device.flush()
