from morsekey.countdown import Countdown, DEFAULT_TICK_MS
from morsekey.errors import ProtocolViolation
from morsekey.events import DecodeUpdate
from morsekey.morse import classify, lookup
from morsekey.schedule import Scheduler
from morsekey.streams import Stream
from morsekey.timing import TimingProfile
import logging

logger = logging.getLogger(__name__)

DEFAULT_WPM = 20

class MorseDecoder:
    """ Decodes Morse code from key signals. Every signal end appends a dot or a dash to the pending sequence; once the
        key stays up for a character gap, the pending sequence is committed to the decoded text, and once it stays up for
        a word gap, a space follows. A new signal start interrupts both pending commits.

        Updates are sent on the decode stream (`DecodeUpdate`) and the progress stream (`ProgressUpdate`). """
    COMMIT_ACTION_NAME = 'commit-character'
    WORD_SPACE_ACTION_NAME = 'word-space'

    def __init__(self, scheduler: Scheduler, wpm: int | float = DEFAULT_WPM, tick_ms: float = DEFAULT_TICK_MS):
        self._scheduler = scheduler
        self._profile = TimingProfile(wpm)
        self._countdown = Countdown(scheduler, tick_ms = tick_ms)
        self._decode_stream = Stream()
        self._decoded_text = ''
        self._pending_sequence = ''
        self._signal_start_ms = None

    def decode_stream(self) -> Stream:
        return self._decode_stream

    def progress_stream(self) -> Stream:
        return self._countdown.progress_stream()

    def countdown(self) -> Countdown:
        return self._countdown

    def profile(self) -> TimingProfile:
        return self._profile

    def wpm(self) -> float:
        return self._profile.wpm

    def set_wpm(self, wpm: int | float):
        """ Changes the speed for all signals and timers to come; timers already running keep their durations. Raises
            `InvalidConfiguration` and keeps the current speed if `wpm` is not a positive finite number. """
        self._profile = TimingProfile(wpm)
        logger.debug(f"Speed set to {self._profile}")

    def decoded_text(self) -> str:
        return self._decoded_text

    def pending_sequence(self) -> str:
        return self._pending_sequence

    def preview(self) -> str:
        return lookup(self._pending_sequence) or ''

    def is_signaling(self) -> bool:
        return self._signal_start_ms is not None

    def start_signal(self):
        self._signal_start_ms = self._scheduler.now()
        self._scheduler.cancel(MorseDecoder.COMMIT_ACTION_NAME)
        self._scheduler.cancel(MorseDecoder.WORD_SPACE_ACTION_NAME)
        self._countdown.reset()

    def end_signal(self):
        if self._signal_start_ms is None:
            raise ProtocolViolation("signal ended without having started")

        duration_ms = self._scheduler.now() - self._signal_start_ms
        self._signal_start_ms = None

        symbol = classify(duration_ms, self._profile)
        self._pending_sequence += symbol
        logger.debug(f"Signal of {duration_ms:.1f}ms classified as '{symbol}', pending '{self._pending_sequence}'")

        self._send_update(self.preview())
        self._countdown.start(self._profile)
        self._scheduler.schedule(MorseDecoder.COMMIT_ACTION_NAME, self._profile.char_gap_ms, self.commit_character)

    def commit_character(self):
        """ Commits the pending sequence to the decoded text. Sequences without a character are dropped silently. """
        if char := lookup(self._pending_sequence):
            self._decoded_text += char
            logger.debug(f"Committed '{self._pending_sequence}' as '{char}'")
        elif self._pending_sequence:
            logger.debug(f"Discarded unknown sequence '{self._pending_sequence}'")
        self._pending_sequence = ''
        self._send_update()

        word_delay_ms = self._profile.word_gap_ms - self._profile.char_gap_ms
        self._scheduler.schedule(MorseDecoder.WORD_SPACE_ACTION_NAME, word_delay_ms, self._append_word_space)

    def _append_word_space(self):
        self._decoded_text += ' '
        logger.debug("Appended word space")
        self._send_update()

    def clear(self):
        self._decoded_text = ''
        self._pending_sequence = ''
        self._scheduler.cancel(MorseDecoder.COMMIT_ACTION_NAME)
        self._scheduler.cancel(MorseDecoder.WORD_SPACE_ACTION_NAME)
        self._send_update()
        self._countdown.reset()

    def _send_update(self, preview: str = ''):
        self._decode_stream.send(DecodeUpdate(self._decoded_text, self._pending_sequence, preview))

class KeyInput:
    """ Turns raw key-down and key-up events of a keyboard, pointer or touch source into signal starts and ends.
        Repeated key-down events without a key-up in between (e.g. keyboard auto-repeat) and key-up events without a
        preceding key-down are ignored. """
    def __init__(self, on_press, on_release):
        self._on_press = on_press
        self._on_release = on_release
        self._is_down = False

    def is_down(self) -> bool:
        return self._is_down

    def press(self) -> bool:
        """ Returns `True` if the event was passed on. """
        if self._is_down:
            return False
        self._is_down = True
        self._on_press()
        return True

    def release(self) -> bool:
        """ Returns `True` if the event was passed on. """
        if not self._is_down:
            return False
        self._is_down = False
        self._on_release()
        return True
