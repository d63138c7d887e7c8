from morsekey.countdown import DEFAULT_TICK_MS
from morsekey.decoder import DEFAULT_WPM, KeyInput, MorseDecoder
from morsekey.playback import PlaybackEngine
from morsekey.schedule import Scheduler
from morsekey.tone import ToneDriver
import time

class MorseSession:
    """ Owns everything one keying session needs: the clock, the decoder with its timing profile and timers, the
        playback engine and the tone driver shared by key input and playback.

        Key events go through `press()` and `release()`; they switch the tone and feed the decoder. Playback runs on
        the same clock but never touches the decoder. Time passes by calling `advance()` (virtual) or `wait()` (virtual
        or along with the wall clock). """
    def __init__(self, wpm: int | float = DEFAULT_WPM, tone: ToneDriver = None, scheduler: Scheduler = None,
                 tick_ms: float = DEFAULT_TICK_MS):
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._tick_ms = tick_ms
        self._decoder = MorseDecoder(self._scheduler, wpm = wpm, tick_ms = tick_ms)
        self._tone = tone if tone is not None else ToneDriver()
        self._playback = PlaybackEngine(self._tone, self._decoder.profile)
        self._key_input = KeyInput(self._on_press, self._on_release)

    def scheduler(self) -> Scheduler:
        return self._scheduler

    def decoder(self) -> MorseDecoder:
        return self._decoder

    def playback(self) -> PlaybackEngine:
        return self._playback

    def tone(self) -> ToneDriver:
        return self._tone

    def now(self) -> float:
        return self._scheduler.now()

    def press(self) -> bool:
        return self._key_input.press()

    def release(self) -> bool:
        return self._key_input.release()

    def _on_press(self):
        self._tone.activate()
        self._decoder.start_signal()

    def _on_release(self):
        self._tone.deactivate()
        self._decoder.end_signal()

    def set_wpm(self, wpm: int | float):
        self._decoder.set_wpm(wpm)

    def clear(self):
        self._decoder.clear()

    def play(self, sequence: str) -> bool:
        return self._playback.play(sequence)

    def cancel_playback(self):
        self._playback.cancel()

    def advance(self, duration_ms: float):
        """ Moves the clock forward by `duration_ms`. The playback engine is advanced in steps that end exactly at its
            transitions, so that tone changes happen at the right clock time. """
        target_ms = self._scheduler.now() + max(duration_ms, 0)
        while (step_ms := self._playback.time_to_next_transition()) is not None and \
                self._scheduler.now() + step_ms <= target_ms:
            self._scheduler.advance(step_ms)
            self._playback.advance(step_ms)
        remaining_ms = target_ms - self._scheduler.now()
        self._scheduler.advance(remaining_ms)
        self._playback.advance(remaining_ms)

    def wait(self, duration_ms: float, realtime: bool = False):
        """ Lets `duration_ms` pass. In real time the clock follows the wall clock in steps of one tick. """
        if not realtime:
            self.advance(duration_ms)
            return
        start = time.perf_counter()
        start_ms = self._scheduler.now()
        while (elapsed_ms := (time.perf_counter() - start) * 1000) < duration_ms:
            self.advance(start_ms + elapsed_ms - self._scheduler.now())
            time.sleep(min(self._tick_ms, duration_ms - elapsed_ms) / 1000)
        self.advance(start_ms + duration_ms - self._scheduler.now())

    def run_until_idle(self, realtime: bool = False):
        """ Lets time pass until the playback has finished and the decoder has no commit pending anymore. """
        while self._playback.is_playing():
            self.wait(self._playback.remaining_ms(), realtime = realtime)
        while (next_due := self._scheduler.next_due()) is not None:
            self.wait(next_due - self._scheduler.now(), realtime = realtime)
